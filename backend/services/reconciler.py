"""Field Reconciler: merges partial profiles into the canonical JobDraft.

Merge rules:
    - An empty incoming value (None, "", [], unparsable, or a field default)
      never changes the draft.
    - An empty destination field accepts any non-empty incoming value.
    - Primary import: non-empty incoming replaces non-empty current, except
      for intake fields, which only ever fill gaps.
    - Additive mode (briefings, quick-question answers): every field only
      fills gaps; list fields are unioned.
"""

import logging
import math
import re
from typing import Any

from models.schemas.job_draft import (
    ALL_FIELDS,
    CANONICAL_FIELDS,
    ENUM_FIELDS,
    FIELD_DEFAULTS,
    INT_FIELDS,
    INTAKE_FIELDS,
    LIST_FIELDS,
    JobDraft,
)
from models.schemas.partial_profile import PartialProfile
from services.errors import ValidationFailure

logger = logging.getLogger(__name__)

_LIST_SPLIT_RE = re.compile(r"[,;\n]")
_LEADING_BULLETS_RE = re.compile(r"^[\s•\-–—*·▪►○●■□◆→]+")
_CURRENCY_RE = re.compile(r"[€$£]|\b(?:eur|euro|usd|gbp|chf)\b", re.IGNORECASE)
_RANGE_RE = re.compile(r"^(.+?)\s*(?:-|–|—|\bto\b|\bbis\b)\s*(.+)$", re.IGNORECASE)
_NUMBER_RE = re.compile(
    r"(\d{1,3}(?:[.,' ]\d{3})+|\d+)(?:[.,](\d+))?\s*(k)?\s*\+?",
    re.IGNORECASE,
)

# Synonyms seen in LLM output (English and German postings)
_ENUM_SYNONYMS: dict[str, dict[str, str]] = {
    "remote_type": {
        "onsite": "onsite", "on-site": "onsite", "on site": "onsite",
        "office": "onsite", "in-office": "onsite", "vor ort": "onsite",
        "hybrid": "hybrid", "hybrid remote": "hybrid", "teilweise remote": "hybrid",
        "remote": "remote", "fully remote": "remote", "full remote": "remote",
        "remote-first": "remote", "home office": "remote",
    },
    "employment_type": {
        "full-time": "full-time", "full time": "full-time", "fulltime": "full-time",
        "vollzeit": "full-time", "permanent": "full-time",
        "part-time": "part-time", "part time": "part-time", "teilzeit": "part-time",
        "contract": "contract", "contractor": "contract", "temporary": "contract",
        "befristet": "contract",
        "freelance": "freelance", "freelancer": "freelance", "freiberuflich": "freelance",
    },
    "experience_level": {
        "junior": "junior", "entry": "junior", "entry-level": "junior", "graduate": "junior",
        "mid": "mid", "mid-level": "mid", "intermediate": "mid", "professional": "mid",
        "senior": "senior", "sr": "senior",
        "lead": "lead", "principal": "lead", "staff": "lead", "head": "lead",
    },
    "hiring_urgency": {
        "standard": "standard", "normal": "standard",
        "urgent": "urgent", "dringend": "urgent",
        "asap": "ASAP", "hot": "ASAP", "immediate": "ASAP", "sofort": "ASAP",
    },
}


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    return False


def is_unset(field: str, value: Any) -> bool:
    """True when a field is empty or still holds its default."""
    return is_empty(value) or FIELD_DEFAULTS.get(field) == value


def normalize_list(value: Any) -> list[str]:
    """Normalize a comma-separated string or array into trimmed, non-empty strings.

    Order is kept and duplicates are not removed. Idempotent.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: list[Any] = _LIST_SPLIT_RE.split(value)
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        items = [value]

    result = []
    for item in items:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            continue
        cleaned = _LEADING_BULLETS_RE.sub("", str(item)).strip()
        if cleaned:
            result.append(cleaned)
    return result


def parse_int(value: Any) -> int | None:
    """Parse a non-negative integer from numeric or string input.

    Accepts "80000", "80.000", "80,000 €", "80k", "3+", and ranges such as
    "1-3" (lower bound). Returns None for anything else.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value < 0:
            return None
        return int(round(value))
    if not isinstance(value, str):
        return None

    text = _CURRENCY_RE.sub("", value).strip()
    range_match = _RANGE_RE.match(text)
    if range_match:
        text = range_match.group(1).strip()

    m = _NUMBER_RE.fullmatch(text)
    if not m:
        return None
    whole = re.sub(r"[.,' ]", "", m.group(1))
    number = float(f"{whole}.{m.group(2)}") if m.group(2) else float(whole)
    if m.group(3):
        number *= 1000
    return int(round(number))


def coerce_enum(field: str, value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    key = value.strip().lower().replace("_", "-")
    synonyms = _ENUM_SYNONYMS[field]
    return (
        synonyms.get(key)
        or synonyms.get(key.replace("-", " "))
        or synonyms.get(key.replace(" ", "-"))
    )


def coerce_field(field: str, value: Any) -> Any:
    """Coerce a raw value into the JobDraft type for ``field``.

    Unparsable values come back as None (or [] for list fields).
    """
    if field in LIST_FIELDS:
        return normalize_list(value)
    if field in INT_FIELDS:
        return parse_int(value)
    if field in ENUM_FIELDS:
        return coerce_enum(field, value)
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (list, tuple)):
        return "\n".join(normalize_list(value)) or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _union(existing: list[str], incoming: list[str]) -> list[str]:
    seen = {item.lower() for item in existing}
    merged = list(existing)
    for item in incoming:
        if item.lower() not in seen:
            merged.append(item)
            seen.add(item.lower())
    return merged


def count_filled(draft: JobDraft) -> int:
    """Number of canonical fields populated in the draft."""
    return sum(1 for f in CANONICAL_FIELDS if not is_unset(f, getattr(draft, f)))


def reconcile(
    current: JobDraft,
    incoming: PartialProfile,
    additive: bool = False,
) -> tuple[JobDraft, int]:
    """Merge ``incoming`` into ``current``. Returns (new draft, filled field count)."""
    data = current.model_dump()

    for field in ALL_FIELDS:
        value = coerce_field(field, getattr(incoming, field, None))
        if is_unset(field, value):
            continue

        existing = data[field]
        if is_unset(field, existing):
            data[field] = value
        elif additive:
            if field in LIST_FIELDS:
                data[field] = _union(existing, value)
        elif field not in INTAKE_FIELDS:
            data[field] = value

    draft = JobDraft(**data)
    return draft, count_filled(draft)


def populated_fields(profile: PartialProfile) -> list[str]:
    """Fields of a partial profile that would survive coercion."""
    return [
        f for f in ALL_FIELDS
        if not is_unset(f, coerce_field(f, getattr(profile, f, None)))
    ]


def apply_user_edits(draft: JobDraft, changes: dict[str, Any]) -> tuple[JobDraft, list[str]]:
    """Apply values typed by the user. The only path allowed to overwrite or clear.

    Raises ValidationFailure when a non-empty value cannot be interpreted.
    """
    data = draft.model_dump()
    changed = []
    for field, raw in changes.items():
        if field not in data:
            raise ValidationFailure(field, f"Unknown field: {field}")

        if is_empty(raw):
            data[field] = [] if field in LIST_FIELDS else FIELD_DEFAULTS.get(field)
        else:
            value = coerce_field(field, raw)
            if is_empty(value):
                raise ValidationFailure(field, f"Could not interpret value for {field}")
            data[field] = value
        changed.append(field)

    logger.debug("User edited fields: %s", changed)
    return JobDraft(**data), changed
