"""Enrichment Augmenter: infers company/context metadata for a draft.

Local heuristics run first (industry keywords, tech-stack normalization,
urgency wording); Gemini only fills what the heuristics leave open.
Results are merged into the draft without touching any field that is
already populated or was set explicitly.
"""

import logging
import re

from config import settings
from models.schemas.enrichment_patch import COMPANY_SIZE_BANDS, EnrichmentPatch
from models.schemas.job_draft import ENRICHMENT_FIELDS, JobDraft
from services import gemini_client, prompt_builder
from services.errors import EnrichmentFailure
from services.reconciler import coerce_field, is_empty, is_unset, parse_int

logger = logging.getLogger(__name__)

INDUSTRY_KEYWORDS: dict[str, list[str]] = {
    "FinTech": ["fintech", "banking", "payment", "financial", "bank", "insurance", "versicherung"],
    "HealthTech": ["health", "medical", "healthcare", "gesundheit", "pharma", "biotech", "klinik"],
    "E-Commerce": ["ecommerce", "e-commerce", "retail", "online shop", "marketplace", "handel"],
    "Automotive": ["automotive", "vehicle", "mobility", "automobil", "fahrzeug"],
    "Technology": ["software", "saas", "cloud", "tech", "digital", "platform"],
    "EdTech": ["education", "learning", "edtech", "bildung", "university"],
    "CleanTech": ["energy", "renewable", "solar", "wind power", "sustainability", "cleantech", "energie"],
    "Consulting": ["consulting", "beratung", "advisory", "professional services"],
    "Manufacturing": ["manufacturing", "industrial", "produktion", "fertigung", "machinery"],
    "Media": ["media", "entertainment", "gaming", "medien", "streaming"],
    "Real Estate": ["real estate", "property", "proptech", "immobilien"],
    "Logistics": ["logistics", "supply chain", "shipping", "transport", "logistik"],
}

TECH_NORMALIZATIONS: dict[str, list[str]] = {
    "React": ["react", "reactjs", "react.js"],
    "Vue.js": ["vue", "vuejs", "vue.js", "vue3", "nuxt", "nuxtjs"],
    "Angular": ["angular", "angularjs", "angular.js"],
    "TypeScript": ["typescript", "ts"],
    "JavaScript": ["javascript", "js", "es6", "ecmascript"],
    "Node.js": ["node", "nodejs", "node.js", "express", "expressjs"],
    "Python": ["python", "python3", "django", "flask", "fastapi"],
    "Java": ["java", "spring", "spring boot", "springboot"],
    "AWS": ["aws", "amazon web services", "ec2", "s3", "lambda"],
    "Azure": ["azure", "microsoft azure", "azure devops"],
    "GCP": ["gcp", "google cloud", "google cloud platform", "bigquery"],
    "Docker": ["docker", "containerization"],
    "Kubernetes": ["kubernetes", "k8s", "helm", "kubectl"],
    "PostgreSQL": ["postgresql", "postgres", "psql"],
    "MySQL": ["mysql", "mariadb"],
    "MongoDB": ["mongodb", "mongo"],
    "Redis": ["redis"],
    "GraphQL": ["graphql", "apollo", "hasura"],
    "REST API": ["rest", "restful", "rest api"],
    "CI/CD": ["ci/cd", "cicd", "jenkins", "github actions", "gitlab ci"],
    "Terraform": ["terraform", "infrastructure as code"],
    ".NET": [".net", "dotnet", "c#", "csharp", "asp.net"],
    "Go": ["go", "golang"],
    "Rust": ["rust"],
    "Kafka": ["kafka", "apache kafka"],
    "Elasticsearch": ["elasticsearch", "elastic", "opensearch"],
    "Machine Learning": ["machine learning", "ml", "tensorflow", "pytorch", "keras"],
}

_URGENCY_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("ASAP", re.compile(r"\b(?:immediately|asap|ab sofort|sofort|schnellstmöglich)\b", re.IGNORECASE)),
    ("urgent", re.compile(r"\b(?:as soon as possible|earliest possible|baldmöglichst|nächstmöglichen)\b", re.IGNORECASE)),
]

_FUNDING_STAGES = ("Bootstrapped", "Seed", "Series A", "Series B", "Series C+", "Public")


def _contains_term(text: str, term: str, whole_word: bool = True) -> bool:
    suffix = r"(?!\w)" if whole_word else ""
    return re.search(rf"(?<!\w){re.escape(term)}{suffix}", text) is not None


def classify_industry(text: str) -> str | None:
    """First industry with a keyword starting a word in the text."""
    lower = text.lower()
    for industry, keywords in INDUSTRY_KEYWORDS.items():
        if any(_contains_term(lower, kw, whole_word=False) for kw in keywords):
            return industry
    return None


def _match_tech(skill: str) -> str | None:
    for canonical, variants in TECH_NORMALIZATIONS.items():
        if skill in variants:
            return canonical
    for canonical, variants in TECH_NORMALIZATIONS.items():
        if any(_contains_term(skill, v) for v in variants):
            return canonical
    return None


def normalize_tech_stack(skills: list[str]) -> list[str]:
    """Map skill spellings onto canonical technology names, keeping order.

    Unknown skills are kept with their first letter capitalized.
    """
    normalized: list[str] = []
    for skill in skills:
        cleaned = skill.strip()
        if not cleaned:
            continue
        name = _match_tech(cleaned.lower()) or cleaned[0].upper() + cleaned[1:]
        if name not in normalized:
            normalized.append(name)
    return normalized


def estimate_company_size_band(headcount: int | None) -> str | None:
    if not headcount:
        return None
    if headcount <= 50:
        return "1-50"
    if headcount <= 200:
        return "51-200"
    if headcount <= 500:
        return "201-500"
    if headcount <= 1000:
        return "501-1000"
    return "1000+"


def detect_hiring_urgency(text: str | None) -> str | None:
    if not text:
        return None
    for urgency, pattern in _URGENCY_PATTERNS:
        if pattern.search(text):
            return urgency
    return None


async def _classify_with_llm(draft: JobDraft) -> dict | None:
    prompt = prompt_builder.build_enrichment_prompt(
        draft.title, draft.company_name, draft.location, draft.description
    )
    return await gemini_client.generate_json(
        prompt, timeout=settings.enrichment_timeout_seconds
    )


async def enrich(draft: JobDraft) -> EnrichmentPatch | None:
    """Build an enrichment patch for a draft that has a title and company.

    Returns None when nothing could be inferred.
    """
    if is_empty(draft.title) or is_empty(draft.company_name):
        raise EnrichmentFailure("Enrichment needs a title and a company name")

    patch = EnrichmentPatch()

    if draft.skills:
        patch.normalized_skills = normalize_tech_stack(draft.skills)
        patch.tech_environment = patch.normalized_skills[:10]

    patch.industry = classify_industry(
        f"{draft.company_name} {draft.description or ''} {draft.title}"
    )
    patch.hiring_urgency = detect_hiring_urgency(draft.description)

    if not patch.industry or not patch.company_size_band:
        classification = await _classify_with_llm(draft)
        if classification:
            industry = classification.get("industry")
            if not patch.industry and industry and industry != "Other":
                patch.industry = industry
            size = classification.get("estimated_size")
            if not patch.company_size_band:
                patch.company_size_band = (
                    size if size in COMPANY_SIZE_BANDS
                    else estimate_company_size_band(parse_int(size))
                )
            funding = classification.get("funding_stage")
            if funding in _FUNDING_STAGES:
                patch.funding_stage = funding
            if not patch.hiring_urgency:
                patch.hiring_urgency = coerce_field("hiring_urgency", classification.get("hiring_urgency"))

    if all(is_unset(f, getattr(patch, f)) for f in ENRICHMENT_FIELDS):
        return None

    logger.info(
        "Enrichment for %s: industry=%s size=%s funding=%s tech=%d urgency=%s",
        draft.company_name,
        patch.industry,
        patch.company_size_band,
        patch.funding_stage,
        len(patch.tech_environment),
        patch.hiring_urgency,
    )
    return patch


def apply_enrichment(
    draft: JobDraft,
    patch: EnrichmentPatch,
    confirmed: set[str] | frozenset[str] = frozenset(),
) -> tuple[JobDraft, list[str]]:
    """Merge a patch into a draft, filling only empty or default fields.

    Fields in ``confirmed`` (set by the user or a primary import) are never
    touched. Returns (new draft, applied field names).
    """
    data = draft.model_dump()
    applied = []
    for field in ENRICHMENT_FIELDS:
        value = coerce_field(field, getattr(patch, field))
        if is_unset(field, value):
            continue
        if field in confirmed or not is_unset(field, data[field]):
            continue
        data[field] = value
        applied.append(field)
    return JobDraft(**data), applied
