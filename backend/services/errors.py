"""Failure taxonomy for the job intake flow.

Every failure here is recoverable from the user's side: the worst case is
starting the import again.
"""


class IntakeError(Exception):
    kind = "intake_error"
    retryable = True

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message, "retryable": self.retryable}


class ExtractionFailure(IntakeError):
    """A source parser returned no usable data, failed, or timed out."""
    kind = "extraction_failure"


class EnrichmentFailure(IntakeError):
    """Enrichment could not run or failed. Never surfaced to the user."""
    kind = "enrichment_failure"


class ValidationFailure(IntakeError):
    """A save was refused by the draft/publish gate."""
    kind = "validation_failure"
    retryable = False

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["field"] = self.field
        return data


class PersistenceFailure(IntakeError):
    """The insert command failed; the draft stays in review."""
    kind = "persistence_failure"


class InvalidTransition(IntakeError):
    """The operation is not allowed in the session's current state."""
    kind = "invalid_transition"
    retryable = False
