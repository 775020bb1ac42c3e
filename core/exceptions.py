"""
Exception hierarchy for the selection core.

The web layer maps these to HTTP responses in web/backend/exceptions.py;
the pipeline converts them into progress events.
"""


class TalentSiftError(Exception):
    """Base exception for all core errors."""
    pass


class InvalidCandidateDataError(TalentSiftError):
    """Raised when uploaded candidate data is malformed, empty or too large."""
    pass


class EmptySchemaError(TalentSiftError):
    """Raised when schema detection is attempted on an empty record list."""
    pass


class SessionNotFoundError(TalentSiftError):
    """Raised when a session id is unknown or has expired."""
    pass


class CompletionServiceError(TalentSiftError):
    """Raised when the completion service fails after exhausting retries."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class ResponseRepairError(TalentSiftError):
    """Raised when model output cannot be coerced into JSON.

    Carries a leading excerpt of the content that was last attempted.
    """

    def __init__(self, message: str, excerpt: str = ""):
        super().__init__(f"{message} (content starts with: {excerpt!r})" if excerpt else message)
        self.excerpt = excerpt


class QueryParseError(TalentSiftError):
    """Raised when a hiring query cannot be turned into role requirements."""
    pass


class CandidateNotFoundError(TalentSiftError):
    """Raised when the model references a candidate id outside its input."""

    def __init__(self, candidate_id: str):
        super().__init__(f"Candidate {candidate_id} not found")
        self.candidate_id = candidate_id
