"""
Exception hierarchy for the cold mailer.

Client errors (bad or unusable job data, missing identity) map to 4xx
responses. Collaborator failures (page fetch, model calls) map to 5xx.
"""

from typing import Optional


class ColdMailerError(Exception):
    """Base class for all errors raised while generating an email."""

    status_code = 500
    default_message = "Failed to generate email"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    def to_dict(self) -> dict:
        if self.is_client_error:
            body = {"success": False, "message": self.message}
            if self.detail:
                body["details"] = self.detail
            return body

        return {
            "success": False,
            "message": self.default_message,
            "error": self.detail or self.message,
        }


class InvalidJobData(ColdMailerError):
    """No usable job data object was supplied."""

    status_code = 400
    default_message = "Job data is required"


class UpstreamContentError(ColdMailerError):
    """The fetched content is an error page rather than a job posting."""

    status_code = 400
    default_message = (
        "The target website returned an error or is temporarily unavailable. "
        "Please try a different job URL or try again later."
    )


class InsufficientJobData(ColdMailerError):
    """Extraction produced no role, experience or skills."""

    status_code = 400
    default_message = (
        "Could not extract meaningful job information from the provided content. "
        "The page might not contain a job posting."
    )


class Unauthenticated(ColdMailerError):
    status_code = 401
    default_message = "User authentication required"


class CollaboratorError(ColdMailerError):
    """Failure inside an external collaborator (network or model)."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(self.default_message, detail=detail)


class FetchError(CollaboratorError):
    pass


class ExtractionError(CollaboratorError):
    pass


class DraftError(CollaboratorError):
    pass
