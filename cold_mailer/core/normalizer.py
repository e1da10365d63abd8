"""
Job Record Normalizer - Turns untrusted extraction output into a JobRecord.

Model output and scraped pages are unreliable: fields go missing, "skills"
arrives as a comma-joined string, and blocked sites come back as error
pages. Everything downstream relies on the JobRecord produced here and
performs no further shape checks.
"""

from collections.abc import Mapping
from typing import Any, Optional, Sequence
import logging

from .exceptions import InsufficientJobData, InvalidJobData, UpstreamContentError
from .models import JobRecord, RawJobData


ERROR_PAGE_MARKERS = (
    "503 error",
    "Server Error",
    "No job posting available",
)

FALLBACK_SKILLS = ["JavaScript", "TypeScript", "React", "Node.js"]


class JobRecordNormalizer:
    """Validates raw job data and fills in defaults."""

    def __init__(
        self,
        fallback_skills: Optional[Sequence[str]] = None,
        error_markers: Sequence[str] = ERROR_PAGE_MARKERS,
    ):
        self.fallback_skills = list(fallback_skills or FALLBACK_SKILLS)
        self.error_markers = tuple(error_markers)
        self.logger = logging.getLogger(self.__class__.__name__)

    def normalize(self, raw: Optional[RawJobData]) -> JobRecord:
        """
        Convert raw job data into a JobRecord.

        Args:
            raw: Mapping with optional role, experience, skills, description

        Returns:
            JobRecord whose skills is always a non-empty list of strings

        Raises:
            InvalidJobData: raw is missing or not a mapping
            UpstreamContentError: description looks like an error page
            InsufficientJobData: no role, experience or skills at all
        """
        if raw is None or not isinstance(raw, Mapping):
            self.logger.info(f"Rejected job data of type {type(raw).__name__}")
            raise InvalidJobData()

        skills = self.coerce_skills(raw.get("skills"))
        role = self._text(raw.get("role"))
        experience = self._text(raw.get("experience"))
        description = self._text(raw.get("description"))

        marker = self.find_error_marker(description)
        if marker:
            self.logger.warning(f"Job description contains error marker {marker!r}")
            raise UpstreamContentError(detail=description)

        if not role and not experience and not skills:
            raise InsufficientJobData()

        if not skills:
            self.logger.info("No skills found in job data, using generic skills")
            skills = list(self.fallback_skills)

        return JobRecord(
            role=role,
            experience=experience,
            skills=skills,
            description=description,
        )

    @staticmethod
    def coerce_skills(value: Any) -> list[str]:
        """Coerce the "skills" field into a list of strings."""
        if value is None:
            return []

        if isinstance(value, str):
            return [piece.strip() for piece in value.split(",") if piece.strip()]

        if isinstance(value, (list, tuple)):
            return [item for item in value if isinstance(item, str) and item.strip()]

        return []

    def find_error_marker(self, text: str) -> Optional[str]:
        """Return the first error-page marker found in text (case-sensitive)."""
        for marker in self.error_markers:
            if marker in text:
                return marker
        return None

    @staticmethod
    def _text(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return str(value)
