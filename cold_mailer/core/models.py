"""
Core data models for the cold mailer.

RawJobData is whatever the extraction step produced (a plain mapping that
may be missing fields or carry the wrong types). JobRecord is the validated
shape the rest of the system works with.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping


RawJobData = Mapping[str, Any]


@dataclass(frozen=True)
class PortfolioEntry:
    """A single portfolio link tagged with the tech stack it demonstrates."""
    skill_tag: str
    link: str

    def to_dict(self) -> dict:
        return {
            "skill_tag": self.skill_tag,
            "link": self.link,
        }


@dataclass
class JobRecord:
    """Canonical job posting attributes."""
    role: str = ""
    experience: str = ""
    skills: list[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "role": self.role,
            "experience": self.experience,
            "skills": list(self.skills),
            "description": self.description,
        }


@dataclass
class EmailDraftResult:
    """Everything returned to the caller for one generated email."""
    email: str
    job_record: JobRecord
    portfolio_links: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "success": True,
            "email": self.email,
            "jobData": self.job_record.to_dict(),
            "portfolioLinks": list(self.portfolio_links),
        }
