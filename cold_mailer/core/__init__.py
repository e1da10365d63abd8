"""Core models, normalization and portfolio matching."""

from .models import (
    PortfolioEntry,
    JobRecord,
    EmailDraftResult,
    RawJobData,
)
from .exceptions import (
    ColdMailerError,
    InvalidJobData,
    UpstreamContentError,
    InsufficientJobData,
    Unauthenticated,
    FetchError,
    ExtractionError,
    DraftError,
)
from .portfolio import PortfolioIndex
from .normalizer import JobRecordNormalizer
from .matcher import SkillLinkMatcher

__all__ = [
    "PortfolioEntry",
    "JobRecord",
    "EmailDraftResult",
    "RawJobData",
    "ColdMailerError",
    "InvalidJobData",
    "UpstreamContentError",
    "InsufficientJobData",
    "Unauthenticated",
    "FetchError",
    "ExtractionError",
    "DraftError",
    "PortfolioIndex",
    "JobRecordNormalizer",
    "SkillLinkMatcher",
]
