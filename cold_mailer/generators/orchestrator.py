"""
Email Request Orchestrator - Coordinates one outreach email request.

Sequence: fetch page text -> extract job data -> normalize -> match
portfolio links -> draft email -> assemble result. Each step finishes before
the next starts; nothing is retried and no state outlives the request.
"""

from typing import Callable, Optional, TypeVar
import logging

from cold_mailer.core.exceptions import (
    ColdMailerError,
    DraftError,
    ExtractionError,
    FetchError,
    InvalidJobData,
    Unauthenticated,
    UpstreamContentError,
)
from cold_mailer.core.matcher import SkillLinkMatcher
from cold_mailer.core.models import EmailDraftResult, RawJobData
from cold_mailer.core.normalizer import JobRecordNormalizer
from cold_mailer.core.portfolio import PortfolioIndex
from cold_mailer.integrations.base import ContentFetcher, EmailDrafter, JobExtractor
from cold_mailer.integrations.llm import ClaudeClient, ClaudeEmailDrafter, ClaudeJobExtractor
from cold_mailer.integrations.web_loader import WebPageLoader
from cold_mailer.utils.config import Config


T = TypeVar("T")


class EmailRequestOrchestrator:
    """Runs the fetch, normalize, match and draft pipeline for one request."""

    def __init__(
        self,
        index: PortfolioIndex,
        fetcher: ContentFetcher,
        extractor: JobExtractor,
        drafter: EmailDrafter,
        normalizer: Optional[JobRecordNormalizer] = None,
        matcher: Optional[SkillLinkMatcher] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            index: Portfolio index shared by all requests (read-only)
            fetcher: Loads job posting pages
            extractor: Turns page text into raw job data
            drafter: Writes the email
            normalizer: Job data normalizer (default settings if omitted)
            matcher: Skill to link matcher (default settings if omitted)
        """
        self.index = index
        self.fetcher = fetcher
        self.extractor = extractor
        self.drafter = drafter
        self.normalizer = normalizer or JobRecordNormalizer()
        self.matcher = matcher or SkillLinkMatcher()
        self.logger = logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_config(cls, config: Config, index: Optional[PortfolioIndex] = None) -> "EmailRequestOrchestrator":
        """Build an orchestrator wired to the real collaborators."""
        if index is None:
            index = PortfolioIndex.load(config.get_portfolio_path())

        client = ClaudeClient(
            api_key=config.get_api_key("anthropic") or None,
            model=config.get("llm.model"),
            max_tokens=config.get("llm.max_tokens", 1500),
            temperature=config.get("llm.temperature", 0.0),
            timeout=config.get("llm.timeout", 60),
        )

        return cls(
            index=index,
            fetcher=WebPageLoader(
                timeout=config.get("fetch.timeout", 30),
                user_agent=config.get("fetch.user_agent"),
            ),
            extractor=ClaudeJobExtractor(
                client,
                max_input_chars=config.get("llm.max_input_chars", 20000),
            ),
            drafter=ClaudeEmailDrafter(
                client,
                sender_name=config.get("sender.name", ""),
                sender_summary=config.get("sender.summary", ""),
            ),
            normalizer=JobRecordNormalizer(
                fallback_skills=config.get("matching.fallback_skills"),
            ),
            matcher=SkillLinkMatcher(
                default_links=config.get("portfolio.default_links"),
                max_links=config.get("matching.max_links", 2),
            ),
        )

    def generate_from_url(self, job_url: Optional[str], requester_email: Optional[str]) -> EmailDraftResult:
        """
        Generate an email for the job posted at job_url.

        Raises:
            InvalidJobData: no URL supplied
            UpstreamContentError: the page is empty or an error page
            FetchError, ExtractionError: collaborator failures
            plus everything generate_from_data raises
        """
        if not job_url or not str(job_url).strip():
            raise InvalidJobData("Job URL is required")

        job_url = str(job_url).strip()
        self.logger.info(f"Loading webpage: {job_url}")
        text = self._call(FetchError, self.fetcher.load, job_url)

        if not text or not text.strip():
            raise UpstreamContentError(
                "Could not load content from the provided URL. "
                "The website might be blocking requests or experiencing issues."
            )

        self.logger.info("Extracting job information...")
        raw = self._call(ExtractionError, self.extractor.extract, text)

        return self.generate_from_data(raw, requester_email)

    def generate_from_data(self, job_data: Optional[RawJobData], requester_email: Optional[str]) -> EmailDraftResult:
        """
        Generate an email from already extracted (or user supplied) job data.

        Raises:
            InvalidJobData, UpstreamContentError, InsufficientJobData: from normalization
            Unauthenticated: requester_email is blank
            DraftError: the drafting call failed
        """
        job_record = self.normalizer.normalize(job_data)
        self.logger.info(f"Normalized job: {job_record.role or '(no role)'} with {len(job_record.skills)} skills")

        portfolio_links = self.matcher.match(job_record.skills, self.index)
        self.logger.info(f"Portfolio links found: {portfolio_links}")

        if not requester_email or not str(requester_email).strip():
            raise Unauthenticated()

        email = self._call(
            DraftError,
            self.drafter.draft,
            job_record,
            ", ".join(portfolio_links),
            str(requester_email).strip(),
        )

        return EmailDraftResult(
            email=email,
            job_record=job_record,
            portfolio_links=portfolio_links,
        )

    def _call(self, error_type: type, func: Callable[..., T], *args) -> T:
        """Invoke a collaborator, wrapping unexpected failures in error_type."""
        try:
            return func(*args)
        except ColdMailerError:
            raise
        except Exception as e:
            self.logger.error(f"{func.__qualname__} failed: {e}")
            raise error_type(str(e) or e.__class__.__name__) from e
