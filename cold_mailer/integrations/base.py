"""
Base classes for the external collaborators used while generating an email.
"""

from abc import ABC, abstractmethod
import logging

from cold_mailer.core.models import JobRecord, RawJobData


class ContentFetcher(ABC):
    """Loads the readable text of a job posting page."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def load(self, url: str) -> str:
        """
        Fetch a page and return its cleaned text.

        Args:
            url: Job posting URL

        Returns:
            Page text, possibly very short for blocked or error pages

        Raises:
            FetchError: on network or parse failure
            UpstreamContentError: the site answered with an error status
        """
        pass


class JobExtractor(ABC):
    """Extracts job attributes from page text."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def extract(self, text: str) -> RawJobData:
        """
        Best-effort extraction of role, experience, skills and description.

        Raises:
            ExtractionError: when the model fails or returns unparseable output
        """
        pass


class EmailDrafter(ABC):
    """Drafts an outreach email for a normalized job."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def draft(self, job_record: JobRecord, link_list: str, requester_email: str) -> str:
        """
        Write the email body.

        Args:
            job_record: Normalized job
            link_list: Comma-separated portfolio links (may be empty)
            requester_email: Verified email of the caller

        Raises:
            DraftError: when the model call fails
        """
        pass
