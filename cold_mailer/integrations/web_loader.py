"""
Web page loader for job postings.

Downloads a posting with requests and strips it down to readable text with
BeautifulSoup. An HTTP error status means the site is blocking or down and is
reported as UpstreamContentError. Some sites answer 200 with a short error
page; that text is returned as-is and judged later.
"""

import re

import requests
from bs4 import BeautifulSoup

from .base import ContentFetcher
from cold_mailer.core.exceptions import FetchError, UpstreamContentError


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

NOISE_TAGS = ["script", "style", "noscript", "svg", "header", "footer", "nav", "form"]

SHORT_CONTENT_THRESHOLD = 100


class WebPageLoader(ContentFetcher):
    """Fetches a job posting page and returns its visible text."""

    def __init__(
        self,
        timeout: float = 30,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session = None,
    ):
        super().__init__()
        self.timeout = timeout
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.session = session or requests.Session()

    def load(self, url: str) -> str:
        """Fetch url and return cleaned page text."""
        self.logger.info(f"Attempting to load webpage: {url}")

        headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml",
            "Accept-Language": "en-US,en;q=0.9",
        }

        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"Error loading webpage {url}: {e}")
            raise FetchError(f"Failed to load webpage: {e}") from e

        if response.status_code >= 400:
            self.logger.warning(f"{url} returned status {response.status_code}")
            raise UpstreamContentError(detail=f"HTTP {response.status_code}")

        content = self.clean_html(response.text)
        self.logger.info(f"Loaded webpage, {len(content)} characters: {content[:200]!r}")

        if len(content) < SHORT_CONTENT_THRESHOLD:
            self.logger.warning("Very short content loaded, might indicate an error page")

        return content

    @staticmethod
    def clean_html(html: str) -> str:
        """Reduce an HTML document to whitespace-normalized visible text."""
        soup = BeautifulSoup(html or "", "html.parser")

        for tag in soup(NOISE_TAGS):
            tag.decompose()

        text = soup.get_text(separator=" ")
        return re.sub(r'\s+', ' ', text).strip()
