"""Unit tests for WebPageLoader."""

from types import SimpleNamespace

import pytest
import requests

from cold_mailer.core import FetchError, UpstreamContentError
from cold_mailer.integrations import WebPageLoader


class FakeSession:
    def __init__(self, response=None, error: Exception = None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


PAGE = """
<html>
  <head><title>Careers</title><style>body { color: red; }</style></head>
  <body>
    <nav>Home | Jobs</nav>
    <script>track();</script>
    <h1>Backend Engineer</h1>
    <p>Experience:   3+ years</p>
    <ul><li>Node.js</li><li>PostgreSQL</li></ul>
    <footer>Copyright</footer>
  </body>
</html>
"""


@pytest.mark.unit
def test_clean_html_keeps_visible_text_only():
    text = WebPageLoader.clean_html(PAGE)

    assert "Backend Engineer" in text
    assert "Experience: 3+ years" in text
    assert "Node.js PostgreSQL" in text
    assert "track()" not in text
    assert "color: red" not in text
    assert "Copyright" not in text
    assert "Home | Jobs" not in text


@pytest.mark.unit
def test_load_uses_timeout_and_user_agent():
    session = FakeSession(SimpleNamespace(status_code=200, text=PAGE))
    loader = WebPageLoader(timeout=5, user_agent="TestAgent/1.0", session=session)

    text = loader.load("https://jobs.example.com/1")

    assert "Backend Engineer" in text
    assert session.calls[0]["timeout"] == 5
    assert session.calls[0]["headers"]["User-Agent"] == "TestAgent/1.0"


@pytest.mark.unit
def test_load_returns_short_error_pages_unchanged():
    session = FakeSession(SimpleNamespace(status_code=200, text="<p>Server Error</p>"))
    assert WebPageLoader(session=session).load("https://x.example") == "Server Error"


@pytest.mark.unit
@pytest.mark.parametrize("status", [403, 404, 503])
def test_load_reports_http_error_status_as_unavailable_site(status):
    session = FakeSession(SimpleNamespace(status_code=status, text="<h1>503 error</h1>"))
    with pytest.raises(UpstreamContentError) as exc_info:
        WebPageLoader(session=session).load("https://x.example")

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == f"HTTP {status}"


@pytest.mark.unit
def test_load_raises_on_network_error():
    session = FakeSession(error=requests.Timeout("timed out"))
    with pytest.raises(FetchError) as exc_info:
        WebPageLoader(session=session).load("https://x.example")
    assert "timed out" in exc_info.value.detail
