"""Shared fixtures and in-memory collaborators."""

import json

import jwt
import pytest

from cold_mailer.core import (
    JobRecordNormalizer,
    PortfolioEntry,
    PortfolioIndex,
    SkillLinkMatcher,
)
from cold_mailer.generators import EmailRequestOrchestrator
from cold_mailer.integrations.base import ContentFetcher, EmailDrafter, JobExtractor
from cold_mailer.utils import Config
from cold_mailer.web import create_app


JWT_SECRET = "test-secret-that-is-long-enough-for-hs256"

DEFAULT_LINKS = [
    "https://example.com/default-react",
    "https://example.com/default-node",
]


class FakeFetcher(ContentFetcher):
    def __init__(self, text: str = "", error: Exception = None):
        super().__init__()
        self.text = text
        self.error = error
        self.urls = []

    def load(self, url: str) -> str:
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.text


class FakeExtractor(JobExtractor):
    def __init__(self, data=None, error: Exception = None):
        super().__init__()
        self.data = data
        self.error = error
        self.texts = []

    def extract(self, text: str):
        self.texts.append(text)
        if self.error:
            raise self.error
        return self.data


class FakeDrafter(EmailDrafter):
    def __init__(self, email: str = "Hello hiring team", error: Exception = None):
        super().__init__()
        self.email = email
        self.error = error
        self.calls = []

    def draft(self, job_record, link_list, requester_email):
        self.calls.append((job_record, link_list, requester_email))
        if self.error:
            raise self.error
        return self.email


@pytest.fixture
def portfolio_index():
    return PortfolioIndex([
        PortfolioEntry("React, Next.js", "https://example.com/react-app"),
        PortfolioEntry("Node.js, Express, MongoDB", "https://example.com/node-api"),
        PortfolioEntry("PostgreSQL, Prisma", "https://example.com/sql-project"),
        PortfolioEntry("Photography", "https://example.com/gallery"),
    ])


@pytest.fixture
def default_links():
    return list(DEFAULT_LINKS)


@pytest.fixture
def matcher(default_links):
    return SkillLinkMatcher(default_links=default_links)


@pytest.fixture
def normalizer():
    return JobRecordNormalizer()


@pytest.fixture
def fetcher():
    return FakeFetcher(text="Senior Backend Engineer wanted. " * 10)


@pytest.fixture
def extractor():
    return FakeExtractor(data={
        "role": "Backend Engineer",
        "experience": "3+ years",
        "skills": "Node.js, PostgreSQL",
        "description": "Build APIs.",
    })


@pytest.fixture
def drafter():
    return FakeDrafter()


@pytest.fixture
def orchestrator(portfolio_index, fetcher, extractor, drafter, matcher):
    return EmailRequestOrchestrator(
        index=portfolio_index,
        fetcher=fetcher,
        extractor=extractor,
        drafter=drafter,
        matcher=matcher,
    )


@pytest.fixture
def config(tmp_path, monkeypatch):
    for var in Config.ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"auth": {"jwt_secret": JWT_SECRET}}))
    return Config(str(config_path), env_file=str(tmp_path / "missing.env"))


@pytest.fixture
def app(config, orchestrator):
    app = create_app(config, orchestrator=orchestrator)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_token():
    def _make_token(claims: dict, secret: str = JWT_SECRET) -> str:
        return jwt.encode(claims, secret, algorithm="HS256")
    return _make_token


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token({'email': 'a@b.com'})}"}
