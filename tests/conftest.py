"""
Shared pytest fixtures.

Provider collaborators are replaced with in-memory fakes and every delay goes
through a recording ``sleep`` so tests never wait or touch the network. The
store runs against a temporary SQLite file.
"""
import os

os.environ.setdefault("LOG_TO_FILE", "false")

import pytest

from culinary_jobs.config import PipelineSettings
from culinary_jobs.models import Contact, RawResult, SearchPage
from culinary_jobs.sources.base import ContactLookupBase, JobSearchBase, WebsiteLookupBase
from culinary_jobs.store import PersistenceStore


def make_hit(**overrides) -> dict:
    """Provider-shaped Google Jobs hit with sensible defaults."""
    hit = {
        "title": "Line Cook",
        "company_name": "Luna Bistro",
        "location": "Brooklyn, NY",
        "via": "via Culinary Agents",
        "description": "Cooking and food safety in a busy kitchen.",
        "extensions": ["Full-time"],
        "detected_extensions": {"posted_at": "2 days ago", "schedule": "Full-time"},
        "apply_link": "https://example.com/jobs/luna-line-cook",
    }
    hit.update(overrides)
    return hit


def make_raw(**overrides) -> RawResult:
    return RawResult.from_provider(make_hit(**overrides))


class FakeSource(JobSearchBase):
    """Serves a fixed list of pages; tokens are page indexes as strings."""

    def __init__(self, pages, tokens=None, errors=None):
        self.pages = pages
        self.tokens = tokens
        self.errors = errors or {}
        self.calls = []

    def search(self, query, location="", next_page_token=None):
        self.calls.append((query, location, next_page_token))
        index = int(next_page_token) if next_page_token else 0
        if index in self.errors:
            raise self.errors[index]
        if index >= len(self.pages):
            return SearchPage()
        if self.tokens is not None:
            token = self.tokens[index]
        else:
            token = str(index + 1) if index + 1 < len(self.pages) else None
        return SearchPage(results=[make_raw(**h) for h in self.pages[index]], next_page_token=token)


class FakeWebsiteLookup(WebsiteLookupBase):
    def __init__(self, url=None, error=None):
        self.url = url
        self.error = error
        self.calls = []

    def lookup(self, company_name):
        self.calls.append(company_name)
        if self.error:
            raise self.error
        return self.url


class FakeContactLookup(ContactLookupBase):
    def __init__(self, by_domain=None, by_company=None, domain_error=None, company_error=None):
        self.domain_result = by_domain or []
        self.company_result = by_company or []
        self.domain_error = domain_error
        self.company_error = company_error
        self.domain_calls = []
        self.company_calls = []

    def by_domain(self, domain, company_name):
        self.domain_calls.append((domain, company_name))
        if self.domain_error:
            raise self.domain_error
        return list(self.domain_result)

    def by_company_name(self, company_name):
        self.company_calls.append(company_name)
        if self.company_error:
            raise self.company_error
        return list(self.company_result)


class SleepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def sleep():
    return SleepRecorder()


@pytest.fixture
def contact():
    def _make(email="chef@lunabistro.com", **kwargs):
        return Contact(email=email, **kwargs)
    return _make


@pytest.fixture
def settings():
    """Fast settings: one query, no delays, no report."""
    return PipelineSettings(
        queries=["test"],
        max_pages_per_query=5,
        page_delay=0.0,
        job_delay=0.0,
        query_delay=0.0,
        write_report=False,
    )


@pytest.fixture
def store(tmp_path):
    """Open store on a fresh SQLite file; closed after the test."""
    s = PersistenceStore(f"sqlite:///{tmp_path / 'jobs.db'}")
    s.open()
    try:
        yield s
    finally:
        s.close()
