"""Tests for the website → domain → contacts fallback chain."""
import pytest
import requests

from culinary_jobs.enrichment import EnrichmentResolver, domain_from_url
from culinary_jobs.models import Job

from conftest import FakeContactLookup, FakeWebsiteLookup


def make_job(company="Luna Bistro") -> Job:
    return Job(title="Line Cook", company=company, apply_link="https://example.com/j/1")


@pytest.mark.parametrize("url,domain", [
    ("https://www.lunabistro.com/about", "lunabistro.com"),
    ("http://LunaBistro.com", "lunabistro.com"),
    ("www.lunabistro.com/menu?x=1", "lunabistro.com"),
    ("lunabistro.co.uk", "lunabistro.co.uk"),
    ("https://order.lunabistro.com:8443/path", "order.lunabistro.com"),
])
def test_domain_from_url(url, domain):
    assert domain_from_url(url) == domain


@pytest.mark.parametrize("url", [None, "", "   ", "https:///path-only", "not a url", "http://localhost"])
def test_domain_from_url_rejects_non_hosts(url):
    assert domain_from_url(url) is None


def test_domain_hit_short_circuits(sleep, contact):
    website = FakeWebsiteLookup("https://www.lunabistro.com")
    contacts = FakeContactLookup(by_domain=[contact("chef@lunabistro.com")])
    resolver = EnrichmentResolver(website, contacts, job_delay=2.0, sleep=sleep)

    job = resolver.enrich(make_job())

    assert [c.email for c in job.contacts] == ["chef@lunabistro.com"]
    assert job.company_website == "https://www.lunabistro.com"
    assert job.company_domain == "lunabistro.com"
    assert contacts.domain_calls == [("lunabistro.com", "Luna Bistro")]
    assert contacts.company_calls == []
    assert sleep.calls == [2.0]


def test_empty_domain_result_falls_back_to_company_name(sleep, contact):
    website = FakeWebsiteLookup("https://lunabistro.com")
    contacts = FakeContactLookup(by_domain=[], by_company=[contact("gm@luna.com")])
    resolver = EnrichmentResolver(website, contacts, sleep=sleep)

    job = resolver.enrich(make_job())

    assert [c.email for c in job.contacts] == ["gm@luna.com"]
    assert len(contacts.domain_calls) == 1
    assert contacts.company_calls == ["Luna Bistro"]


def test_url_without_domain_skips_domain_search(sleep):
    website = FakeWebsiteLookup("not a url")
    contacts = FakeContactLookup()
    resolver = EnrichmentResolver(website, contacts, sleep=sleep)

    job = resolver.enrich(make_job())

    assert contacts.domain_calls == []
    assert contacts.company_calls == ["Luna Bistro"]
    assert job.company_website == "not a url"
    assert job.company_domain is None


def test_no_website_falls_back_to_company_name(sleep):
    contacts = FakeContactLookup()
    resolver = EnrichmentResolver(FakeWebsiteLookup(None), contacts, sleep=sleep)

    resolver.enrich(make_job())

    assert contacts.domain_calls == []
    assert contacts.company_calls == ["Luna Bistro"]


def test_lookup_errors_are_treated_as_empty(sleep, contact):
    website = FakeWebsiteLookup(error=requests.Timeout("slow"))
    contacts = FakeContactLookup(by_company=[contact("gm@luna.com")])
    resolver = EnrichmentResolver(website, contacts, sleep=sleep)

    job = resolver.enrich(make_job())

    assert [c.email for c in job.contacts] == ["gm@luna.com"]
    assert sleep.calls == [2.0]


def test_domain_error_still_tries_company_name(sleep):
    contacts = FakeContactLookup(domain_error=RuntimeError("quota"), company_error=RuntimeError("quota"))
    resolver = EnrichmentResolver(FakeWebsiteLookup("https://luna.com"), contacts, sleep=sleep)

    job = resolver.enrich(make_job())

    assert job.contacts == []
    assert contacts.company_calls == ["Luna Bistro"]


def test_contacts_deduplicated_and_inherit_company(sleep, contact):
    found = [
        contact("Chef@LunaBistro.com", first_name="Ana"),
        contact("chef@lunabistro.com", first_name="Duplicate"),
        contact("gm@lunabistro.com", company="Other", domain="other.com"),
    ]
    resolver = EnrichmentResolver(
        FakeWebsiteLookup("https://lunabistro.com"), FakeContactLookup(by_domain=found), sleep=sleep
    )

    job = resolver.enrich(make_job())

    assert [c.email for c in job.contacts] == ["Chef@LunaBistro.com", "gm@lunabistro.com"]
    assert job.contacts[0].first_name == "Ana"
    assert all(c.company == "Luna Bistro" for c in job.contacts)
    assert all(c.domain == "lunabistro.com" for c in job.contacts)


def test_disabled_is_passthrough(sleep):
    website = FakeWebsiteLookup("https://lunabistro.com")
    resolver = EnrichmentResolver(website, FakeContactLookup(), sleep=sleep)

    job = resolver.enrich(make_job(), enabled=False)

    assert website.calls == []
    assert job.contacts == []
    assert sleep.calls == []


def test_unknown_company_is_not_looked_up(sleep):
    website = FakeWebsiteLookup("https://example.com")
    resolver = EnrichmentResolver(website, FakeContactLookup(), sleep=sleep)

    resolver.enrich(make_job(company="Unknown Company"))

    assert website.calls == []


@pytest.mark.parametrize("value", [["https://luna.com"], {"url": "https://luna.com"}, 42])
def test_domain_from_url_non_text_is_none(value):
    assert domain_from_url(value) is None


def test_non_text_website_is_ignored(sleep, contact):
    contacts = FakeContactLookup(by_company=[contact("gm@luna.com")])
    resolver = EnrichmentResolver(FakeWebsiteLookup(["https://luna.com"]), contacts, sleep=sleep)

    job = resolver.enrich(make_job())

    assert job.company_website is None
    assert contacts.domain_calls == []
    assert [c.email for c in job.contacts] == ["gm@luna.com"]
