"""Attach company contacts to kept jobs.

Fallback chain per job, stopping at the first step that yields contacts:

1. website lookup for the company name, domain derived from the URL
2. contact search by that domain
3. contact search by company name (when 2 found nothing, or no domain/website)

A failing lookup counts as "nothing found" for its step only.
"""
from __future__ import annotations

import re
import time
from typing import Callable
from urllib.parse import urlsplit

from culinary_jobs.log import get_logger
from culinary_jobs.models import UNKNOWN_COMPANY, Contact, Job
from culinary_jobs.sources.base import ContactLookupBase, WebsiteLookupBase

log = get_logger(__name__)

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
_HOST_RE = re.compile(r"^[a-z0-9-]+(\.[a-z0-9-]+)+$")


def domain_from_url(url: str | None) -> str | None:
    """Bare host of ``url`` without scheme, ``www.``, port or path.

    Returns None when what is left does not look like a dotted host name.
    """
    if not isinstance(url, str) or not url.strip():
        return None
    text = url.strip()
    if not _SCHEME_RE.match(text):
        text = "//" + text
    try:
        host = urlsplit(text).hostname or ""
    except ValueError:
        return None
    host = host.lower().rstrip(".")
    if host.startswith("www."):
        host = host[4:]
    return host if _HOST_RE.match(host) else None


def _dedupe(contacts: list[Contact], job: Job) -> list[Contact]:
    seen: set[str] = set()
    out: list[Contact] = []
    for c in contacts:
        key = (c.email or "").strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        c.email = c.email.strip()
        c.company = job.company
        c.domain = job.company_domain or c.domain
        out.append(c)
    return out


class EnrichmentResolver:
    def __init__(
        self,
        website_lookup: WebsiteLookupBase,
        contact_lookup: ContactLookupBase,
        *,
        job_delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.website_lookup = website_lookup
        self.contact_lookup = contact_lookup
        self.job_delay = job_delay
        self.sleep = sleep

    def _website(self, company: str) -> str | None:
        try:
            url = self.website_lookup.lookup(company)
        except Exception as exc:
            log.error("Website lookup failed for %s: %s", company, exc)
            return None
        if url is not None and not isinstance(url, str):
            log.warning("Ignoring non-text website for %s: %r", company, url)
            return None
        return url

    def _by_domain(self, domain: str, company: str) -> list[Contact]:
        try:
            return list(self.contact_lookup.by_domain(domain, company) or [])
        except Exception as exc:
            log.error("Domain contact search failed for %s (%s): %s", company, domain, exc)
            return []

    def _by_company_name(self, company: str) -> list[Contact]:
        try:
            return list(self.contact_lookup.by_company_name(company) or [])
        except Exception as exc:
            log.error("Company-name contact search failed for %s: %s", company, exc)
            return []

    def resolve_contacts(self, job: Job) -> list[Contact]:
        company = job.company

        url = self._website(company)
        if url:
            job.company_website = url
            log.info("Found website for %s: %s", company, url)
            domain = domain_from_url(url)
            if domain:
                job.company_domain = domain
                contacts = self._by_domain(domain, company)
                if contacts:
                    log.info("Found %d contacts for %s by domain", len(contacts), company)
                    return contacts
                log.info("No contacts for %s by domain %s", company, domain)
            else:
                log.info("Could not extract domain from %s", url)
        else:
            log.info("No website found for %s", company)

        contacts = self._by_company_name(company)
        if contacts:
            log.info("Found %d contacts for %s by company name", len(contacts), company)
        else:
            log.info("No contacts found for %s using any method", company)
        return contacts

    def enrich(self, job: Job, enabled: bool = True) -> Job:
        if not enabled:
            return job
        if job.company == UNKNOWN_COMPANY:
            log.debug("Skipping enrichment for %r: company unknown", job.title)
            return job

        try:
            job.contacts = _dedupe(self.resolve_contacts(job), job)
            for idx, c in enumerate(job.contacts[:3], start=1):
                log.debug(
                    "  Email #%d: %s (%s)%s", idx, c.email, c.full_name,
                    f" - {c.position}" if c.position else "",
                )
        finally:
            if self.job_delay > 0:
                self.sleep(self.job_delay)
        return job
