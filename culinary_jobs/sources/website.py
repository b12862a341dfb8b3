"""Company website lookup via SearchAPI.io Google web search."""
from __future__ import annotations

from urllib.parse import urlparse

import requests

from culinary_jobs.log import get_logger
from culinary_jobs.retry import NETWORK_ERRORS, raise_for_transient, retry
from culinary_jobs.sources.base import WebsiteLookupBase

log = get_logger(__name__)

API_URL = "https://www.searchapi.io/api/v1/search"

# Organic results from these hosts describe a company but are not its site.
DIRECTORY_HOSTS: frozenset[str] = frozenset({
    "facebook.com", "instagram.com", "linkedin.com", "twitter.com", "x.com",
    "yelp.com", "tripadvisor.com", "opentable.com", "indeed.com",
    "glassdoor.com", "ziprecruiter.com", "wikipedia.org", "youtube.com",
    "doordash.com", "grubhub.com", "ubereats.com", "mapquest.com",
    "google.com", "bbb.org", "zoominfo.com", "crunchbase.com",
})


def _is_directory(url: str) -> bool:
    host = (urlparse(url).hostname or "").lower()
    return any(host == d or host.endswith("." + d) for d in DIRECTORY_HOSTS)


class SearchApiWebsiteLookup(WebsiteLookupBase):
    """Knowledge-graph website first, then the first non-directory organic hit."""

    def __init__(self, env_getter, *, timeout: float = 15.0) -> None:
        self.api_key: str = env_getter("SEARCH_API_KEY")
        self.timeout = timeout

    @retry(max_attempts=2, base_delay=1.5, retryable=NETWORK_ERRORS)
    def _fetch(self, company_name: str) -> dict:
        r = requests.get(
            API_URL,
            params={
                "engine": "google",
                "q": f"{company_name} official website",
                "api_key": self.api_key,
            },
            timeout=self.timeout,
        )
        raise_for_transient(r)
        if not r.ok:
            log.warning("Website lookup HTTP %d for %r", r.status_code, company_name)
            return {}
        data = r.json()
        return data if isinstance(data, dict) else {}

    def lookup(self, company_name: str) -> str | None:
        if not self.api_key:
            log.debug("SEARCH_API_KEY not set — website lookup disabled")
            return None

        data = self._fetch(company_name)

        kg = data.get("knowledge_graph")
        website = kg.get("website") if isinstance(kg, dict) else None
        if isinstance(website, str) and website.strip():
            return website.strip()

        organic = data.get("organic_results")
        for hit in organic if isinstance(organic, list) else []:
            link = hit.get("link") if isinstance(hit, dict) else None
            if isinstance(link, str) and link and not _is_directory(link):
                return link
        return None
