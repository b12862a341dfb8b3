"""SearchAPI.io Google Jobs search."""
from __future__ import annotations

import requests

from culinary_jobs.log import get_logger
from culinary_jobs.models import RawResult, SearchPage
from culinary_jobs.retry import NETWORK_ERRORS, raise_for_transient, retry
from culinary_jobs.sources.base import JobSearchBase

log = get_logger(__name__)

API_URL = "https://www.searchapi.io/api/v1/search"


class SearchApiJobsSource(JobSearchBase):
    """Pages through ``engine=google_jobs`` results.

    A missing key or a non-success response yields an empty page. Network
    failures are retried and then re-raised for the aggregator to handle.
    """

    def __init__(self, env_getter, *, timeout: float = 20.0) -> None:
        self.api_key: str = env_getter("SEARCH_API_KEY")
        self.timeout = timeout

    @retry(max_attempts=3, base_delay=2.0, retryable=NETWORK_ERRORS)
    def _fetch(self, params: dict) -> requests.Response:
        r = requests.get(API_URL, params=params, timeout=self.timeout)
        raise_for_transient(r)
        return r

    def search(
        self, query: str, location: str = "", next_page_token: str | None = None
    ) -> SearchPage:
        if not self.api_key:
            log.warning("SEARCH_API_KEY not set — skipping Google Jobs search")
            return SearchPage()

        params: dict = {"engine": "google_jobs", "q": query, "api_key": self.api_key}
        if location:
            params["location"] = location
        if next_page_token:
            params["next_page_token"] = next_page_token

        log.info(
            "Google Jobs search q=%r%s%s",
            query,
            f" location={location!r}" if location else "",
            " (continued)" if next_page_token else "",
        )
        r = self._fetch(params)
        try:
            data = r.json()
        except ValueError:
            log.error("Google Jobs returned non-JSON body (HTTP %d)", r.status_code)
            return SearchPage()
        if not isinstance(data, dict):
            data = {}

        if not r.ok:
            error = data.get("error")
            log.error("Google Jobs API error (HTTP %d): %s", r.status_code, error or r.reason)
            return SearchPage()

        hits = data.get("jobs") or []
        if not hits:
            log.info("No job results for %r", query)
            return SearchPage()

        pagination = data.get("pagination") or {}
        token = pagination.get("next_page_token") if isinstance(pagination, dict) else None
        log.info("Found %d job listings for %r", len(hits), query)
        return SearchPage(
            results=[RawResult.from_provider(hit) for hit in hits],
            next_page_token=token or None,
        )
