"""Walk a search query across result pages."""
from __future__ import annotations

import time
from typing import Callable, Iterator

from culinary_jobs.log import get_logger
from culinary_jobs.models import Job
from culinary_jobs.normalizer import normalize
from culinary_jobs.sources.base import JobSearchBase

log = get_logger(__name__)


def fetch_all(
    source: JobSearchBase,
    query: str,
    location: str = "",
    max_pages: int = 5,
    *,
    page_delay: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[Job]:
    """Yield normalized jobs for ``query`` in page order.

    Stops at the first empty page, a page without a continuation token, or
    after ``max_pages`` pages. A page that raises ends the walk for this
    query only.
    """
    max_pages = max(1, int(max_pages))
    token: str | None = None
    page = 0
    total = 0

    while page < max_pages:
        if page > 0 and page_delay > 0:
            sleep(page_delay)
        page += 1
        log.info("Fetching page %d of results for %r", page, query)

        try:
            result = source.search(query, location, token)
        except Exception as exc:
            log.error("Search failed for %r on page %d: %s", query, page, exc)
            break

        if not result.results:
            break

        for raw in result.results:
            total += 1
            yield normalize(raw)

        token = result.next_page_token
        if not token:
            break

    log.info("Fetched %d jobs across %d page(s) for %r", total, page, query)
