"""Map raw Google Jobs results onto the canonical Job shape."""
from __future__ import annotations

import re
from datetime import datetime, timezone

from culinary_jobs.models import (
    NO_DESCRIPTION,
    UNKNOWN,
    UNKNOWN_COMPANY,
    UNKNOWN_LOCATION,
    UNKNOWN_SOURCE,
    UNKNOWN_TITLE,
    Job,
    RawResult,
)

# "McDonald's - Cook"
_TITLE_COMPANY_RE = re.compile(r"^(.*?)\s+-\s+")
# "Line cooks wanted at Luna Bistro in Brooklyn."
_DESC_COMPANY_RE = re.compile(r"(?:at|with|for|join)\s+([\w\s&']+?)(?:\sin|\.|!|,)", re.IGNORECASE)


def guess_company(raw: RawResult) -> str:
    """Best-effort employer name: provider field, title prefix, description, sentinel."""
    if raw.company_name:
        return raw.company_name

    if raw.title:
        m = _TITLE_COMPANY_RE.match(raw.title)
        if m and m.group(1).strip():
            return m.group(1).strip()

    if raw.description:
        m = _DESC_COMPANY_RE.search(raw.description)
        if m and m.group(1).strip():
            return m.group(1).strip()

    return UNKNOWN_COMPANY


def _source_label(via: str) -> str:
    if not via:
        return UNKNOWN_SOURCE
    return via[len("via "):] if via.startswith("via ") else via


def _apply_link(raw: RawResult) -> str | None:
    if raw.apply_link:
        return raw.apply_link
    for option in raw.apply_links:
        link = option.get("link")
        if isinstance(link, str) and link.strip():
            return link.strip()
    return None


def _detected(raw: RawResult, key: str) -> str:
    value = raw.detected_extensions.get(key)
    return value.strip() if isinstance(value, str) and value.strip() else UNKNOWN


def normalize(raw: RawResult, *, now: datetime | None = None) -> Job:
    return Job(
        title=raw.title or UNKNOWN_TITLE,
        company=guess_company(raw),
        location=raw.location or UNKNOWN_LOCATION,
        posted_at=_detected(raw, "posted_at"),
        schedule=_detected(raw, "schedule"),
        description=raw.description or NO_DESCRIPTION,
        highlights=list(raw.highlights),
        extensions=list(raw.extensions),
        apply_link=_apply_link(raw),
        source=_source_label(raw.via),
        scraped_at=now or datetime.now(timezone.utc),
    )
