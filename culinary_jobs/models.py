"""Data models for raw search results, jobs, contacts and run counters."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_LOCATION = "Unknown Location"
UNKNOWN_SOURCE = "Unknown Source"
UNKNOWN = "Unknown"
NO_DESCRIPTION = "No description available"


class SalaryPeriod(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"


class ExclusionReason(str, Enum):
    NONE = "none"
    EXCLUDED_COMPANY = "excluded_company"
    FAST_FOOD = "fast_food"


def _as_str(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


@dataclass
class HighlightBlock:
    title: str
    items: list[str] = field(default_factory=list)


@dataclass
class RawResult:
    """One Google Jobs result as returned by the search provider."""

    title: str = ""
    description: str = ""
    company_name: str = ""
    location: str = ""
    via: str = ""
    highlights: list[HighlightBlock] = field(default_factory=list)
    extensions: list[str] = field(default_factory=list)
    detected_extensions: dict[str, Any] = field(default_factory=dict)
    apply_link: str | None = None
    apply_links: list[dict[str, Any]] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_provider(cls, hit: Any) -> "RawResult":
        """Build from provider JSON; tolerates missing or mistyped fields."""
        if not isinstance(hit, dict):
            return cls()

        highlights: list[HighlightBlock] = []
        for block in _as_list(hit.get("job_highlights")):
            if not isinstance(block, dict):
                continue
            items = [i for i in _as_list(block.get("items")) if isinstance(i, str)]
            highlights.append(HighlightBlock(title=_as_str(block.get("title")), items=items))

        detected = hit.get("detected_extensions")
        apply_links = [a for a in _as_list(hit.get("apply_links")) if isinstance(a, dict)]

        return cls(
            title=_as_str(hit.get("title")),
            description=_as_str(hit.get("description")),
            company_name=_as_str(hit.get("company_name")),
            location=_as_str(hit.get("location")),
            via=_as_str(hit.get("via")),
            highlights=highlights,
            extensions=[e for e in _as_list(hit.get("extensions")) if isinstance(e, str)],
            detected_extensions=detected if isinstance(detected, dict) else {},
            apply_link=_as_str(hit.get("apply_link")) or None,
            apply_links=apply_links,
            raw=hit,
        )


@dataclass
class SearchPage:
    results: list[RawResult] = field(default_factory=list)
    next_page_token: str | None = None


@dataclass
class Contact:
    email: str
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    confidence: int | None = None
    company: str | None = None
    domain: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def to_record(self) -> dict[str, Any]:
        return {
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "position": self.position,
            "confidence": self.confidence,
            "company": self.company,
            "domain": self.domain,
        }


@dataclass
class Job:
    title: str
    company: str = UNKNOWN_COMPANY
    location: str = UNKNOWN_LOCATION
    posted_at: str = UNKNOWN
    schedule: str = UNKNOWN
    description: str = NO_DESCRIPTION
    highlights: list[HighlightBlock] = field(default_factory=list)
    extensions: list[str] = field(default_factory=list)
    salary_min: Decimal | None = None
    salary_max: Decimal | None = None
    salary_currency: str = "USD"
    salary_period: SalaryPeriod = SalaryPeriod.YEARLY
    skills: list[str] = field(default_factory=list)
    experience_level: ExperienceLevel = ExperienceLevel.MID
    apply_link: str | None = None
    source: str = UNKNOWN_SOURCE
    scraped_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    company_website: str | None = None
    company_domain: str | None = None
    contacts: list[Contact] = field(default_factory=list)

    @property
    def is_full_time(self) -> bool:
        return self.schedule == "Full-time" or any("Full-time" in e for e in self.extensions)

    def to_record(self) -> dict[str, Any]:
        """JSON-safe dict for the dataset file and reports."""
        return {
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "posted_at": self.posted_at,
            "schedule": self.schedule,
            "description": self.description,
            "salary_min": float(self.salary_min) if self.salary_min is not None else None,
            "salary_max": float(self.salary_max) if self.salary_max is not None else None,
            "salary_currency": self.salary_currency,
            "salary_period": self.salary_period.value,
            "skills": list(self.skills),
            "experience_level": self.experience_level.value,
            "apply_link": self.apply_link,
            "source": self.source,
            "scraped_at": self.scraped_at.isoformat(),
            "company_website": self.company_website,
            "company_domain": self.company_domain,
            "emails": [c.to_record() for c in self.contacts],
        }


@dataclass(frozen=True)
class ExclusionVerdict:
    is_excluded: bool
    reason: ExclusionReason = ExclusionReason.NONE
    matched_term: str | None = None


KEEP = ExclusionVerdict(is_excluded=False)


@dataclass
class SalaryInfo:
    min: Decimal | None = None
    max: Decimal | None = None
    currency: str = "USD"
    period: SalaryPeriod = SalaryPeriod.YEARLY


@dataclass
class ExtractedFields:
    salary: SalaryInfo = field(default_factory=SalaryInfo)
    skills: list[str] = field(default_factory=list)
    experience_level: ExperienceLevel = ExperienceLevel.MID

    def apply_to(self, job: Job) -> Job:
        job.salary_min = self.salary.min
        job.salary_max = self.salary.max
        job.salary_currency = self.salary.currency
        job.salary_period = self.salary.period
        job.skills = list(self.skills)
        job.experience_level = self.experience_level
        return job


@dataclass
class QueryStats:
    query: str
    total_fetched: int = 0
    full_time: int = 0
    excluded_by_company: int = 0
    excluded_by_fast_food: int = 0
    kept: int = 0
    saved: int = 0
    pushed: int = 0
    elapsed: float = 0.0

    @property
    def excluded(self) -> int:
        return self.excluded_by_company + self.excluded_by_fast_food


@dataclass
class RunSummary:
    queries: list[QueryStats] = field(default_factory=list)
    store_available: bool = False
    report_path: str | None = None

    @property
    def jobs_found(self) -> int:
        return sum(q.total_fetched for q in self.queries)

    @property
    def jobs_processed(self) -> int:
        return sum(q.kept for q in self.queries)

    @property
    def jobs_saved(self) -> int:
        return sum(q.saved for q in self.queries)
