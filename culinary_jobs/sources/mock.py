"""Offline collaborators for dry runs and when no API keys are configured."""
from __future__ import annotations

from culinary_jobs.log import get_logger
from culinary_jobs.models import Contact, RawResult, SearchPage
from culinary_jobs.sources.base import ContactLookupBase, JobSearchBase, WebsiteLookupBase

log = get_logger(__name__)

# Two pages of provider-shaped hits; the second page ends pagination.
_PAGES: list[list[dict]] = [
    [
        {
            "title": "Executive Chef",
            "company_name": "Luna Bistro",
            "location": "Brooklyn, NY",
            "via": "via Culinary Agents",
            "description": "Lead a scratch kitchen. Menu planning, food safety and inventory management.",
            "job_highlights": [
                {"title": "Compensation", "items": ["$85,000 - $95,000 a year"]},
                {"title": "Qualifications", "items": ["5+ years of kitchen management", "Butchery"]},
            ],
            "extensions": ["3 days ago", "Full-time"],
            "detected_extensions": {"posted_at": "3 days ago", "schedule": "Full-time"},
            "apply_link": "https://example.com/jobs/luna-bistro-executive-chef",
        },
        {
            "title": "Crew Member",
            "company_name": "Subway",
            "location": "Queens, NY",
            "via": "via Indeed",
            "description": "Food preparation and sanitation.",
            "detected_extensions": {"schedule": "Part-time"},
            "apply_link": "https://example.com/jobs/subway-crew",
        },
    ],
    [
        {
            "title": "Harbor House - Line Cook",
            "location": "Boston, MA",
            "via": "via ZipRecruiter",
            "description": "Grilling and sautéing on a busy line. Pay: $19 - $23 per hour.",
            "extensions": ["Full-time"],
            "apply_link": "https://example.com/jobs/harbor-house-line-cook",
        },
    ],
]


class MockSource(JobSearchBase):
    def search(
        self, query: str, location: str = "", next_page_token: str | None = None
    ) -> SearchPage:
        index = int(next_page_token) if next_page_token and next_page_token.isdigit() else 0
        if index >= len(_PAGES):
            return SearchPage()
        log.info("MockSource serving page %d for %r", index + 1, query)
        token = str(index + 1) if index + 1 < len(_PAGES) else None
        return SearchPage(
            results=[RawResult.from_provider(hit) for hit in _PAGES[index]],
            next_page_token=token,
        )


class MockWebsiteLookup(WebsiteLookupBase):
    def lookup(self, company_name: str) -> str | None:
        slug = "".join(ch for ch in company_name.lower() if ch.isalnum())
        return f"https://www.{slug}.example.com/about" if slug else None


class MockContactLookup(ContactLookupBase):
    def by_domain(self, domain: str, company_name: str) -> list[Contact]:
        return [
            Contact(
                email=f"hiring@{domain}",
                first_name="Hiring",
                last_name="Team",
                position="Recruiting",
                confidence=80,
                company=company_name,
                domain=domain,
            )
        ]

    def by_company_name(self, company_name: str) -> list[Contact]:
        return []
