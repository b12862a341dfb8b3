from dataclasses import dataclass

from .base import ContactLookupBase, JobSearchBase, WebsiteLookupBase
from .hunter import HunterContactLookup
from .mock import MockContactLookup, MockSource, MockWebsiteLookup
from .searchapi import SearchApiJobsSource
from .website import SearchApiWebsiteLookup

from culinary_jobs.log import get_logger

log = get_logger(__name__)

__all__ = [
    "JobSearchBase", "WebsiteLookupBase", "ContactLookupBase",
    "SearchApiJobsSource", "SearchApiWebsiteLookup", "HunterContactLookup",
    "MockSource", "MockWebsiteLookup", "MockContactLookup",
    "Collaborators", "get_collaborators",
]


@dataclass
class Collaborators:
    search: JobSearchBase
    website: WebsiteLookupBase
    contacts: ContactLookupBase


def get_collaborators(env_getter, *, dry_run: bool = False) -> Collaborators:
    if dry_run:
        log.info("Dry run — using offline mock collaborators")
        return Collaborators(MockSource(), MockWebsiteLookup(), MockContactLookup())

    if env_getter("SEARCH_API_KEY"):
        log.info("Registered search: SearchAPI.io (Google Jobs)")
    else:
        log.warning("SEARCH_API_KEY not set — searches will return no results")

    if env_getter("HUNTER_API_KEY"):
        log.info("Registered contact lookup: Hunter.io")
    else:
        log.warning("HUNTER_API_KEY not set — contact lookups will return nothing")

    return Collaborators(
        search=SearchApiJobsSource(env_getter),
        website=SearchApiWebsiteLookup(env_getter),
        contacts=HunterContactLookup(env_getter),
    )
