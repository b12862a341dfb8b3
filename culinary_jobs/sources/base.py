"""Collaborator interfaces for the search and enrichment providers."""
from __future__ import annotations

from abc import ABC, abstractmethod

from culinary_jobs.models import Contact, SearchPage


class JobSearchBase(ABC):
    @abstractmethod
    def search(
        self, query: str, location: str = "", next_page_token: str | None = None
    ) -> SearchPage:
        """Fetch one result page; ``next_page_token`` continues a previous page."""


class WebsiteLookupBase(ABC):
    @abstractmethod
    def lookup(self, company_name: str) -> str | None:
        pass


class ContactLookupBase(ABC):
    @abstractmethod
    def by_domain(self, domain: str, company_name: str) -> list[Contact]:
        pass

    @abstractmethod
    def by_company_name(self, company_name: str) -> list[Contact]:
        pass
