"""Hunter.io contact lookup (v2 domain-search)."""
from __future__ import annotations

import requests

from culinary_jobs.log import get_logger
from culinary_jobs.models import Contact
from culinary_jobs.retry import NETWORK_ERRORS, raise_for_transient, retry
from culinary_jobs.sources.base import ContactLookupBase

log = get_logger(__name__)

API_URL = "https://api.hunter.io/v2/domain-search"


def _to_contacts(data: dict, company_name: str) -> list[Contact]:
    payload = data.get("data") or {}
    domain = payload.get("domain")
    contacts: list[Contact] = []
    for entry in payload.get("emails") or []:
        if not isinstance(entry, dict) or not entry.get("value"):
            continue
        confidence = entry.get("confidence")
        contacts.append(
            Contact(
                email=entry["value"],
                first_name=entry.get("first_name"),
                last_name=entry.get("last_name"),
                position=entry.get("position"),
                confidence=confidence if isinstance(confidence, int) else None,
                company=company_name,
                domain=domain,
            )
        )
    return contacts


class HunterContactLookup(ContactLookupBase):
    def __init__(self, env_getter, *, limit: int = 20, timeout: float = 15.0) -> None:
        self.api_key: str = env_getter("HUNTER_API_KEY")
        self.limit = limit
        self.timeout = timeout

    @retry(max_attempts=3, base_delay=2.0, retryable=NETWORK_ERRORS)
    def _fetch(self, params: dict) -> dict:
        params = {**params, "api_key": self.api_key, "limit": self.limit}
        r = requests.get(API_URL, params=params, timeout=self.timeout)
        raise_for_transient(r)
        if r.status_code in (401, 403):
            log.warning("Hunter.io rejected the API key (HTTP %d)", r.status_code)
            return {}
        if not r.ok:
            log.warning("Hunter.io HTTP %d for %s", r.status_code, params.get("domain") or params.get("company"))
            return {}
        data = r.json()
        return data if isinstance(data, dict) else {}

    def by_domain(self, domain: str, company_name: str) -> list[Contact]:
        if not self.api_key:
            log.debug("HUNTER_API_KEY not set — skipping domain search")
            return []
        return _to_contacts(self._fetch({"domain": domain}), company_name)

    def by_company_name(self, company_name: str) -> list[Contact]:
        if not self.api_key:
            log.debug("HUNTER_API_KEY not set — skipping company search")
            return []
        return _to_contacts(self._fetch({"company": company_name}), company_name)
