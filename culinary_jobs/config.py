"""Load run settings (YAML) and credentials (env / .env)."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from culinary_jobs.errors import ConfigError
from culinary_jobs.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "pipeline.yaml"
REPORTS_DIR: Path = ROOT_DIR / "reports"
DATA_DIR: Path = ROOT_DIR / "data"

DEFAULT_QUERIES: list[str] = [
    "restaurant chefs united states",
    "restaurant managers united states",
    "hotel chefs united states",
    "hotel managers united states",
    "private chefs united states",
    "household chefs united states",
    "restaurant executives united states",
    "hotel executives united states",
]

# camelCase input keys of the hosted actor, also accepted in YAML files.
_KEY_ALIASES: dict[str, str] = {
    "maxPagesPerQuery": "max_pages_per_query",
    "fullTimeOnly": "full_time_only",
    "excludeFastFood": "exclude_fast_food",
    "excludeRecruiters": "exclude_recruiters",
    "includeHunterData": "include_enrichment",
    "deduplicateJobs": "deduplicate_jobs",
    "saveToDataset": "save_to_dataset",
    "pushToDatabase": "push_to_database",
    "databaseUrl": "database_url",
}


@dataclass
class PipelineSettings:
    queries: list[str] = field(default_factory=lambda: list(DEFAULT_QUERIES))
    location: str = ""
    max_pages_per_query: int = 10
    full_time_only: bool = True
    exclude_fast_food: bool = True
    exclude_recruiters: bool = True
    include_enrichment: bool = True
    deduplicate_jobs: bool = True
    save_to_dataset: bool = True
    push_to_database: bool = True
    database_url: str = ""
    write_report: bool = True
    page_delay: float = 1.0
    job_delay: float = 2.0
    query_delay: float = 5.0
    max_workers: int = 1
    test_mode: bool = False
    test_mode_limit: int = 5

    def validate(self) -> "PipelineSettings":
        self.queries = [q.strip() for q in self.queries if isinstance(q, str) and q.strip()]
        if not self.queries:
            raise ConfigError("At least one search query is required")
        duplicates = sorted({q for q in self.queries if self.queries.count(q) > 1})
        if duplicates:
            raise ConfigError(f"Duplicate search queries: {', '.join(duplicates)}")
        if self.max_pages_per_query < 1:
            raise ConfigError(f"max_pages_per_query must be >= 1, got {self.max_pages_per_query}")
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be >= 1, got {self.max_workers}")
        for name in ("page_delay", "job_delay", "query_delay"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if self.test_mode:
            self.queries = self.queries[:1]
            self.max_pages_per_query = min(self.max_pages_per_query, 3)
        return self

    def describe(self) -> list[str]:
        return [
            f"Queries: {', '.join(self.queries)}",
            f"Max pages per query: {self.max_pages_per_query}",
            f"Location filter: {self.location or 'None'}",
            f"Full-time only: {self.full_time_only}",
            f"Exclude fast food: {self.exclude_fast_food}",
            f"Exclude recruiters: {self.exclude_recruiters}",
            f"Include contact enrichment: {self.include_enrichment}",
            f"Save to dataset: {self.save_to_dataset}",
            f"Push to database: {self.push_to_database}",
            f"Deduplicate jobs: {self.deduplicate_jobs}",
            f"Parallel queries: {self.max_workers}",
            f"Test mode: {self.test_mode}"
            + (f" (limit: {self.test_mode_limit} jobs)" if self.test_mode else ""),
        ]


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def ensure_dirs() -> None:
    for d in (REPORTS_DIR, DATA_DIR):
        d.mkdir(parents=True, exist_ok=True)


def settings_from_dict(data: dict[str, Any]) -> PipelineSettings:
    known = {f.name for f in fields(PipelineSettings)}
    kwargs: dict[str, Any] = {}
    for key, value in (data or {}).items():
        name = _KEY_ALIASES.get(key, key)
        if name not in known:
            log.warning("Ignoring unknown setting %r", key)
            continue
        kwargs[name] = value

    if isinstance(kwargs.get("queries"), str):
        kwargs["queries"] = [kwargs["queries"]]
    try:
        settings = PipelineSettings(**kwargs)
        settings.max_pages_per_query = int(settings.max_pages_per_query)
        settings.max_workers = int(settings.max_workers)
        settings.test_mode_limit = int(settings.test_mode_limit)
        for name in ("page_delay", "job_delay", "query_delay"):
            setattr(settings, name, float(getattr(settings, name)))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc
    return settings.validate()


def load_settings(path: Path | str | None = None) -> PipelineSettings:
    """Settings from YAML (defaults when the file is absent), DATABASE_URL from env."""
    settings_path = Path(path) if path else SETTINGS_PATH
    data: dict[str, Any] = {}
    if settings_path.exists():
        with open(settings_path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Could not parse {settings_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{settings_path} must contain a mapping")
    elif path:
        raise ConfigError(f"Settings file not found: {settings_path}")
    else:
        log.info("No %s found — using default settings", settings_path.name)

    settings = settings_from_dict(data)
    if not settings.database_url:
        settings.database_url = get_env("DATABASE_URL")
    return settings
