#!/usr/bin/env python3
"""Entry point to run the culinary jobs pipeline."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from culinary_jobs.config import ensure_dirs, get_env, load_settings
from culinary_jobs.errors import ConfigError
from culinary_jobs.log import get_logger, set_level

log = get_logger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search, filter, enrich and store culinary job listings.")
    parser.add_argument("--config", help="settings YAML (default: config/pipeline.yaml)")
    parser.add_argument("--dry-run", action="store_true", help="offline mock providers, no database")
    parser.add_argument("--no-db", action="store_true", help="skip the database phase")
    parser.add_argument("--verbose", action="store_true", help="DEBUG output on the console")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.verbose:
        set_level("DEBUG")

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        log.error("Invalid settings: %s", exc)
        return 2

    if args.dry_run:
        settings.page_delay = settings.job_delay = settings.query_delay = 0.0
    if args.dry_run or args.no_db:
        settings.push_to_database = False

    from culinary_jobs.dataset import DatasetSink
    from culinary_jobs.enrichment import EnrichmentResolver
    from culinary_jobs.pipeline import run
    from culinary_jobs.sources import get_collaborators
    from culinary_jobs.store import PersistenceStore

    ensure_dirs()
    collaborators = get_collaborators(get_env, dry_run=args.dry_run)
    resolver = EnrichmentResolver(
        collaborators.website,
        collaborators.contacts,
        job_delay=settings.job_delay,
    )
    store = None
    if settings.push_to_database:
        store = PersistenceStore(settings.database_url, deduplicate=settings.deduplicate_jobs)

    summary = run(
        settings,
        source=collaborators.search,
        resolver=resolver,
        store=store,
        sink=DatasetSink() if settings.save_to_dataset else None,
    )
    log.info("Run complete.")
    log.info("  Jobs found: %d", summary.jobs_found)
    log.info("  Jobs processed: %d", summary.jobs_processed)
    log.info("  Jobs saved to database: %d", summary.jobs_saved)
    if settings.push_to_database and not summary.store_available:
        log.error("Database was unavailable — check DATABASE_URL")
    if summary.report_path:
        log.info("  Report: %s", summary.report_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
