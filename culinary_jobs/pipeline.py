"""
Culinary job pipeline.

Runs per query: search pages → full-time filter → exclusion lists →
field extraction → contact enrichment → dataset / database → run report.
"""
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable

from culinary_jobs.aggregator import fetch_all
from culinary_jobs.config import PipelineSettings
from culinary_jobs.dataset import DatasetSink
from culinary_jobs.enrichment import EnrichmentResolver
from culinary_jobs.errors import StoreUnavailableError
from culinary_jobs.exclusions import classify
from culinary_jobs.extractor import extract
from culinary_jobs.log import get_logger
from culinary_jobs.models import ExclusionReason, Job, QueryStats, RunSummary
from culinary_jobs.sources.base import JobSearchBase
from culinary_jobs.store import PersistenceStore

log = get_logger(__name__)


def process_query(
    query: str,
    settings: PipelineSettings,
    *,
    source: JobSearchBase,
    resolver: EnrichmentResolver,
    sleep: Callable[[float], None] = time.sleep,
) -> tuple[list[Job], QueryStats]:
    """Fetch, filter, extract and enrich the jobs of one query."""
    started = time.monotonic()
    stats = QueryStats(query=query)

    jobs = list(fetch_all(
        source,
        query,
        settings.location,
        settings.max_pages_per_query,
        page_delay=settings.page_delay,
        sleep=sleep,
    ))
    stats.total_fetched = len(jobs)
    if not jobs:
        log.info("No jobs found for query %r", query)
        stats.elapsed = time.monotonic() - started
        return [], stats

    if settings.full_time_only:
        jobs = [j for j in jobs if j.is_full_time]
        log.info("Filtered to %d full-time positions out of %d", len(jobs), stats.total_fetched)
    stats.full_time = len(jobs)

    if settings.test_mode:
        jobs = jobs[:settings.test_mode_limit]

    kept: list[Job] = []
    for job in jobs:
        verdict = classify(
            job.company,
            exclude_recruiters=settings.exclude_recruiters,
            exclude_fast_food=settings.exclude_fast_food,
        )
        if verdict.is_excluded:
            if verdict.reason is ExclusionReason.EXCLUDED_COMPANY:
                stats.excluded_by_company += 1
                label = "excluded company"
            else:
                stats.excluded_by_fast_food += 1
                label = "fast food restaurant"
            log.info(
                "Excluding %r at %r: %s (matched: %s)",
                job.title, job.company, label, verdict.matched_term,
            )
            continue

        log.info("Keeping %r at %r", job.title, job.company)
        extract(job).apply_to(job)
        resolver.enrich(job, enabled=settings.include_enrichment)
        kept.append(job)

    stats.kept = len(kept)
    stats.elapsed = time.monotonic() - started
    log.info(
        "Query %r: %d fetched, %d excluded (%d by company list, %d by fast food list), %d kept",
        query, stats.total_fetched, stats.excluded,
        stats.excluded_by_company, stats.excluded_by_fast_food, stats.kept,
    )
    return kept, stats


def _deliver(
    jobs: list[Job],
    stats: QueryStats,
    settings: PipelineSettings,
    sink: DatasetSink | None,
    store: PersistenceStore | None,
) -> None:
    if not jobs:
        return
    if sink is not None and settings.save_to_dataset:
        stats.pushed = sink.push(jobs)
    if store is not None:
        stats.saved = store.upsert_jobs(jobs)
        log.info("Saved %d of %d jobs for %r to the database", stats.saved, len(jobs), stats.query)


def _open_store(store: PersistenceStore | None, settings: PipelineSettings) -> PersistenceStore | None:
    if store is None or not settings.push_to_database:
        return None
    try:
        return store.open()
    except StoreUnavailableError as exc:
        log.error("Database unavailable, continuing without persistence: %s", exc)
        return None


def run(
    settings: PipelineSettings,
    *,
    source: JobSearchBase,
    resolver: EnrichmentResolver,
    store: PersistenceStore | None = None,
    sink: DatasetSink | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunSummary:
    for line in settings.describe():
        log.info("  %s", line)

    summary = RunSummary()
    results: dict[str, list[Job]] = {}
    active_store = _open_store(store, settings)
    summary.store_available = active_store is not None

    def _one(query: str) -> QueryStats:
        log.info("Searching for jobs with query %r (up to %d pages)", query, settings.max_pages_per_query)
        jobs, stats = process_query(query, settings, source=source, resolver=resolver, sleep=sleep)
        _deliver(jobs, stats, settings, sink, active_store)
        results[query] = jobs
        return stats

    def _failed(query: str, exc: Exception) -> QueryStats:
        log.error("Query %r FAILED: %s", query, exc)
        results[query] = []
        return QueryStats(query=query)

    try:
        if settings.max_workers > 1 and len(settings.queries) > 1:
            log.info("Running %d queries with %d workers", len(settings.queries), settings.max_workers)
            by_index: dict[int, QueryStats] = {}
            with ThreadPoolExecutor(max_workers=settings.max_workers) as pool:
                futures = {pool.submit(_one, q): i for i, q in enumerate(settings.queries)}
                for future in as_completed(futures):
                    i = futures[future]
                    try:
                        by_index[i] = future.result()
                    except Exception as exc:
                        by_index[i] = _failed(settings.queries[i], exc)
            summary.queries = [by_index[i] for i in range(len(settings.queries))]
        else:
            for i, query in enumerate(settings.queries):
                try:
                    summary.queries.append(_one(query))
                except Exception as exc:
                    summary.queries.append(_failed(query, exc))
                if i < len(settings.queries) - 1 and settings.query_delay > 0:
                    log.info("Waiting %.0f seconds before next query...", settings.query_delay)
                    sleep(settings.query_delay)
    finally:
        if active_store is not None:
            active_store.close()

    if settings.write_report:
        from culinary_jobs.report import build_run_report, write_run_report

        content = build_run_report(summary, results)
        summary.report_path = str(write_run_report(content))

    log.info(
        "Run complete — found=%d, processed=%d, saved=%d",
        summary.jobs_found, summary.jobs_processed, summary.jobs_saved,
    )
    return summary
