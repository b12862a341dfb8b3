"""Generate a Markdown summary of a pipeline run."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import urlparse

from culinary_jobs.config import REPORTS_DIR
from culinary_jobs.log import get_logger
from culinary_jobs.models import Job, RunSummary

log = get_logger(__name__)

MAX_EMAILS_SHOWN = 20
DESCRIPTION_EXCERPT = 150


def _short_url_label(url: str) -> str:
    host = urlparse(url).hostname or ""
    host = host.replace("www.", "")
    parts = host.split(".")
    return parts[0].capitalize() if parts and parts[0] else "Link"


def _money(value) -> str:
    return f"${value:,.2f}".replace(".00", "")


def format_salary(job: Job) -> str:
    if job.salary_min is None and job.salary_max is None:
        return "Not specified"
    low = _money(job.salary_min) if job.salary_min is not None else "Not specified"
    if job.salary_max is not None and job.salary_max != job.salary_min:
        return f"{low} - {_money(job.salary_max)} {job.salary_period.value}"
    return f"{low} {job.salary_period.value}"


def _excerpt(text: str) -> str:
    if len(text) <= DESCRIPTION_EXCERPT:
        return text
    return text[:DESCRIPTION_EXCERPT] + "..."


def _job_lines(job: Job) -> list[str]:
    lines = [
        f"### {job.title} @ {job.company}",
        f"- **Location:** {job.location}",
        f"- **Posted:** {job.posted_at} | **Schedule:** {job.schedule}",
        f"- **Experience level:** {job.experience_level.value}",
        f"- **Salary:** {format_salary(job)}",
        f"- **Skills:** {', '.join(job.skills) if job.skills else 'None detected'}",
    ]
    if job.apply_link:
        lines.append(f"- **Apply:** [{_short_url_label(job.apply_link)}]({job.apply_link})")
    if job.company_website:
        lines.append(f"- **Website:** {job.company_website}")
    if job.company_domain:
        lines.append(f"- **Domain:** {job.company_domain}")
    if job.contacts:
        lines.append(f"- **Emails found:** {len(job.contacts)}")
        for c in job.contacts[:MAX_EMAILS_SHOWN]:
            who = f" ({c.full_name})" if c.full_name else ""
            role = f" — {c.position}" if c.position else ""
            lines.append(f"  - {c.email}{who}{role}")
    lines.append(f"- _{_excerpt(job.description)}_")
    lines.append("")
    return lines


def build_run_report(summary: RunSummary, results: dict[str, list[Job]]) -> str:
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M")
    lines: list[str] = [f"# Culinary Jobs Run — {date} UTC", ""]

    lines.append(
        f"**{summary.jobs_found}** found | **{summary.jobs_processed}** processed | "
        f"**{summary.jobs_saved}** saved"
        + ("" if summary.store_available else " _(database unavailable)_")
    )
    lines.append("")

    if summary.queries:
        lines.append("| Query | Fetched | Full-time | Excl. company | Excl. fast food | Kept | Saved |")
        lines.append("|-------|--------:|----------:|--------------:|----------------:|-----:|------:|")
        for q in summary.queries:
            lines.append(
                f"| {q.query} | {q.total_fetched} | {q.full_time} | {q.excluded_by_company} "
                f"| {q.excluded_by_fast_food} | {q.kept} | {q.saved} |"
            )
        lines.append("")

    for q in summary.queries:
        jobs = results.get(q.query) or []
        if not jobs:
            continue
        lines.append("---")
        lines.append("")
        lines.append(f"## {q.query}")
        lines.append("")
        for job in jobs:
            lines.extend(_job_lines(job))

    log.info("Built run report: %d queries, %d jobs", len(summary.queries), summary.jobs_processed)
    return "\n".join(lines)


def write_run_report(content: str, directory: Path = REPORTS_DIR) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H%M%S")
    path = directory / f"run_{stamp}.md"
    path.write_text(content, encoding="utf-8")
    log.info("Report written → %s", path)
    return path
