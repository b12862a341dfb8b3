"""Derive salary, skills and seniority from a job's text.

All heuristics are plain regex/substring scans over the title, description
and the provider's highlight blocks; nothing here does I/O.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from culinary_jobs.models import (
    ExperienceLevel,
    ExtractedFields,
    Job,
    SalaryInfo,
    SalaryPeriod,
)

SALARY_RE = re.compile(
    r"\$([0-9,.]+)(?:\s*-\s*\$([0-9,.]+))?(?:\s*(per|a|/)\s*(hour|year|month|week|day))?",
    re.IGNORECASE,
)

PERIODS: dict[str, SalaryPeriod] = {
    "hour": SalaryPeriod.HOURLY,
    "day": SalaryPeriod.DAILY,
    "week": SalaryPeriod.WEEKLY,
    "month": SalaryPeriod.MONTHLY,
    "year": SalaryPeriod.YEARLY,
}

CULINARY_SKILLS: tuple[str, ...] = (
    "cooking", "baking", "grilling", "sautéing", "knife skills",
    "food preparation", "menu planning", "recipe development",
    "food safety", "sanitation", "inventory management", "kitchen management",
    "plating", "garnishing", "culinary arts", "pastry", "butchery",
    "sous vide", "food presentation", "catering", "banquet",
)

# Checked in this order; the first tier with any keyword in the title wins.
EXPERIENCE_TIERS: tuple[tuple[ExperienceLevel, tuple[str, ...]], ...] = (
    (ExperienceLevel.EXECUTIVE, ("executive chef", "head chef", "chef de cuisine", "culinary director")),
    (ExperienceLevel.SENIOR, ("senior", "sr.", "lead", "sous chef")),
    (ExperienceLevel.ENTRY, ("junior", "jr.", "entry", "trainee", "apprentice", "commis")),
)

COMPENSATION = "Compensation"
QUALIFICATIONS = "Qualifications"


def _highlight_items(job: Job, title: str) -> list[str]:
    return [item for block in job.highlights if block.title == title for item in block.items]


def _to_decimal(text: str | None) -> Decimal | None:
    if not text:
        return None
    try:
        value = Decimal(text.replace(",", ""))
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def parse_salary(text: str) -> SalaryInfo | None:
    """Salary from the first ``$`` amount in ``text`` that parses as a number."""
    for m in SALARY_RE.finditer(text):
        low = _to_decimal(m.group(1))
        if low is None:
            continue
        high = _to_decimal(m.group(2))
        period = PERIODS.get((m.group(4) or "").lower(), SalaryPeriod.YEARLY)
        return SalaryInfo(min=low, max=high if high is not None else low, period=period)
    return None


def extract_salary(job: Job) -> SalaryInfo:
    for item in _highlight_items(job, COMPENSATION):
        info = parse_salary(item)
        if info:
            return info
    if job.description:
        info = parse_salary(job.description)
        if info:
            return info
    return SalaryInfo()


def extract_skills(job: Job) -> list[str]:
    skills: list[str] = []
    texts = [job.description or ""] + _highlight_items(job, QUALIFICATIONS)
    for text in texts:
        low = text.lower()
        for skill in CULINARY_SKILLS:
            if skill in low and skill not in skills:
                skills.append(skill)
    return skills


def experience_level(title: str) -> ExperienceLevel:
    low = (title or "").lower()
    for level, keywords in EXPERIENCE_TIERS:
        if any(k in low for k in keywords):
            return level
    return ExperienceLevel.MID


def extract(job: Job) -> ExtractedFields:
    return ExtractedFields(
        salary=extract_salary(job),
        skills=extract_skills(job),
        experience_level=experience_level(job.title),
    )
