"""Tests for salary, skills and experience-level extraction."""
from decimal import Decimal

import pytest

from culinary_jobs.extractor import experience_level, extract, parse_salary
from culinary_jobs.models import ExperienceLevel, HighlightBlock, Job, SalaryPeriod


def make_job(title="Line Cook", description="", highlights=None) -> Job:
    return Job(title=title, description=description, highlights=highlights or [])


class TestSalary:
    def test_hourly_range_from_description(self):
        salary = extract(make_job(description="Pay: $18 - $22 per hour")).salary

        assert salary.min == Decimal("18")
        assert salary.max == Decimal("22")
        assert salary.period is SalaryPeriod.HOURLY
        assert salary.currency == "USD"

    def test_compensation_highlight_beats_description(self):
        job = make_job(
            description="Starting at $15 an hour",
            highlights=[HighlightBlock("Compensation", ["$85,000 - $95,000 a year"])],
        )
        salary = extract(job).salary

        assert salary.min == Decimal("85000")
        assert salary.max == Decimal("95000")
        assert salary.period is SalaryPeriod.YEARLY

    def test_other_highlight_blocks_are_ignored(self):
        job = make_job(
            description="$20/hour",
            highlights=[HighlightBlock("Benefits", ["$500 signing bonus"])],
        )
        salary = extract(job).salary

        assert salary.min == Decimal("20")
        assert salary.period is SalaryPeriod.HOURLY

    def test_single_amount_sets_max_to_min(self):
        salary = parse_salary("Salary $60,000")

        assert salary.min == salary.max == Decimal("60000")
        assert salary.period is SalaryPeriod.YEARLY

    @pytest.mark.parametrize("text,period", [
        ("$200 per day", SalaryPeriod.DAILY),
        ("$900 a week", SalaryPeriod.WEEKLY),
        ("$4,000 / month", SalaryPeriod.MONTHLY),
        ("$70,000 per YEAR", SalaryPeriod.YEARLY),
    ])
    def test_period_keywords(self, text, period):
        assert parse_salary(text).period is period

    def test_unparseable_amount_is_skipped(self):
        salary = parse_salary("Tips $. plus $17.50 per hour")

        assert salary.min == Decimal("17.50")
        assert salary.period is SalaryPeriod.HOURLY

    def test_no_salary_gives_defaults(self):
        salary = extract(make_job(description="Competitive pay")).salary

        assert salary.min is None and salary.max is None
        assert salary.period is SalaryPeriod.YEARLY
        assert salary.currency == "USD"


class TestSkills:
    def test_description_and_qualifications_union_in_order(self):
        job = make_job(
            description="Baking and Food Safety, plus more baking.",
            highlights=[
                HighlightBlock("Qualifications", ["Knife skills", "Food safety certification"]),
                HighlightBlock("Responsibilities", ["Catering events"]),
            ],
        )
        assert extract(job).skills == ["baking", "food safety", "knife skills"]

    def test_no_skills(self):
        assert extract(make_job(description="Dishwasher wanted")).skills == []


class TestExperienceLevel:
    @pytest.mark.parametrize("title,level", [
        ("Senior Executive Chef", ExperienceLevel.EXECUTIVE),
        ("Chef de Cuisine", ExperienceLevel.EXECUTIVE),
        ("Sous Chef", ExperienceLevel.SENIOR),
        ("Lead Line Cook", ExperienceLevel.SENIOR),
        ("Junior Sous Chef", ExperienceLevel.SENIOR),
        ("Commis Chef", ExperienceLevel.ENTRY),
        ("Kitchen Trainee", ExperienceLevel.ENTRY),
        ("Line Cook", ExperienceLevel.MID),
    ])
    def test_tier_precedence(self, title, level):
        assert experience_level(title) is level

    def test_description_does_not_affect_level(self):
        job = make_job(title="Line Cook", description="Report to the executive chef")
        assert extract(job).experience_level is ExperienceLevel.MID


def test_apply_to_merges_fields_into_job():
    job = make_job(title="Sous Chef", description="Pay: $25 per hour. Plating and pastry.")
    extract(job).apply_to(job)

    assert job.salary_min == Decimal("25")
    assert job.salary_period is SalaryPeriod.HOURLY
    assert job.skills == ["plating", "pastry"]
    assert job.experience_level is ExperienceLevel.SENIOR
