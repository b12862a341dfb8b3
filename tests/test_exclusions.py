"""Tests for the employer denylists."""
import pytest

from culinary_jobs.exclusions import EXCLUDED_COMPANIES, FAST_FOOD_RESTAURANTS, classify
from culinary_jobs.models import ExclusionReason


def test_lists_are_lowercase_frozensets():
    assert isinstance(EXCLUDED_COMPANIES, frozenset)
    assert isinstance(FAST_FOOD_RESTAURANTS, frozenset)
    assert all(name == name.lower() for name in EXCLUDED_COMPANIES | FAST_FOOD_RESTAURANTS)


@pytest.mark.parametrize("company,term", [
    ("Chartwells Corp", "chartwells"),
    ("RESTAURANT ASSOCIATES LLC", "restaurant associates"),
    ("Compass Group USA", "compass"),
    ("Hilton Washington DC", "washington"),
])
def test_excluded_companies_match_as_substrings(company, term):
    verdict = classify(company)

    assert verdict.is_excluded
    assert verdict.reason is ExclusionReason.EXCLUDED_COMPANY
    assert term in company.lower()
    assert verdict.matched_term in EXCLUDED_COMPANIES


@pytest.mark.parametrize("company", [
    "mcdonald's express",
    "Subway",
    "Downtown Starbucks",
    "The Five Guys Franchise",
])
def test_fast_food_on_token_boundaries(company):
    verdict = classify(company)

    assert verdict.is_excluded
    assert verdict.reason is ExclusionReason.FAST_FOOD


def test_fast_food_match_reports_brand():
    assert classify("mcdonald's express").matched_term == "mcdonald's"


@pytest.mark.parametrize("company", [
    "McDonald'sville Cafe",
    "Subwayside Grill",
    "Checkerspot Brewing",
    "Luna Bistro",
])
def test_fast_food_brand_inside_a_word_is_kept(company):
    assert not classify(company).is_excluded


def test_brand_flanked_by_spaces_is_excluded():
    # " mcdonald's " appears with a space on both sides.
    verdict = classify("Uncle McDonald's Diner")

    assert verdict.is_excluded
    assert verdict.reason is ExclusionReason.FAST_FOOD


def test_excluded_company_list_checked_first():
    verdict = classify("Compass Subway")
    assert verdict.reason is ExclusionReason.EXCLUDED_COMPANY


@pytest.mark.parametrize("company", ["", None, "Unknown Company"])
def test_sentinel_and_empty_never_excluded(company):
    verdict = classify(company)

    assert not verdict.is_excluded
    assert verdict.reason is ExclusionReason.NONE
    assert verdict.matched_term is None


def test_toggles_disable_each_list():
    assert not classify("Chartwells", exclude_recruiters=False).is_excluded
    assert not classify("Subway", exclude_fast_food=False).is_excluded
    assert classify("Compass Subway", exclude_recruiters=False).reason is ExclusionReason.FAST_FOOD
