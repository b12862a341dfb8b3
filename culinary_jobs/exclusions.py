"""Employer denylists: staffing agencies, contract caterers and fast-food brands."""
from __future__ import annotations

from culinary_jobs.log import get_logger
from culinary_jobs.models import KEEP, UNKNOWN_COMPANY, ExclusionReason, ExclusionVerdict

log = get_logger(__name__)

# Matched as plain substrings. The "washington" entries filter out listings
# whose employer field is just the DC location.
EXCLUDED_COMPANIES: frozenset[str] = frozenset(name.lower() for name in (
    "Alliance Personnel", "August Point Advisors", "Bon Appetit", "Capital Restaurant Associates",
    "Chartwells", "Compass", "CORE Recruitment", "EHS Recruiting", "Empowered Hospitality",
    "Eurest", "Goodwin Recruiting", "HMG Plus - New York", "LSG Sky Chefs", "Major Food Group",
    "Measured HR", "One Haus", "Patrice & Associates", "Persone NYC", "Playbook Advisors",
    "Restaurant Associates", "Source One Hospitality", "Ten Five Hospitality",
    "The Goodkind Group", "Tuttle Hospitality", "Willow Tree Recruiting",
    "washington", "washington dc", "washington d.c.", "washington d c",
))

# Matched on space-delimited boundaries only, so "Subway" does not hit "Subwayside Grill".
FAST_FOOD_RESTAURANTS: frozenset[str] = frozenset(name.lower() for name in (
    "McDonald's", "Burger King", "Wendy's", "Subway", "Taco Bell", "Pizza Hut",
    "KFC", "Chick-fil-A", "Sonic Drive-In", "Domino's Pizza", "Dairy Queen",
    "Papa John's", "Arby's", "Little Caesars", "Popeyes", "Chipotle", "Hardee's",
    "Jimmy John's", "Zaxby's", "Five Guys", "Whataburger", "Culver's", "Steak 'n Shake",
    "Church's Chicken", "Raising Cane's", "Wingstop", "Qdoba", "Jersey Mike's Subs",
    "Firehouse Subs", "Moe's Southwest Grill", "McAlister's Deli", "Panda Express",
    "Panera Bread", "Bojangles'", "El Pollo Loco", "Del Taco", "In-N-Out Burger",
    "White Castle", "Checkers", "Rally's", "Shake Shack", "Smashburger", "Auntie Anne's",
    "Baskin-Robbins", "Boston Market", "Captain D's", "Carl's Jr.", "Charleys Philly Steaks",
    "Chuck E. Cheese's", "Cinnabon", "Cold Stone Creamery", "Cousins Subs", "Dunkin'",
    "Einstein Bros. Bagels", "Fazoli's", "Godfather's Pizza", "Golden Corral", "Hungry Howie's",
    "Jamba Juice", "Jason's Deli", "Jollibee", "Krispy Kreme", "Krystal", "Long John Silver's",
    "Marco's Pizza", "Nathan's Famous", "Noodles & Company", "Penn Station", "Port of Subs",
    "Potbelly Sandwich Shop", "Quiznos", "Round Table Pizza", "Roy Rogers", "Rubio's",
    "Schlotzsky's", "Smoothie King", "Starbucks", "Taco John's", "Tim Hortons", "Tropical Smoothie Cafe",
    "Wienerschnitzel", "Wing Street", "Zoup!",
))

# Iteration order for deterministic matched_term reporting.
_EXCLUDED_ORDERED: tuple[str, ...] = tuple(sorted(EXCLUDED_COMPANIES))
_FAST_FOOD_ORDERED: tuple[str, ...] = tuple(sorted(FAST_FOOD_RESTAURANTS))


def is_token_match(company: str, brand: str) -> bool:
    """Whole-token match of ``brand`` inside an already lower-cased ``company``."""
    return (
        company == brand
        or f" {brand} " in company
        or company.startswith(f"{brand} ")
        or company.endswith(f" {brand}")
    )


def classify(
    company_name: str | None,
    *,
    exclude_recruiters: bool = True,
    exclude_fast_food: bool = True,
) -> ExclusionVerdict:
    if not company_name or company_name == UNKNOWN_COMPANY:
        return KEEP

    company = company_name.lower()

    if exclude_recruiters:
        for excluded in _EXCLUDED_ORDERED:
            if excluded in company:
                return ExclusionVerdict(True, ExclusionReason.EXCLUDED_COMPANY, excluded)

    if exclude_fast_food:
        for brand in _FAST_FOOD_ORDERED:
            if is_token_match(company, brand):
                return ExclusionVerdict(True, ExclusionReason.FAST_FOOD, brand)

    return KEEP
