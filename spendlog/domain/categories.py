"""Keyword-based category inference for line item labels.

Rules are evaluated in table order and the first match wins, so the order
of CATEGORY_RULES is significant. Add new categories by appending rules.
"""

from collections.abc import Callable

TRANSPORT = "transport"
FOOD_DRINK = "food-drink"
HOUSING = "housing"
UTILITIES = "utilities"
TELECOM = "telecom"
GIFTS = "gifts"
ENTERTAINMENT = "entertainment"
WORK = "work"
GENERIC = "generic"

Rule = tuple[Callable[[str], bool], str]


def contains_any(*keywords: str) -> Callable[[str], bool]:
    """Build a predicate matching lowercased text containing any keyword."""

    def predicate(text: str) -> bool:
        return any(keyword in text for keyword in keywords)

    return predicate


CATEGORY_RULES: tuple[Rule, ...] = (
    (contains_any("uber", "taxi", "fuel"), TRANSPORT),
    (contains_any("coffee", "cafe"), FOOD_DRINK),
    (contains_any("rent", "home"), HOUSING),
    (contains_any("bill", "electric"), UTILITIES),
    (contains_any("phone", "recharge"), TELECOM),
    (contains_any("gift", "donation"), GIFTS),
    (contains_any("movie", "sub"), ENTERTAINMENT),
    (contains_any("work", "office"), WORK),
)

CATEGORY_ICONS: dict[str, str] = {
    TRANSPORT: "🚕",
    FOOD_DRINK: "☕",
    HOUSING: "🏠",
    UTILITIES: "💡",
    TELECOM: "📱",
    GIFTS: "🎁",
    ENTERTAINMENT: "🎬",
    WORK: "💼",
    GENERIC: "🛍",
}


def infer_category(detail: str, rules: tuple[Rule, ...] = CATEGORY_RULES) -> str:
    """Classify a line item label by case-insensitive substring match.

    Args:
        detail: Line item label.
        rules: Ordered (predicate, category) pairs.

    Returns:
        First matching category, or GENERIC.
    """
    text = detail.lower()
    for predicate, category in rules:
        if predicate(text):
            return category
    return GENERIC


def category_icon(detail: str) -> str:
    """Icon for the category inferred from a label."""
    return CATEGORY_ICONS[infer_category(detail)]
