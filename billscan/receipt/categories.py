"""Spending category rules for whole bills.

A bill is classified by the first rule whose keywords appear anywhere in
its text (case-insensitive substring match). Rules are checked in order,
so put specific rules before broad ones.

Project rules can be layered in front of the built-ins from TOML:

    [[rules]]
    category = "Stationery"
    keywords = ["notebook", "pen refill"]
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

DEFAULT_CATEGORY = "General"


@dataclass(frozen=True)
class CategoryRule:
    """Keywords that map a bill to one category."""

    category: str
    keywords: tuple[str, ...]

    def matches(self, text_lower: str) -> bool:
        return any(keyword in text_lower for keyword in self.keywords)


DEFAULT_CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        "Groceries",
        (
            "grocery",
            "mart",
            "bread",
            "vegetable",
            "vegetables",
            "fruits",
            "dmart",
            "bigbazaar",
            "megamart",
            "supermarket",
        ),
    ),
    CategoryRule("Dining", ("hotel", "restaurant", "dine", "cafe", "coffee", "pizza", "burger")),
    CategoryRule("Health", ("pharm", "medical", "chemist", "tablet", "medicine")),
    CategoryRule("Fuel", ("fuel", "petrol", "diesel", "petrol pump", "fuel pump")),
    CategoryRule("Electronics", ("electronics", "mobile", "charger", "headphone", "speaker")),
)


def _normalize_keywords(raw: Any) -> tuple[str, ...]:
    """Normalize keywords value from TOML into a lower-case tuple."""
    if isinstance(raw, str):
        value = raw.strip().lower()
        return (value,) if value else tuple()
    if isinstance(raw, list):
        return tuple(str(v).strip().lower() for v in raw if str(v).strip())
    return tuple()


def build_category_rules(
    configs: Sequence[Mapping[str, Any]] | None = None,
    include_defaults: bool = True,
) -> tuple[CategoryRule, ...]:
    """
    Merge category rules from in-memory TOML configs in front of the built-ins.

    Configs are applied in the given order; within a config, file order is kept.
    Entries without a category or keywords are ignored.
    """
    rules: list[CategoryRule] = []
    for config in configs or ():
        for raw_rule in config.get("rules", []):
            if not isinstance(raw_rule, Mapping):
                continue
            category = str(raw_rule.get("category", "")).strip()
            keywords = _normalize_keywords(raw_rule.get("keywords"))
            if category and keywords:
                rules.append(CategoryRule(category, keywords))
    if include_defaults:
        rules.extend(DEFAULT_CATEGORY_RULES)
    return tuple(rules)


def categorize_text(
    text: str,
    rules: Sequence[CategoryRule] = DEFAULT_CATEGORY_RULES,
    default: str = DEFAULT_CATEGORY,
) -> str:
    """Return the category of the first matching rule, or the default."""
    text_lower = text.lower()
    for rule in rules:
        if rule.matches(text_lower):
            return rule.category
    return default
