"""Runtime loaders for bill category and brand keyword rules."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from billscan.receipt.categories import CategoryRule, build_category_rules
from billscan.receipt.text_parser.fields_parser import DEFAULT_BRAND_KEYWORDS
from billscan.runtime.logging import get_logger
from billscan.runtime.paths import get_paths

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


def _config_files(config_paths: tuple[str, ...] | None) -> list[Path]:
    if config_paths is None:
        return [get_paths().category_rules]
    return [Path(path) for path in config_paths]


@lru_cache(maxsize=8)
def load_category_rules(config_paths: tuple[str, ...] | None = None) -> tuple[CategoryRule, ...]:
    """
    Load category rules from TOML files, placed in front of the built-in rules.

    Args:
        config_paths: Optional TOML path overrides. If None, uses the project
            categories.toml (a missing file means built-ins only).

    Returns:
        Category rules in priority order.
    """
    configs = tuple(_load_toml(path) for path in _config_files(config_paths))
    rules = build_category_rules(configs)
    logger.debug("Loaded %d category rules", len(rules))
    return rules


@lru_cache(maxsize=8)
def load_brand_keywords(config_paths: tuple[str, ...] | None = None) -> tuple[str, ...]:
    """
    Load known brand keywords for merchant fallback.

    Project keywords (``[brands] keywords = [...]``) come first, followed by
    the built-in list; duplicates keep their first position.
    """
    keywords: list[str] = []
    for path in _config_files(config_paths):
        brands = _load_toml(path).get("brands", {})
        if isinstance(brands, dict):
            keywords.extend(str(kw).strip().lower() for kw in brands.get("keywords", []) if str(kw).strip())
    keywords.extend(DEFAULT_BRAND_KEYWORDS)
    return tuple(dict.fromkeys(keywords))
