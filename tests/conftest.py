"""Shared pytest fixtures for billscan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from billscan.runtime.category_rules import load_brand_keywords, load_category_rules
from billscan.runtime.paths import reset_paths


@pytest.fixture(autouse=True)
def billscan_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point all runtime paths at a per-test data directory."""
    home = tmp_path / "billscan-home"
    monkeypatch.setenv("BILLSCAN_HOME", str(home))
    monkeypatch.delenv("BILLSCAN_OCR_URL", raising=False)
    reset_paths()
    load_category_rules.cache_clear()
    load_brand_keywords.cache_clear()
    yield home
    reset_paths()
    load_category_rules.cache_clear()
    load_brand_keywords.cache_clear()
