"""Centralized path management for billscan.

All on-disk locations (config, saved records, OCR dumps) hang off one
root directory, taken from ``BILLSCAN_HOME`` or defaulting to ``~/.billscan``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

HOME_ENV_VAR = "BILLSCAN_HOME"


def _get_project_root() -> Path:
    """Determine the billscan data root directory."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path("~/.billscan").expanduser()


@dataclass
class ProjectPaths:
    """Container for all billscan paths."""

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def category_rules(self) -> Path:
        """Project-level category and brand keyword rules TOML file."""
        return self.config / "categories.toml"

    # --- Data paths ---
    @property
    def records(self) -> Path:
        """Saved parsed records, one JSON file per record."""
        return self.root / "records"

    @property
    def ocr_json(self) -> Path:
        """Raw OCR service responses (JSON)."""
        return self.root / "ocr_json"

    def ensure_directories(self) -> None:
        """Create data directories if they don't exist."""
        self.records.mkdir(parents=True, exist_ok=True)
        self.ocr_json.mkdir(parents=True, exist_ok=True)


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached ProjectPaths so the next get_paths() re-reads the environment."""
    global _paths
    _paths = None
