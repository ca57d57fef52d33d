"""
config_loader.py — Unified configuration loader
================================================
Merges config.yaml (shipped defaults) and config.local.yaml (per-deployment
overrides, not committed) into a single dict.

Precedence: config.local.yaml values overwrite config.yaml values on
top-level key collision. PORTFOLIO_DB_PATH overrides database.path.
"""

import os
from pathlib import Path

import yaml

DEFAULT_LANGUAGE = "fr"
SUPPORTED_LANGUAGES = ("fr", "en")


def load_config(root: Path | str | None = None) -> dict:
    """
    Load and merge config.yaml + config.local.yaml.

    Args:
        root: Project root directory. Defaults to the directory containing
              this file (i.e. the project root).

    Returns:
        Merged configuration dict.
    """
    if root is None:
        root = Path(__file__).parent
    root = Path(root)

    merged: dict = {}
    for name in ("config.yaml", "config.local.yaml"):
        path = root / name
        if path.exists():
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            merged.update(data)

    env_db = os.environ.get("PORTFOLIO_DB_PATH")
    if env_db:
        merged.setdefault("database", {})
        merged["database"] = {**merged["database"], "path": env_db}

    return merged


def i18n_settings(config: dict) -> tuple[str, tuple[str, ...]]:
    """Return (default_language, supported_languages) with defaults applied."""
    i18n = config.get("i18n", {}) or {}
    default = str(i18n.get("default_language", DEFAULT_LANGUAGE)).lower()
    supported = tuple(
        str(code).lower() for code in i18n.get("supported_languages", SUPPORTED_LANGUAGES)
    )
    if default not in supported:
        supported = (default,) + supported
    return default, supported


def db_path_from(config: dict, root: Path | str | None = None) -> Path:
    """Resolve the sqlite file location; relative paths hang off the project root."""
    if root is None:
        root = Path(__file__).parent
    path = Path((config.get("database", {}) or {}).get("path", "db/portfolio.db"))
    if not path.is_absolute():
        path = Path(root) / path
    return path
