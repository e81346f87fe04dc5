from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import yaml

from app.core.config import settings

_SCORING_CONFIG_CACHE: dict[str, Any] | None = None
_SCORING_CONFIG_LOCK = threading.Lock()
_DEFAULT_SCORING_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "scoring.yaml"


def scoring_config_path() -> Path:
    if settings.scoring_config_path:
        return Path(settings.scoring_config_path)
    return _DEFAULT_SCORING_CONFIG_PATH


def load_scoring_config(path: Path | None = None) -> dict[str, Any]:
    """Read and parse a scoring config file without touching the cache."""
    config_path = path or scoring_config_path()
    if not config_path.exists():
        raise RuntimeError(
            f"Scoring config not found at '{config_path}'. "
            "Expected file: config/scoring.yaml"
        )

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(
            f"Failed to read scoring config '{config_path}': {exc}"
        ) from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(
            f"Invalid YAML in scoring config '{config_path}': {exc}"
        ) from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid scoring config '{config_path}': expected a top-level mapping."
        )
    return parsed


def get_scoring_config() -> dict[str, Any]:
    """Load scoring config from repo-level config/scoring.yaml and cache it."""
    global _SCORING_CONFIG_CACHE

    with _SCORING_CONFIG_LOCK:
        if _SCORING_CONFIG_CACHE is None:
            _SCORING_CONFIG_CACHE = load_scoring_config()
        return _SCORING_CONFIG_CACHE


def clear_scoring_config_cache() -> None:
    global _SCORING_CONFIG_CACHE

    with _SCORING_CONFIG_LOCK:
        _SCORING_CONFIG_CACHE = None


def lookup_value(config: dict[str, Any], path: str, default: Any = None) -> Any:
    if not path:
        return default

    current: Any = config
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'keywords.min_match_ratio'."""
    return lookup_value(get_scoring_config(), path, default)
