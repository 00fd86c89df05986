"""YAML/dict config loader for text-checking.

Supports loading from a YAML file or a plain dict (for embedding
in a larger application config).

Example YAML:

    text_checking:
      checkings:
        - date
        - link
        - phone_number
        - regex: "#\\w+"
        - range: [0, 4]        # location, length
        - action
      detector:
        enabled: true
        language: en
        score_threshold: 0.35
        default_region: US
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from .kinds import checking_for
from .resolver import Resolver, ResolverConfig
from .types import ACTION, DEFAULT_CHECKINGS, Checking, Range, Regex, TextRange


class ConfigError(ValueError):
    """Raised for malformed text-checking configuration."""


def parse_checking(entry: Any) -> Checking:
    """Parse one checking entry: a category name, ``action``, or a regex/range mapping."""
    if isinstance(entry, str):
        if entry == "action":
            return ACTION
        checking = checking_for(entry)
        if checking is None:
            raise ConfigError(f"unknown checking: {entry!r}")
        return checking

    if isinstance(entry, dict) and len(entry) == 1:
        (key, value), = entry.items()
        if key == "regex" and isinstance(value, str):
            return Regex(value)
        if key == "range" and isinstance(value, (list, tuple)) and len(value) == 2:
            location, length = value
            if isinstance(location, int) and isinstance(length, int) and length >= 0:
                return Range(TextRange(location, length))
    raise ConfigError(f"malformed checking entry: {entry!r}")


def load_config(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    # Support nested under "text_checking" key or flat
    if "text_checking" in data:
        data = data["text_checking"]

    detector = data.get("detector") or {}
    if not isinstance(detector, dict):
        raise ConfigError(f"detector must be a mapping, got {detector!r}")
    entries = data.get("checkings")
    checkings = (
        DEFAULT_CHECKINGS if entries is None
        else tuple(parse_checking(e) for e in entries)
    )
    return {
        "checkings": checkings,
        "use_detector": detector.get("enabled", True),
        "language": detector.get("language", "en"),
        "score_threshold": detector.get("score_threshold", 0.35),
        "default_region": detector.get("default_region", "US"),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml  # optional dependency
    with open(path) as f:
        return load_config(yaml.safe_load(f) or {})


def create_resolver(config: dict[str, Any]) -> Resolver:
    """Create a configured resolver from a raw or normalized config dict."""
    cfg = config if "use_detector" in config else load_config(config)
    return Resolver(ResolverConfig(
        checkings=cfg["checkings"],
        use_detector=cfg["use_detector"],
        language=cfg["language"],
        score_threshold=cfg["score_threshold"],
        default_region=cfg["default_region"],
    ))
