"""
Minifier configuration.

A single option selects whether documentation is stripped before minifying.
It can be given as a YAML mapping:

    strip_docs: true
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

_yaml = YAML(typ="safe")

# Accepted spellings of the option; `remove_docs` mirrors the CLI flag
_STRIP_DOCS_KEYS = ("strip_docs", "remove_docs")


@dataclass
class MinifyCfg:
    """Configuration for the minifying pipeline."""
    strip_docs: bool = False

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> MinifyCfg:
        """Load configuration from YAML dictionary."""
        if not d:
            return MinifyCfg()

        unknown = sorted(str(k) for k in d if k not in _STRIP_DOCS_KEYS)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        cfg = MinifyCfg()
        for key in _STRIP_DOCS_KEYS:
            if key in d:
                value = d[key]
                if not isinstance(value, bool):
                    raise ConfigError(f"'{key}' must be a boolean, got {type(value).__name__}")
                cfg.strip_docs = value
        return cfg


def _read_yaml_map(path: Path) -> dict:
    """Read a YAML file and return the mapping."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ConfigError(f"could not read config {path}: {e}") from e
    except YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Path) -> MinifyCfg:
    """
    Load configuration from a YAML file.

    Raises:
        ConfigError: If the file is unreadable, not a mapping, or has invalid options
    """
    return MinifyCfg.from_dict(_read_yaml_map(path))


__all__ = ["MinifyCfg", "load_config"]
