"""Config types for data-driven searcher construction.

Config-driven construction path:
  dict / YAML → parse_search_config() → SearchSetConfig → Registry.load() → SearchSet

Relationship to runtime types:

| Config type       | Runtime type                  |
|-------------------|-------------------------------|
| SearchSetConfig   | SearchSet                     |
| SearcherConfig    | (name, Searcher) pair         |
| TypedConfig       | BoyerMoore / AhoCorasick / …  |

Example document::

    searchers:
      - name: greeting
        type_url: patscan.v1.BoyerMoore
        config: {pattern: hello, ignore_case: true}
      - name: pronouns
        type_url: patscan.v1.AhoCorasick
        config: {patterns: [he, she, his, hers]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class TypedConfig:
    """Reference to a registered searcher type with its configuration.

    - type_url identifies the registered factory
    - config carries the type-specific payload (patterns, ignore_case, ...)
    """

    type_url: str
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SearcherConfig:
    """A named searcher declaration."""

    name: str
    searcher: TypedConfig


@dataclass(frozen=True, slots=True)
class SearchSetConfig:
    """Ordered collection of searcher declarations.

    Load into a runtime SearchSet via Registry.load().
    """

    searchers: tuple[SearcherConfig, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.searchers)


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


def parse_search_config(data: dict[str, Any]) -> SearchSetConfig:
    """Parse a dict into a SearchSetConfig.

    Raises:
        ConfigParseError: If the dict is malformed or names are duplicated.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_searchers = data.get("searchers")
    if raw_searchers is None:
        msg = "missing required field 'searchers'"
        raise ConfigParseError(msg)
    if not isinstance(raw_searchers, list):
        msg = f"'searchers' must be a list, got {type(raw_searchers).__name__}"
        raise ConfigParseError(msg)

    searchers = tuple(_parse_searcher(s) for s in raw_searchers)

    seen: set[str] = set()
    for s in searchers:
        if s.name in seen:
            msg = f"duplicate searcher name: {s.name!r}"
            raise ConfigParseError(msg)
        seen.add(s.name)

    return SearchSetConfig(searchers=searchers)


def load_search_config(path: str | Path) -> SearchSetConfig:
    """Read a YAML (or JSON) file and parse it into a SearchSetConfig.

    Raises:
        ConfigParseError: If the file is not valid YAML or is malformed.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    with path.open("rb") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"{path}: invalid YAML: {e}"
            raise ConfigParseError(msg) from e
    return parse_search_config(data)


def _parse_searcher(data: dict[str, Any]) -> SearcherConfig:
    """Parse one searcher entry."""
    if not isinstance(data, dict):
        msg = f"searcher must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    name = data.get("name")
    if name is None:
        msg = "searcher missing required field 'name'"
        raise ConfigParseError(msg)
    if not isinstance(name, str) or not name:
        msg = f"searcher name must be a non-empty string, got {name!r}"
        raise ConfigParseError(msg)

    return SearcherConfig(name=name, searcher=_parse_typed_config(data))


def _parse_typed_config(data: dict[str, Any]) -> TypedConfig:
    """Parse the type_url / config pair of a searcher entry."""
    if "type_url" not in data:
        msg = "searcher missing required field 'type_url'"
        raise ConfigParseError(msg)

    type_url = data["type_url"]
    if not isinstance(type_url, str):
        msg = f"type_url must be a string, got {type(type_url).__name__}"
        raise ConfigParseError(msg)

    config = data.get("config", {})
    if not isinstance(config, dict):
        msg = f"config must be a dict, got {type(config).__name__}"
        raise ConfigParseError(msg)

    return TypedConfig(type_url=type_url, config=config)
