"""Type registry for config-driven searcher construction.

The registry turns a parsed SearchSetConfig into runtime searchers:
- RegistryBuilder → .build() → Registry (immutable)
- Factories are plain callables: (config: dict) → Searcher
- load() walks the config, enforces limits and builds a SearchSet

Example::

    registry = register_core_searchers(RegistryBuilder()).build()
    config = parse_search_config(yaml.safe_load(text))
    search_set = registry.load(config)

Limits apply to config loading only. Constructing BoyerMoore or
AhoCorasick directly never fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from patscan._aho_corasick import AhoCorasick
from patscan._boyer_moore import BoyerMoore
from patscan._search_set import SearchSet
from patscan._types import as_bytes

if TYPE_CHECKING:
    from collections.abc import Callable

    from patscan._config import SearchSetConfig, SearcherConfig
    from patscan._types import PatternLike, Searcher

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_SEARCHERS = 256
MAX_PATTERNS = 4096
MAX_PATTERN_LENGTH = 8192

BOYER_MOORE_TYPE_URL = "patscan.v1.BoyerMoore"
AHO_CORASICK_TYPE_URL = "patscan.v1.AhoCorasick"

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class SearcherError(Exception):
    """Errors from loading searchers out of config."""


class UnknownTypeUrlError(SearcherError):
    """A type_url was not found in the registry."""

    def __init__(self, type_url: str, available: list[str]) -> None:
        self.type_url = type_url
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown searcher type_url: {type_url!r} (registered: {registered})"
        else:
            msg = f"unknown searcher type_url: {type_url!r} (no searcher types are registered)"
        super().__init__(msg)


class InvalidConfigError(SearcherError):
    """A config payload was malformed or semantically invalid."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class TooManySearchersError(SearcherError):
    """Config declares too many searchers."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many searchers: {count} exceeds maximum {max_}")


class TooManyPatternsError(SearcherError):
    """A multi-pattern searcher has too many keywords."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many patterns: {count} exceeds maximum {max_}")


class PatternTooLongError(SearcherError):
    """A pattern exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════

type SearcherFactory = Callable[[dict[str, Any]], Searcher]


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register searcher factories with type URLs, then call build() to
    produce an immutable Registry.
    """

    def __init__(self) -> None:
        self._factories: dict[str, SearcherFactory] = {}

    def searcher(self, type_url: str, factory: SearcherFactory) -> RegistryBuilder:
        """Register a searcher factory with a type URL."""
        self._factories[type_url] = factory
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible."""
        return Registry(_factories=MappingProxyType(dict(self._factories)))


def register_core_searchers(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the built-in BoyerMoore and AhoCorasick factories."""
    return builder.searcher(BOYER_MOORE_TYPE_URL, _boyer_moore_factory).searcher(
        AHO_CORASICK_TYPE_URL, _aho_corasick_factory
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable registry of searcher factories.

    Constructed via RegistryBuilder. Use load() to compile config into a
    runtime SearchSet.
    """

    _factories: MappingProxyType[str, SearcherFactory] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load(self, config: SearchSetConfig) -> SearchSet:
        """Load a SearchSet from configuration.

        Raises:
            TooManySearchersError: too many searchers declared
            UnknownTypeUrlError: a type_url is not registered
            InvalidConfigError: a config payload is malformed
            TooManyPatternsError: too many keywords in one searcher
            PatternTooLongError: a pattern exceeds the length limit
        """
        if len(config.searchers) > MAX_SEARCHERS:
            raise TooManySearchersError(len(config.searchers), MAX_SEARCHERS)

        searchers = tuple((s.name, self.load_searcher(s)) for s in config.searchers)
        logger.debug("loaded search set with %d searchers", len(searchers))
        return SearchSet(searchers=searchers)

    def load_searcher(self, config: SearcherConfig) -> Searcher:
        """Build one searcher through its registered factory."""
        type_url = config.searcher.type_url
        factory = self._factories.get(type_url)
        if factory is None:
            raise UnknownTypeUrlError(type_url, list(self._factories))
        logger.debug("loading searcher %r (%s)", config.name, type_url)
        return factory(config.searcher.config)

    @property
    def searcher_count(self) -> int:
        """Number of registered searcher types."""
        return len(self._factories)

    def contains_searcher(self, type_url: str) -> bool:
        """Check if a searcher type URL is registered."""
        return type_url in self._factories

    def searcher_type_urls(self) -> list[str]:
        """Return all registered searcher type URLs (sorted)."""
        return sorted(self._factories)


# ═══════════════════════════════════════════════════════════════════════════════
# Core factories
# ═══════════════════════════════════════════════════════════════════════════════


def _boyer_moore_factory(config: dict[str, Any]) -> BoyerMoore:
    if "pattern" not in config:
        msg = "BoyerMoore requires a 'pattern' field"
        raise InvalidConfigError(msg)
    pattern = _check_pattern(config["pattern"])
    return BoyerMoore(pattern, ignore_case=_ignore_case(config))


def _aho_corasick_factory(config: dict[str, Any]) -> AhoCorasick:
    patterns = config.get("patterns")
    if not isinstance(patterns, list):
        msg = f"AhoCorasick requires a 'patterns' list, got {type(patterns).__name__}"
        raise InvalidConfigError(msg)
    if len(patterns) > MAX_PATTERNS:
        raise TooManyPatternsError(len(patterns), MAX_PATTERNS)
    return AhoCorasick(
        [_check_pattern(p) for p in patterns], ignore_case=_ignore_case(config)
    )


def _check_pattern(value: Any) -> PatternLike:
    if not isinstance(value, (str, bytes)):
        msg = f"pattern must be a string or bytes, got {type(value).__name__}"
        raise InvalidConfigError(msg)
    length = len(as_bytes(value))
    if length > MAX_PATTERN_LENGTH:
        raise PatternTooLongError(length, MAX_PATTERN_LENGTH)
    return value


def _ignore_case(config: dict[str, Any]) -> bool:
    value = config.get("ignore_case", False)
    if not isinstance(value, bool):
        msg = f"ignore_case must be a boolean, got {type(value).__name__}"
        raise InvalidConfigError(msg)
    return value
