"""patscan: exact substring search over byte sequences.

Two build-once, scan-many searchers:

    from patscan import AhoCorasick, BoyerMoore

    BoyerMoore("AB").find_all("ABABAB")            # [0, 2, 4]
    AhoCorasick(["he", "she"]).find_all("ushers")  # "she" at 1..3, then "he" at 2..3

All public types are exported from this module for flat imports.
"""

__version__ = "0.1.0"

# Searchers
from patscan._aho_corasick import AhoCorasick, Match
from patscan._boyer_moore import BoyerMoore

# Config types, see patscan._config for details
from patscan._config import (
    ConfigParseError,
    SearcherConfig,
    SearchSetConfig,
    TypedConfig,
    load_search_config,
    parse_search_config,
)

# Registry, see patscan._registry for details
from patscan._registry import (
    AHO_CORASICK_TYPE_URL,
    BOYER_MOORE_TYPE_URL,
    MAX_PATTERN_LENGTH,
    MAX_PATTERNS,
    MAX_SEARCHERS,
    InvalidConfigError,
    PatternTooLongError,
    Registry,
    RegistryBuilder,
    SearcherError,
    TooManyPatternsError,
    TooManySearchersError,
    UnknownTypeUrlError,
    register_core_searchers,
)
from patscan._search_set import SearchSet
from patscan._types import Haystack, PatternLike, Searcher, as_bytes

__all__ = [
    # Protocols and aliases
    "Haystack",
    "PatternLike",
    "Searcher",
    "as_bytes",
    # Searchers
    "BoyerMoore",
    "AhoCorasick",
    "Match",
    "SearchSet",
    # Config types
    "TypedConfig",
    "SearcherConfig",
    "SearchSetConfig",
    "ConfigParseError",
    "parse_search_config",
    "load_search_config",
    # Registry
    "RegistryBuilder",
    "Registry",
    "register_core_searchers",
    "SearcherError",
    "UnknownTypeUrlError",
    "InvalidConfigError",
    "TooManySearchersError",
    "TooManyPatternsError",
    "PatternTooLongError",
    "BOYER_MOORE_TYPE_URL",
    "AHO_CORASICK_TYPE_URL",
    "MAX_SEARCHERS",
    "MAX_PATTERNS",
    "MAX_PATTERN_LENGTH",
]
