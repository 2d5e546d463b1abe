"""Test utilities for patscan.

Brute-force reference searches with the same conventions as the real
searchers (byte offsets, ASCII-only folding, inclusive match ends). They
are quadratic and exist to check the fast paths, not to replace them.

>>> from patscan import BoyerMoore
>>> from patscan.testing import naive_find_all
>>> BoyerMoore("ab").find_all("abab") == naive_find_all("ab", "abab")
True
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from patscan._aho_corasick import Match
from patscan._types import as_bytes, fold_pattern, fold_table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from patscan._types import Haystack, PatternLike


def naive_find_all(
    pattern: PatternLike, haystack: Haystack, ignore_case: bool = False
) -> list[int]:
    """Every start offset of pattern in haystack, overlapping ones included."""
    pat = fold_pattern(pattern, ignore_case)
    data = bytes(as_bytes(haystack)).translate(fold_table(ignore_case))
    if not pat:
        return []
    return [s for s in range(len(data) - len(pat) + 1) if data.startswith(pat, s)]


def naive_find_matches(
    patterns: Sequence[PatternLike], haystack: Haystack, ignore_case: bool = False
) -> list[Match]:
    """Every occurrence of every non-empty pattern, ordered by (end, pattern_index)."""
    matches: list[Match] = []
    for index, pattern in enumerate(patterns):
        size = len(fold_pattern(pattern, ignore_case))
        matches.extend(
            Match(index, s, s + size - 1)
            for s in naive_find_all(pattern, haystack, ignore_case)
        )
    matches.sort(key=lambda m: (m.end, m.pattern_index))
    return matches
