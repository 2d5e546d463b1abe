"""Single-pattern search with Boyer-Moore skip tables.

The matcher is a frozen dataclass: the folded pattern, the bad-character
table and the good-suffix table are computed once in __post_init__ and
never change afterwards, so one instance can be shared between threads.

Scan semantics:
- The window is compared right-to-left against the folded pattern.
- On a mismatch at j the window advances by
  max(j - last[c], 1, good_suffix[j]).
- After a full match the window advances by m - last[c] where c is the
  byte just past the window (or by 1 at the end of the input).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from patscan._types import ALPHABET_SIZE, as_bytes, fold_pattern, fold_table

if TYPE_CHECKING:
    from collections.abc import Iterator

    from patscan._types import Haystack, PatternLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BoyerMoore:
    """Boyer-Moore matcher for one pattern.

    When ignore_case is True, ASCII letters compare case-insensitively.
    The pattern is folded once at construction time; the haystack is
    folded byte by byte during the scan.

    An empty pattern never matches.
    """

    pattern: PatternLike
    ignore_case: bool = False
    _pattern: bytes = field(init=False, repr=False)
    _fold: bytes = field(init=False, repr=False)
    _bad_char: tuple[int, ...] = field(init=False, repr=False)
    _good_suffix: tuple[int, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        pat = fold_pattern(self.pattern, self.ignore_case)
        object.__setattr__(self, "_pattern", pat)
        object.__setattr__(self, "_fold", fold_table(self.ignore_case))
        object.__setattr__(self, "_bad_char", _bad_character_table(pat))
        object.__setattr__(self, "_good_suffix", _good_suffix_table(pat))
        logger.debug(
            "boyer-moore matcher built: %d byte pattern, ignore_case=%s",
            len(pat),
            self.ignore_case,
        )

    # ── Inspection ───────────────────────────────────────────────────────────

    @property
    def folded_pattern(self) -> bytes:
        """Pattern bytes as compared during the scan."""
        return self._pattern

    @property
    def bad_character_table(self) -> tuple[int, ...]:
        """Last index of each byte value in the pattern, or -1."""
        return self._bad_char

    @property
    def good_suffix_table(self) -> tuple[int, ...]:
        """Shift distance for a mismatch at each pattern position."""
        return self._good_suffix

    # ── Queries ──────────────────────────────────────────────────────────────

    def find_all(self, haystack: Haystack, /) -> list[int]:
        """Return every reported start offset, in ascending order."""
        return list(self.iter_starts(haystack))

    def find_first(self, haystack: Haystack, /) -> int | None:
        """Return the first start offset, or None if the pattern is absent."""
        return next(self.iter_starts(haystack), None)

    def contains(self, haystack: Haystack, /) -> bool:
        return self.find_first(haystack) is not None

    def count(self, haystack: Haystack, /) -> int:
        return len(self.find_all(haystack))

    def iter_starts(self, haystack: Haystack, /) -> Iterator[int]:
        """Yield start offsets lazily as the window moves right."""
        data = as_bytes(haystack)
        pat = self._pattern
        m = len(pat)
        n = len(data)
        if m == 0 or n == 0 or m > n:
            return

        fold = self._fold
        last = self._bad_char
        good = self._good_suffix
        s = 0
        while s <= n - m:
            j = m - 1
            while j >= 0 and pat[j] == fold[data[s + j]]:
                j -= 1

            if j < 0:
                yield s
                if s + m < n:
                    s += m - last[fold[data[s + m]]]
                else:
                    s += 1
            else:
                bad_shift = max(1, j - last[fold[data[s + j]]])
                s += max(bad_shift, good[j])


def _bad_character_table(pat: bytes) -> tuple[int, ...]:
    """Rightmost index of every byte value in pat (-1 when absent)."""
    table = [-1] * ALPHABET_SIZE
    for i, c in enumerate(pat):
        table[c] = i
    return tuple(table)


def _suffix_lengths(pat: bytes) -> list[int]:
    """suffix[i] = length of the longest substring ending at i that is also a suffix of pat."""
    m = len(pat)
    suffix = [0] * m
    suffix[m - 1] = m
    g = f = m - 1
    for i in range(m - 2, -1, -1):
        if i > g and suffix[i + m - 1 - f] < i - g:
            suffix[i] = suffix[i + m - 1 - f]
        else:
            g = min(g, i)
            f = i
            while g >= 0 and pat[g] == pat[g + m - 1 - f]:
                g -= 1
            suffix[i] = f - g
    return suffix


def _good_suffix_table(pat: bytes) -> tuple[int, ...]:
    """Strong good-suffix shifts, indexed by mismatch position."""
    m = len(pat)
    if m == 0:
        return ()

    suffix = _suffix_lengths(pat)
    shifts = [m] * m

    # A prefix of pat that is also a suffix: every mismatch left of it may
    # shift so that prefix lines up with the matched tail.
    j = 0
    for i in range(m - 1, -1, -1):
        if suffix[i] == i + 1:
            while j < m - 1 - i:
                if shifts[j] == m:
                    shifts[j] = m - 1 - i
                j += 1

    # The matched suffix reoccurs elsewhere in pat.
    for i in range(m - 1):
        shifts[m - 1 - suffix[i]] = m - 1 - i

    return tuple(shifts)
