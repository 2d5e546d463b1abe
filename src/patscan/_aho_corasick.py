"""Multi-pattern search with an Aho-Corasick automaton.

Nodes live in an arena of parallel sequences indexed by node id (0 is the
root):
- _next[node][byte] is the target node; total after construction
- _fail[node] is the failure link
- _out[node] holds every pattern id reported at that node, already closed
  under the failure relation (own ids first, then inherited ones)

The scan therefore never walks failure links: one table lookup per byte,
then every id in the node's output is reported.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from patscan._types import ALPHABET_SIZE, as_bytes, fold_pattern, fold_table

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from patscan._types import Haystack, PatternLike

logger = logging.getLogger(__name__)

ROOT = 0


@dataclass(frozen=True, slots=True)
class Match:
    """One occurrence of one keyword.

    end is inclusive: the keyword occupies haystack[start:end + 1].
    """

    pattern_index: int
    start: int
    end: int

    @property
    def span(self) -> tuple[int, int]:
        """Half-open (start, stop) suitable for slicing."""
        return self.start, self.end + 1


@dataclass(frozen=True, slots=True)
class AhoCorasick:
    """Aho-Corasick automaton over a fixed, ordered list of keywords.

    Keyword positions are stable pattern ids. Duplicates keep separate ids.
    When ignore_case is True, keywords are folded to ASCII lowercase at
    construction and haystack bytes are folded during the scan.

    An empty keyword list never matches. An empty keyword keeps its id but
    is never reported: it is left off the root's output rather than
    matching at every position, unlike the textbook construction.
    """

    patterns: Sequence[PatternLike]
    ignore_case: bool = False
    _keywords: tuple[bytes, ...] = field(init=False, repr=False)
    _fold: bytes = field(init=False, repr=False)
    _next: tuple[tuple[int, ...], ...] = field(init=False, repr=False)
    _fail: tuple[int, ...] = field(init=False, repr=False)
    _out: tuple[tuple[int, ...], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "patterns", tuple(self.patterns))
        keywords = tuple(fold_pattern(p, self.ignore_case) for p in self.patterns)
        object.__setattr__(self, "_keywords", keywords)
        object.__setattr__(self, "_fold", fold_table(self.ignore_case))

        nxt, out = _build_trie(keywords)
        fail = _link_failures(nxt, out)

        object.__setattr__(self, "_next", tuple(tuple(row) for row in nxt))
        object.__setattr__(self, "_fail", tuple(fail))
        object.__setattr__(self, "_out", tuple(tuple(ids) for ids in out))
        logger.debug(
            "aho-corasick automaton built: %d keywords, %d nodes, ignore_case=%s",
            len(keywords),
            len(nxt),
            self.ignore_case,
        )

    # ── Inspection ───────────────────────────────────────────────────────────

    @property
    def keywords(self) -> tuple[bytes, ...]:
        """Keyword bytes as matched, indexed by pattern id."""
        return self._keywords

    @property
    def node_count(self) -> int:
        return len(self._next)

    def transition(self, node: int, byte: int) -> int:
        """Target of the total transition function."""
        return self._next[node][byte]

    def failure(self, node: int) -> int:
        return self._fail[node]

    def output(self, node: int) -> tuple[int, ...]:
        """Pattern ids reported on entering node, in emission order."""
        return self._out[node]

    # ── Queries ──────────────────────────────────────────────────────────────

    def find_all(self, haystack: Haystack, /) -> list[Match]:
        """Return every occurrence, ordered by end offset then output order."""
        return list(self.iter_matches(haystack))

    def find_first(self, haystack: Haystack, /) -> Match | None:
        """Return the first match in scan order, or None."""
        return next(self.iter_matches(haystack), None)

    def contains(self, haystack: Haystack, /) -> bool:
        return self.find_first(haystack) is not None

    def count(self, haystack: Haystack, /) -> int:
        return len(self.find_all(haystack))

    def iter_matches(self, haystack: Haystack, /) -> Iterator[Match]:
        """Yield matches lazily, one automaton transition per byte."""
        data = as_bytes(haystack)
        nxt = self._next
        out = self._out
        keywords = self._keywords
        fold = self._fold

        node = ROOT
        for i, c in enumerate(data):
            node = nxt[node][fold[c]]
            for pattern_index in out[node]:
                yield Match(pattern_index, i - len(keywords[pattern_index]) + 1, i)


def _build_trie(keywords: Sequence[bytes]) -> tuple[list[list[int]], list[list[int]]]:
    """Insert every keyword; 0 in a transition row means "no edge yet"."""
    nxt: list[list[int]] = [[ROOT] * ALPHABET_SIZE]
    out: list[list[int]] = [[]]
    for pattern_index, keyword in enumerate(keywords):
        if not keyword:
            continue
        node = ROOT
        for c in keyword:
            if nxt[node][c] == ROOT:
                nxt.append([ROOT] * ALPHABET_SIZE)
                out.append([])
                nxt[node][c] = len(nxt) - 1
            node = nxt[node][c]
        out[node].append(pattern_index)
    return nxt, out


def _link_failures(nxt: list[list[int]], out: list[list[int]]) -> list[int]:
    """Set failure links breadth-first and make the transition function total.

    Mutates nxt (missing edges are redirected along the failure chain) and
    out (each node inherits the output of its failure target).
    """
    fail = [ROOT] * len(nxt)
    queue: deque[int] = deque()

    # Missing root edges already loop back to the root.
    for c in range(ALPHABET_SIZE):
        child = nxt[ROOT][c]
        if child != ROOT:
            fail[child] = ROOT
            queue.append(child)

    while queue:
        node = queue.popleft()
        row = nxt[node]
        fallback = nxt[fail[node]]
        for c in range(ALPHABET_SIZE):
            child = row[c]
            if child != ROOT:
                fail[child] = fallback[c]
                out[child].extend(out[fail[child]])
                queue.append(child)
            else:
                row[c] = fallback[c]
    return fail
