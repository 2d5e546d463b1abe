"""SearchSet: named searchers run together over one haystack."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from patscan._types import as_bytes

if TYPE_CHECKING:
    from patscan._types import Haystack, Searcher


@dataclass(frozen=True, slots=True)
class SearchSet:
    """Ordered, immutable collection of (name, searcher) pairs.

    Every searcher sees the same haystack; results are keyed by name in
    declaration order.
    """

    searchers: tuple[tuple[str, Searcher], ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.searchers)

    def get(self, name: str) -> Searcher | None:
        for n, searcher in self.searchers:
            if n == name:
                return searcher
        return None

    def scan(self, haystack: Haystack) -> dict[str, list[Any]]:
        """Run find_all for every searcher."""
        data = as_bytes(haystack)
        return {name: searcher.find_all(data) for name, searcher in self.searchers}

    def matching(self, haystack: Haystack) -> list[str]:
        """Names of the searchers that occur at least once."""
        data = as_bytes(haystack)
        return [name for name, searcher in self.searchers if searcher.contains(data)]

    def __len__(self) -> int:
        return len(self.searchers)
