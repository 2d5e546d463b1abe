"""Core protocols, type aliases and byte helpers for patscan.

Both searchers work on raw bytes:
- Haystack is anything that can be searched (text is encoded as UTF-8)
- Searcher is the shared query surface (find_all / find_first / contains / count)

Case-insensitive mode folds ASCII A-Z only. Folding is a 256-entry
translation table applied to the pattern once at construction and to
each haystack byte during the scan.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

# Anything a searcher accepts as input. Offsets are always byte offsets,
# so a str haystack reports offsets into its UTF-8 encoding.
type Haystack = str | bytes | bytearray | memoryview

type PatternLike = str | bytes | bytearray

ALPHABET_SIZE = 256

_IDENTITY = bytes(range(ALPHABET_SIZE))
_ASCII_LOWER = _IDENTITY.lower()


def as_bytes(value: Haystack) -> bytes | bytearray:
    """Return the byte view of a haystack or pattern.

    Raises:
        TypeError: If value is neither text nor a bytes-like object.
    """
    if isinstance(value, str):
        return _encode_text(value)
    if isinstance(value, (bytes, bytearray)):
        return value
    return memoryview(value).tobytes()


def _encode_text(value: str) -> bytes:
    # Lone surrogates never fail: U+DC80..U+DCFF map back to the raw byte they
    # escape (os.fsdecode, click argv), any other surrogate is encoded as is.
    try:
        return value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return value.encode("utf-8", "surrogatepass")


def fold_table(ignore_case: bool) -> bytes:
    """256-entry translation table: ASCII lowercase or identity."""
    return _ASCII_LOWER if ignore_case else _IDENTITY


def fold_pattern(pattern: PatternLike, ignore_case: bool) -> bytes:
    """Case-fold a pattern once, at construction time."""
    return bytes(as_bytes(pattern)).translate(fold_table(ignore_case))


@runtime_checkable
class Searcher(Protocol):
    """Build-once, scan-many query surface shared by both searchers.

    Results are reported in scan order and never re-sorted. count() and
    contains() are derivations of find_all().
    """

    def find_all(self, haystack: Haystack, /) -> list[Any]: ...

    def find_first(self, haystack: Haystack, /) -> Any | None: ...

    def contains(self, haystack: Haystack, /) -> bool: ...

    def count(self, haystack: Haystack, /) -> int: ...
