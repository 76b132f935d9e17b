"""Index-addressed pagination for SVG text and extracted records.

A sequence of length L split at size N has ceil(L / N) pages; page i is
sequence[i * N : (i + 1) * N]. Empty sequences have zero pages, so every
index is out of range for them. Strings are measured in code points, so a
page never splits a non-BMP character.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from mapserver.exceptions import ChunkOutOfRangeError

T = TypeVar("T")

# Characters per chunk of raw SVG markup
SVG_CHUNK_SIZE = 5000
# Records per chunk of identifiers / geometry
RECORD_CHUNK_SIZE = 1000


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of a larger sequence."""

    items: Sequence[T]
    index: int
    total_pages: int


def count_pages(length: int, size: int) -> int:
    """Number of pages needed to hold `length` items at `size` per page."""
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return -(-length // size)


def paginate(sequence: Sequence[T], size: int, index: int) -> Page[T]:
    """
    Return page `index` of `sequence` split into pages of `size` items.

    Works for strings (pages are substrings) and lists (pages are sublists).

    Raises:
        ValueError: size is not positive
        ChunkOutOfRangeError: index is negative or >= total pages
    """
    total = count_pages(len(sequence), size)
    if index < 0 or index >= total:
        raise ChunkOutOfRangeError(index, total)

    start = index * size
    return Page(items=sequence[start : start + size], index=index, total_pages=total)


def iter_pages(sequence: Sequence[T], size: int) -> Iterator[Page[T]]:
    """Yield every page of `sequence` in order."""
    total = count_pages(len(sequence), size)
    for index in range(total):
        start = index * size
        yield Page(items=sequence[start : start + size], index=index, total_pages=total)
