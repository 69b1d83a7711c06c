"""Page range parsing for range based splitting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence

from ..core.exceptions import PageRangeError


@dataclass(frozen=True)
class PageRange:
    """Represents an inclusive, 1-based page range."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1 or self.end < 1:
            raise ValueError("Page numbers must be positive integers")
        if self.start > self.end:
            raise ValueError("Page range start must be less than or equal to end")

    def label(self) -> str:
        if self.start == self.end:
            return f"page_{self.start}"
        return f"pages_{self.start}-{self.end}"

    def pages(self) -> range:
        return range(self.start, self.end + 1)


def _range_tokens(ranges: Iterable[object]) -> Iterator[str]:
    for item in ranges:
        if isinstance(item, str):
            yield from (token.strip() for token in item.split(",") if token.strip())
        elif isinstance(item, int):
            yield str(item)
        elif isinstance(item, Sequence) and len(item) == 2:
            yield f"{item[0]}-{item[1]}"
        else:
            raise PageRangeError([item])


def parse_page_ranges(ranges: str | Sequence[object] | None, *, total_pages: int) -> List[PageRange]:
    """Parse ``"1-3,5"`` style strings into :class:`PageRange` objects.

    Ranges are returned in the order supplied. Any token that is malformed or
    reaches past *total_pages* raises :class:`PageRangeError`.
    """

    if ranges is None:
        raise PageRangeError([ranges], total_pages)
    if isinstance(ranges, str):
        tokens = [token.strip() for token in ranges.split(",") if token.strip()]
    else:
        tokens = list(_range_tokens(ranges))

    parsed: List[PageRange] = []
    for token in tokens:
        start_text, _, end_text = token.partition("-")
        try:
            start = int(start_text)
            end = int(end_text) if end_text else start
        except ValueError as exc:
            raise PageRangeError([token], total_pages) from exc
        if start < 1 or end > total_pages or start > end:
            raise PageRangeError([token], total_pages)
        parsed.append(PageRange(start, end))

    if not parsed:
        raise PageRangeError(tokens, total_pages)
    return parsed


__all__ = ["PageRange", "parse_page_ranges"]
