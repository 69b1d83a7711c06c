from __future__ import annotations

import pytest

from intelliconvert.core.exceptions import PageRangeError
from intelliconvert.pdf.ranges import PageRange, parse_page_ranges


def test_parse_string_ranges() -> None:
    ranges = parse_page_ranges("1-2, 4 ,5-5", total_pages=5)

    assert ranges == [PageRange(1, 2), PageRange(4, 4), PageRange(5, 5)]
    assert [page_range.label() for page_range in ranges] == ["pages_1-2", "page_4", "page_5"]


def test_parse_sequence_ranges() -> None:
    ranges = parse_page_ranges(["1-2", 3, (4, 5)], total_pages=5)

    assert [list(page_range.pages()) for page_range in ranges] == [[1, 2], [3], [4, 5]]


@pytest.mark.parametrize("spec", ["0-1", "3-2", "a-b", "6", "", None])
def test_invalid_ranges(spec) -> None:
    with pytest.raises(PageRangeError):
        parse_page_ranges(spec, total_pages=5)


def test_page_range_validation() -> None:
    with pytest.raises(ValueError):
        PageRange(3, 1)
