from __future__ import annotations

import pytest

from radarsync.domain.pagination import Page, paginate


class FakeListing:
    """Serves fixed pages keyed by cursor and records requested cursors."""

    def __init__(self, pages: dict[str | None, Page[int]]) -> None:
        self._pages = pages
        self.requested: list[str | None] = []

    def __call__(self, cursor: str | None) -> Page[int]:
        self.requested.append(cursor)
        return self._pages[cursor]


def test_paginate_follows_cursors_until_the_last_page() -> None:
    listing = FakeListing(
        {
            None: Page(items=(1, 2), next_cursor="2"),
            "2": Page(items=(3, 4), next_cursor="4"),
            "4": Page(items=(5,), next_cursor=None),
        }
    )

    assert list(paginate(listing)) == [1, 2, 3, 4, 5]
    assert listing.requested == [None, "2", "4"]


def test_paginate_stops_on_an_empty_page_even_with_a_cursor() -> None:
    listing = FakeListing(
        {
            None: Page(items=(1,), next_cursor="1"),
            "1": Page(items=(), next_cursor="2"),
        }
    )

    assert list(paginate(listing)) == [1]
    assert listing.requested == [None, "1"]


def test_paginate_stops_after_max_items_without_fetching_more() -> None:
    listing = FakeListing(
        {
            None: Page(items=(1, 2, 3), next_cursor="3"),
            "3": Page(items=(4, 5, 6), next_cursor=None),
        }
    )

    assert list(paginate(listing, max_items=2)) == [1, 2]
    assert listing.requested == [None]


def test_paginate_propagates_page_errors_unchanged() -> None:
    def failing(cursor: str | None) -> Page[int]:
        if cursor is None:
            return Page(items=(1,), next_cursor="next")
        raise ConnectionError("boom")

    items: list[int] = []
    with pytest.raises(ConnectionError, match="boom"):
        items.extend(paginate(failing))

    assert items == [1]


def test_paginate_is_lazy_and_not_restartable() -> None:
    listing = FakeListing({None: Page(items=(1, 2), next_cursor=None)})

    iterator = paginate(listing)
    assert listing.requested == []

    assert list(iterator) == [1, 2]
    assert list(iterator) == []
    assert listing.requested == [None]
