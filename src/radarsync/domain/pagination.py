"""Uniform walking of cursor-based remote listings."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

log = getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of a remote listing; ``next_cursor`` is ``None`` on the last page."""

    items: Sequence[T] = field(default_factory=tuple)
    next_cursor: str | None = None


PageFetcher = Callable[[str | None], Page[T]]


def paginate(
    fetch_page: PageFetcher[T],
    *,
    max_items: int | None = None,
    description: str = "listing",
) -> Iterator[T]:
    """Yield every item of a remote listing, one page at a time.

    ``fetch_page`` is called with ``None`` for the first page and with the
    cursor of the previous page afterwards. Iteration stops on an empty page,
    on a page without a next cursor, or once ``max_items`` were yielded.
    Exceptions raised by ``fetch_page`` propagate to the caller unchanged;
    retrying is left to whoever owns the whole operation.

    The returned generator advances the remote cursor as it is consumed and
    cannot be restarted.
    """

    cursor: str | None = None
    yielded = 0
    page_number = 0
    while True:
        page = fetch_page(cursor)
        page_number += 1
        log.debug(
            "Fetched %s page %s: %s items, next=%s",
            description,
            page_number,
            len(page.items),
            page.next_cursor,
        )
        if not page.items:
            return
        for item in page.items:
            yield item
            yielded += 1
            if max_items is not None and yielded >= max_items:
                return
        if not page.next_cursor:
            return
        cursor = page.next_cursor
