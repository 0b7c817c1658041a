"""Pager arithmetic and page-size options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from tdv_table.models import PAGE_SIZES


@dataclass(frozen=True)
class PageSizeOption:
    value: int
    label: str


def page_count(total: int, page_size: int) -> int:
    if total <= 0 or page_size <= 0:
        return 0
    return -(-total // page_size)


def page_size_options(sizes: Iterable[int] = PAGE_SIZES) -> list[PageSizeOption]:
    return [PageSizeOption(value=size, label=f"{size} / page") for size in sizes]


def find_option(options: Sequence[PageSizeOption], page_size: int) -> PageSizeOption | None:
    return next((option for option in options if option.value == page_size), None)


def pager_items(current: int, count: int, *, window: int = 1) -> list[int | None]:
    """Return page numbers to display, with None marking a collapsed gap.

    First and last pages are always shown, plus ``window`` pages either side
    of ``current``. A gap of a single page is shown as that page instead.
    """
    if count <= 0:
        return []
    current = max(1, min(current, count))
    pages = {1, count}
    pages.update(range(max(1, current - window), min(count, current + window) + 1))

    items: list[int | None] = []
    previous = 0
    for page in sorted(pages):
        if page - previous == 2:
            items.append(page - 1)
        elif page - previous > 2:
            items.append(None)
        items.append(page)
        previous = page
    return items
