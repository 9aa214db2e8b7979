from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Item:
    number: int
    label: str


@dataclass(frozen=True)
class Page:
    number: int
    page_size: int
    total: int
    items: list[Item]

    @property
    def page_count(self) -> int:
        if self.total == 0:
            return 1
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.page_count

    @property
    def previous_number(self) -> int | None:
        if not self.has_previous:
            return None
        # Past the end, "previous" jumps back to the last page with items.
        return min(self.number - 1, self.page_count)

    @property
    def next_number(self) -> int | None:
        return self.number + 1 if self.has_next else None


def paginate(*, total: int, page: int, page_size: int) -> Page:
    """Slice the demo list (``Item 1`` .. ``Item <total>``) into one page.

    Pages past the end are empty rather than an error.
    """

    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    start = (page - 1) * page_size + 1
    stop = min(total, page * page_size)
    items = [Item(number=n, label=f"Item {n}") for n in range(start, stop + 1)]
    return Page(number=page, page_size=page_size, total=total, items=items)
