import math
from dataclasses import dataclass
from typing import Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Paginator:
    """Fixed-size, 1-indexed pages over any sequence."""
    page_size: int = 20
    window: int = 5

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1.")
        if self.window < 1:
            raise ValueError("window must be at least 1.")

    def total_pages(self, length: int) -> int:
        """At least one page, even for an empty sequence."""
        return max(1, math.ceil(length / self.page_size))

    def clamp(self, page: int, length: int) -> int:
        return min(max(page, 1), self.total_pages(length))

    def page(self, items: Sequence[T], page: int) -> list[T]:
        start = (self.clamp(page, len(items)) - 1) * self.page_size
        return list(items[start:start + self.page_size])

    def pages(self, items: Sequence[T]) -> list[list[T]]:
        return [self.page(items, number) for number in range(1, self.total_pages(len(items)) + 1)]

    def page_numbers(self, current: int, total_pages: int) -> list[int]:
        """
        Numbered buttons to show: centred on the current page, clamped to the
        first or last `window` pages near either end.
        """
        if total_pages <= self.window:
            return list(range(1, total_pages + 1))
        half = self.window // 2
        start = current - half
        start = max(1, min(start, total_pages - self.window + 1))
        return list(range(start, start + self.window))
