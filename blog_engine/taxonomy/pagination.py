"""Split list pages into pagers, Hugo style (``/page/2/``, ``/page/3/`` ...)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass
class Pager:
    """One page of a paginated listing."""
    number: int
    total_pages: int
    base_path: str
    items: list[Any] = field(default_factory=list)

    @property
    def permalink(self) -> str:
        return page_url(self.base_path, self.number)

    @property
    def has_prev(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def prev_url(self) -> str | None:
        return page_url(self.base_path, self.number - 1) if self.has_prev else None

    @property
    def next_url(self) -> str | None:
        return page_url(self.base_path, self.number + 1) if self.has_next else None


def page_url(base_path: str, number: int) -> str:
    """Page 1 lives at ``base_path``; later pages under ``page/N/``."""
    base = base_path if base_path.endswith("/") else base_path + "/"
    if number <= 1:
        return base
    return f"{base}page/{number}/"


def paginate(items: Sequence[Any], pager_size: int, base_path: str = "/") -> list[Pager]:
    """Split ``items`` into pagers of ``pager_size``.

    An empty sequence still yields one (empty) page.
    """
    if pager_size < 1:
        raise ValueError(f"pager_size must be at least 1, got {pager_size}")

    total = max(1, math.ceil(len(items) / pager_size))
    return [
        Pager(
            number=n + 1,
            total_pages=total,
            base_path=base_path,
            items=list(items[n * pager_size:(n + 1) * pager_size]),
        )
        for n in range(total)
    ]
