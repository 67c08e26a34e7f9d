"""Reordering of month contents between fixed month slots.

A slot is identified by its ``month_index``; everything else on a
``MonthContent`` is content that can move between slots. All helpers return
new lists and leave the input untouched.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from photocal.domain import MonthContent

CONTENT_FIELDS = ("image", "accent_color", "text_position", "text_coords", "font_style")


def _contents(months: Sequence[MonthContent]) -> list[dict[str, object]]:
    return [{field: getattr(month, field) for field in CONTENT_FIELDS} for month in months]


def permute_contents(months: Sequence[MonthContent], order: Sequence[int]) -> list[MonthContent]:
    """Give slot ``i`` the content currently held by slot ``order[i]``."""
    if sorted(order) != list(range(len(months))):
        raise ValueError(f"Not a permutation of {len(months)} slots: {list(order)!r}")
    contents = _contents(months)
    return [slot.model_copy(update=contents[source]) for slot, source in zip(months, order)]


def move_content(months: Sequence[MonthContent], source: int, target: int) -> list[MonthContent]:
    order = list(range(len(months)))
    moved = order.pop(source)
    order.insert(target, moved)
    return permute_contents(months, order)


def reverse_contents(months: Sequence[MonthContent]) -> list[MonthContent]:
    return permute_contents(months, list(reversed(range(len(months)))))


def shuffle_contents(
    months: Sequence[MonthContent], rng: random.Random | None = None
) -> list[MonthContent]:
    order = list(range(len(months)))
    (rng or random.Random()).shuffle(order)
    return permute_contents(months, order)
