"""Assembly of the page sequence for one calendar year."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from photocal.domain import CalendarDocument, CoverPage, GridPage, MonthContent
from photocal.grid import build_month_grid

logger = logging.getLogger(__name__)


def build_document(year: int, months: Iterable[MonthContent]) -> CalendarDocument:
    """Interleave a cover page and a grid page for every month, in slot order."""
    pages: list[CoverPage | GridPage] = []
    seen: set[int] = set()
    for content in months:
        if content.month_index in seen:
            raise ValueError(f"Month index {content.month_index} appears more than once")
        seen.add(content.month_index)
        pages.append(CoverPage(content=content, accent_color=content.accent_color))
        pages.append(
            GridPage(
                month_index=content.month_index,
                year=year,
                grid=build_month_grid(year, content.month_index),
                accent_color=content.accent_color,
                font_style=content.font_style,
            )
        )
    logger.debug("Built %d pages for %d", len(pages), year)
    return CalendarDocument(year=year, pages=pages)


def empty_months(months: Iterable[MonthContent]) -> list[MonthContent]:
    return [content for content in months if content.image is None]
