"""Reporting helpers."""

from __future__ import annotations

from collections.abc import Sequence

from photocal.constants import MONTH_NAMES
from photocal.domain import HolidayKind, MonthContent
from photocal.grid import build_month_grid


def summarize_months(months: Sequence[MonthContent], year: int) -> list[dict[str, object]]:
    summaries: list[dict[str, object]] = []
    for content in months:
        public_count = 0
        religious_count = 0
        for cell in build_month_grid(year, content.month_index):
            if not cell.is_current_month:
                continue
            for holiday in cell.holidays:
                if holiday.kind == HolidayKind.PUBLIC:
                    public_count += 1
                else:
                    religious_count += 1

        coords = content.text_coords
        summaries.append(
            {
                "month": MONTH_NAMES[content.month_index],
                "image": "yes" if content.image else "MISSING",
                "color": content.accent_color,
                "font": content.font_style.value,
                "title": f"{coords.x:g}%,{coords.y:g}%" if coords else content.text_position.value,
                "public_holidays": public_count,
                "religious_holidays": religious_count,
            }
        )
    return summaries
