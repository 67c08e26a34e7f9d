"""Month grid construction."""

from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date, timedelta

from photocal import calendar_uk
from photocal.domain import DayCell, Holiday

GRID_ROWS = 6
GRID_COLUMNS = 7
GRID_CELLS = GRID_ROWS * GRID_COLUMNS


def _holidays_for(day: date, indexes: dict[int, dict[date, list[Holiday]]]) -> list[Holiday]:
    # Padding cells belong to the neighbouring year when the month is Jan or Dec.
    if day.year not in indexes:
        indexes[day.year] = calendar_uk.holiday_index(day.year)
    return list(indexes[day.year].get(day, []))


def build_month_grid(year: int, month_index: int) -> list[DayCell]:
    """Return the 42 Monday-first cells shown for ``month_index`` (0-11) of ``year``."""
    if not 0 <= month_index <= 11:
        raise ValueError(f"Month index must be 0-11, got {month_index}")
    month = month_index + 1
    if not MINYEAR <= year <= MAXYEAR:
        raise ValueError(f"Grid for {year}-{month:02d} leaves the supported date range")
    current_days = calendar_uk.days_of_month(year, month)

    leading = current_days[0].weekday()  # Monday = 0
    trailing = GRID_CELLS - leading - len(current_days)
    try:
        before = [current_days[0] - timedelta(days=offset) for offset in range(leading, 0, -1)]
        after = [current_days[-1] + timedelta(days=offset) for offset in range(1, trailing + 1)]
    except OverflowError as exc:
        raise ValueError(f"Grid for {year}-{month:02d} leaves the supported date range") from exc

    indexes: dict[int, dict[date, list[Holiday]]] = {}
    cells: list[DayCell] = []
    for days, in_month in ((before, False), (current_days, True), (after, False)):
        for day in days:
            cells.append(
                DayCell(date=day, is_current_month=in_month, holidays=_holidays_for(day, indexes))
            )
    return cells
