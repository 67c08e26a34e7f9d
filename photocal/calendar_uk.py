"""UK calendar helpers: bank holidays and the Christian feasts."""

from __future__ import annotations

from collections import defaultdict
from datetime import MAXYEAR, MINYEAR, date, timedelta

from photocal.domain import Holiday, HolidayKind

PUBLIC = HolidayKind.PUBLIC
RELIGIOUS = HolidayKind.RELIGIOUS

# (name, month, day, kind)
FIXED_HOLIDAYS: tuple[tuple[str, int, int, HolidayKind], ...] = (
    ("New Year's Day", 1, 1, PUBLIC),
    ("Christmas Day", 12, 25, RELIGIOUS),
    ("Boxing Day", 12, 26, PUBLIC),
    ("All Saints' Day", 11, 1, RELIGIOUS),
    ("Valentine's Day", 2, 14, RELIGIOUS),
    ("St Patrick's Day", 3, 17, RELIGIOUS),
)

# (name, days from Easter Sunday, kind)
EASTER_FEASTS: tuple[tuple[str, int, HolidayKind], ...] = (
    ("Easter Sunday", 0, RELIGIOUS),
    ("Good Friday", -2, PUBLIC),
    ("Easter Monday", 1, PUBLIC),
    ("Ash Wednesday", -46, RELIGIOUS),
    ("Ascension Day", 39, RELIGIOUS),
    ("Pentecost", 49, RELIGIOUS),
)


def easter_sunday(year: int) -> date:
    """Return Easter Sunday for the given year (Gregorian calendar)."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def _first_of_next_month(year: int, month: int) -> date:
    if month == 12:
        return date(year + 1, 1, 1)
    return date(year, month + 1, 1)


def days_in_month(year: int, month: int) -> int:
    if month == 12:
        return 31
    return (_first_of_next_month(year, month) - date(year, month, 1)).days


def _first_monday(year: int, month: int) -> date:
    current = date(year, month, 1)
    while current.weekday() != 0:
        current += timedelta(days=1)
    return current


def _last_monday(year: int, month: int) -> date:
    current = date(year, month, days_in_month(year, month))
    while current.weekday() != 0:
        current -= timedelta(days=1)
    return current


def compute_holidays(year: int) -> list[Holiday]:
    """Return the holidays of ``year`` in a stable, unsorted order.

    Fixed dates come first, then the Easter-based feasts, then the three
    Monday bank holidays. Years that ``datetime.date`` cannot represent have
    no holidays.
    """
    if not MINYEAR <= year <= MAXYEAR:
        return []

    holidays = [
        Holiday(date=date(year, month, day), name=name, kind=kind)
        for name, month, day, kind in FIXED_HOLIDAYS
    ]

    easter = easter_sunday(year)
    holidays.extend(
        Holiday(date=easter + timedelta(days=offset), name=name, kind=kind)
        for name, offset, kind in EASTER_FEASTS
    )

    holidays.append(
        Holiday(date=_first_monday(year, 5), name="Early May Bank Holiday", kind=PUBLIC)
    )
    holidays.append(
        Holiday(date=_last_monday(year, 5), name="Spring Bank Holiday", kind=PUBLIC)
    )
    holidays.append(
        Holiday(date=_last_monday(year, 8), name="Summer Bank Holiday", kind=PUBLIC)
    )
    return holidays


def holiday_index(year: int) -> dict[date, list[Holiday]]:
    index: dict[date, list[Holiday]] = defaultdict(list)
    for holiday in compute_holidays(year):
        index[holiday.date].append(holiday)
    return dict(index)


def holidays_on(day: date) -> list[Holiday]:
    return holiday_index(day.year).get(day, [])


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def is_holiday(day: date, kind: HolidayKind | None = None) -> bool:
    return any(kind is None or holiday.kind == kind for holiday in holidays_on(day))


def days_of_month(year: int, month: int) -> list[date]:
    first = date(year, month, 1)
    return [first + timedelta(days=offset) for offset in range(days_in_month(year, month))]


def month_days(ym: str) -> list[date]:
    year_str, month_str = ym.split("-", 1)
    return days_of_month(int(year_str), int(month_str))
