"""Month names and default month styling."""

from __future__ import annotations

from photocal.domain import FontStyle, MonthContent, TextPosition

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

DEFAULT_COLORS = (
    "#1e40af",  # Jan - blue
    "#be123c",  # Feb - pink/red
    "#15803d",  # Mar - green
    "#a21caf",  # Apr - purple
    "#047857",  # May - emerald
    "#ca8a04",  # Jun - gold
    "#c2410c",  # Jul - orange
    "#b91c1c",  # Aug - red
    "#854d0e",  # Sep - brown
    "#ea580c",  # Oct - orange
    "#374151",  # Nov - grey
    "#1d4ed8",  # Dec - blue
)

FONT_CYCLE = (FontStyle.DISPLAY, FontStyle.SERIF, FontStyle.HANDWRITING)


def default_months() -> list[MonthContent]:
    return [
        MonthContent(
            month_index=index,
            accent_color=DEFAULT_COLORS[index],
            text_position=TextPosition.BOTTOM_RIGHT,
            font_style=FONT_CYCLE[index % len(FONT_CYCLE)],
        )
        for index in range(len(MONTH_NAMES))
    ]
