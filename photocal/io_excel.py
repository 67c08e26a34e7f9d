"""Excel I/O helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from photocal.constants import MONTH_NAMES, default_months
from photocal.domain import MonthContent

MONTHS_SHEET = "months"

# normalized header -> MonthContent field
FIELD_COLUMNS = {
    "month": "month",
    "image": "image",
    "photo": "image",
    "color": "accent_color",
    "colour": "accent_color",
    "accentcolor": "accent_color",
    "position": "text_position",
    "textposition": "text_position",
    "font": "font_style",
    "fontstyle": "font_style",
    "x": "x",
    "y": "y",
}


class MonthLoadError(Exception):
    def __init__(self, issues: list[dict[str, Any]]) -> None:
        super().__init__(f"Invalid data in sheet '{MONTHS_SHEET}'")
        self.issues = issues


def _read_sheet(path: Path, sheet_name: str) -> pd.DataFrame:
    return pd.read_excel(path, sheet_name=sheet_name)


def _normalize_header(value: Any) -> str:
    return "".join(char for char in str(value).casefold() if char not in {" ", "-", "_"})


def _build_column_map(columns: list[str]) -> dict[str, str]:
    return {_normalize_header(column): column for column in columns}


def parse_month(value: Any) -> int:
    """Return the 0-based month index for a 1-12 number or an English month name."""
    if value is None:
        raise ValueError("Month is required")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if float(value).is_integer() and 1 <= value <= 12:
            return int(value) - 1
        raise ValueError(f"Month number must be 1-12, got {value!r}")
    text = str(value).strip().casefold()
    if text.isdigit():
        return parse_month(int(text))
    for index, name in enumerate(MONTH_NAMES):
        if text in {name.casefold(), name[:3].casefold()}:
            return index
    raise ValueError(f"Unknown month: {value!r}")


def _row_record(row: pd.Series, column_map: dict[str, str]) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for header, column in column_map.items():
        field = FIELD_COLUMNS.get(header)
        if field is None:
            continue
        value = row.get(column)
        if pd.isna(value):
            continue
        if isinstance(value, str) and not value.strip():
            continue
        if hasattr(value, "item"):
            value = value.item()
        record[field] = value
    return record


def load_months(path: str | Path) -> list[MonthContent]:
    """Load the twelve month slots from the ``months`` sheet.

    Months missing from the sheet keep their default styling. All row errors
    are collected and raised together as ``MonthLoadError``.
    """
    source = Path(path)
    df = _read_sheet(source, MONTHS_SHEET).rename(columns=str)
    column_map = _build_column_map(list(df.columns))
    defaults = default_months()

    issues: list[dict[str, Any]] = []
    loaded: dict[int, MonthContent] = {}
    for offset, (_, row) in enumerate(df.iterrows()):
        row_number = offset + 2  # header is row 1
        record = _row_record(row, column_map)
        if not record:
            continue
        try:
            month_index = parse_month(record.pop("month", None))
        except ValueError as exc:
            issues.append({"row": row_number, "field": "month", "message": str(exc)})
            continue
        if month_index in loaded:
            issues.append(
                {
                    "row": row_number,
                    "field": "month",
                    "message": f"{MONTH_NAMES[month_index]} is listed more than once",
                }
            )
            continue
        base = defaults[month_index].model_dump(exclude={"text_coords"})
        try:
            loaded[month_index] = MonthContent.model_validate({**base, **record})
        except ValidationError as exc:
            for error in exc.errors():
                field = ".".join(str(part) for part in error["loc"]) or "row"
                issues.append({"row": row_number, "field": field, "message": error["msg"]})

    if issues:
        raise MonthLoadError(issues)
    return [loaded.get(index, defaults[index]) for index in range(len(MONTH_NAMES))]
