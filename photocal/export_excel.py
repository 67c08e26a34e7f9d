"""Excel export helpers."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl.utils import get_column_letter

from photocal.calendar_uk import compute_holidays
from photocal.constants import MONTH_NAMES, default_months
from photocal.domain import MonthContent
from photocal.io_excel import MONTHS_SHEET

HOLIDAYS_SHEET = "holidays"


def _auto_fit_columns(worksheet) -> None:
    for column_cells in worksheet.columns:
        values = [str(cell.value) if cell.value is not None else "" for cell in column_cells]
        max_length = max((len(value) for value in values), default=0)
        column_letter = get_column_letter(column_cells[0].column)
        worksheet.column_dimensions[column_letter].width = min(max_length + 2, 60)


def _apply_sheet_formatting(worksheet) -> None:
    worksheet.freeze_panes = "A2"
    worksheet.auto_filter.ref = worksheet.dimensions
    _auto_fit_columns(worksheet)


def month_rows(months: list[MonthContent]) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for content in months:
        coords = content.text_coords
        rows.append(
            {
                "month": MONTH_NAMES[content.month_index],
                "image": content.image,
                "color": content.accent_color,
                "position": content.text_position.value,
                "font": content.font_style.value,
                "x": coords.x if coords else None,
                "y": coords.y if coords else None,
            }
        )
    return rows


def write_months_template(
    path: str | Path,
    year: int,
    months: list[MonthContent] | None = None,
) -> Path:
    """Write a workbook to fill in, plus the holidays of ``year`` for reference."""
    output_path = Path(path)
    if months is None:
        months = default_months()

    months_df = pd.DataFrame(
        month_rows(months), columns=["month", "image", "color", "position", "font", "x", "y"]
    )
    holidays_df = pd.DataFrame(
        [
            {"date": holiday.date, "name": holiday.name, "kind": holiday.kind.value}
            for holiday in sorted(compute_holidays(year), key=lambda item: item.date)
        ],
        columns=["date", "name", "kind"],
    )

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        months_df.to_excel(writer, sheet_name=MONTHS_SHEET, index=False)
        holidays_df.to_excel(writer, sheet_name=HOLIDAYS_SHEET, index=False)

        for sheet_name in (MONTHS_SHEET, HOLIDAYS_SHEET):
            worksheet = writer.sheets[sheet_name]
            _apply_sheet_formatting(worksheet)
    return output_path
