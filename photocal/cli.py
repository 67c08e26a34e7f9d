"""CLI for building and exporting a photo calendar."""

from __future__ import annotations

import argparse
import logging
import random
from datetime import date
from pathlib import Path

import pandas as pd

from photocal.arrange import reverse_contents, shuffle_contents
from photocal.calendar_uk import compute_holidays
from photocal.constants import default_months
from photocal.domain import ExportSettings, MonthContent
from photocal.export_excel import write_months_template
from photocal.export_pdf import ExportError, export_document, write_export
from photocal.io_excel import MonthLoadError, load_months
from photocal.pages import build_document, empty_months
from photocal.render import PageRenderer
from photocal.report import summarize_months


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Photo calendar PDF builder")
    parser.add_argument(
        "--year",
        type=int,
        default=date.today().year + 1,
        help="Calendar year (default: next year)",
    )
    parser.add_argument("--input", help="Path to months workbook (.xlsx)")
    parser.add_argument("--out", default="output", help="Output directory for the PDF")
    parser.add_argument(
        "--template",
        help="Write a months workbook template to this path and exit",
    )
    parser.add_argument(
        "--page-format",
        choices=["A4", "A3", "LETTER"],
        default="A4",
        help="Landscape sheet size",
    )
    parser.add_argument(
        "--print-holidays",
        action="store_true",
        help="Print the holidays of the selected year",
    )
    parser.add_argument(
        "--print-summary",
        action="store_true",
        help="Print a per-month summary of the calendar content",
    )
    parser.add_argument("--reverse", action="store_true", help="Reverse the photo order")
    parser.add_argument("--shuffle", action="store_true", help="Shuffle the photo order")
    parser.add_argument("--seed", type=int, help="Random seed for --shuffle")
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Export without asking when some months have no photo",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _render_table(rows: list[dict[str, object]]) -> str:
    if not rows:
        return "(no rows)"
    return pd.DataFrame(rows).to_string(index=False)


def _load_months_or_exit(input_path: Path) -> list[MonthContent]:
    try:
        return load_months(input_path)
    except MonthLoadError as exc:
        print("Errors in sheet 'months' (first 5):")
        for issue in exc.issues[:5]:
            print(f"- row {issue['row']}, field {issue['field']}: {issue['message']}")
        raise SystemExit(1) from exc


def _confirm_empty_months(months: list[MonthContent]) -> bool:
    missing = empty_months(months)
    if not missing:
        return True
    logging.getLogger(__name__).warning("%d months have no photo", len(missing))
    try:
        answer = input(f"You have {len(missing)} months without images. Continue anyway? [y/N] ")
    except EOFError:
        return False
    return answer.strip().casefold() in {"y", "yes"}


def _print_progress(done: int, total: int) -> None:
    print(f"Rendering page {done}/{total} ({round(done / total * 100)}%)")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.template:
        path = write_months_template(args.template, args.year)
        print(f"OK: template written to {path}")
        return

    if args.input:
        input_path = Path(args.input)
        if not input_path.is_file():
            raise SystemExit(f"ERROR: input file not found: {input_path}")
        months = _load_months_or_exit(input_path)
    else:
        months = default_months()

    if args.reverse:
        months = reverse_contents(months)
    if args.shuffle:
        months = shuffle_contents(months, random.Random(args.seed))

    if args.print_holidays:
        rows = [
            {"date": holiday.date, "name": holiday.name, "kind": holiday.kind.value}
            for holiday in sorted(compute_holidays(args.year), key=lambda item: item.date)
        ]
        print(_render_table(rows))
    if args.print_summary:
        print(_render_table(summarize_months(months, args.year)))

    if not args.yes and not _confirm_empty_months(months):
        print("Export cancelled")
        return

    settings = ExportSettings(page_format=args.page_format)
    document = build_document(args.year, months)
    try:
        result = export_document(
            document,
            PageRenderer(settings),
            on_progress=_print_progress,
            settings=settings,
        )
    except ExportError as exc:
        print(f"ERROR: {exc}: {exc.__cause__}")
        print(
            "Failed to generate PDF. Check that every photo can be loaded "
            "(a remote image may be blocked or unreachable) and try again."
        )
        raise SystemExit(1) from exc

    path = write_export(result, args.out, args.year)
    print(f"OK: {result.page_count} pages written to {path}")


if __name__ == "__main__":
    main()
