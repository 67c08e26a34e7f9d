import unittest
from datetime import date

from photocal import calendar_uk
from photocal.domain import HolidayKind
from photocal.grid import GRID_CELLS, build_month_grid


class MonthGridTests(unittest.TestCase):
    def test_shape_for_every_month(self) -> None:
        for year in (1900, 2000, 2023, 2024, 2100):
            for month_index in range(12):
                with self.subTest(year=year, month=month_index + 1):
                    grid = build_month_grid(year, month_index)
                    self.assertEqual(len(grid), GRID_CELLS)
                    self.assertEqual(grid[0].date.weekday(), 0)
                    in_month = [cell for cell in grid if cell.is_current_month]
                    self.assertEqual(
                        len(in_month), calendar_uk.days_in_month(year, month_index + 1)
                    )
                    self.assertTrue(
                        all(c.date.month == month_index + 1 for c in in_month)
                    )

    def test_cells_are_consecutive_days(self) -> None:
        grid = build_month_grid(2025, 5)
        for previous, current in zip(grid, grid[1:]):
            self.assertEqual((current.date - previous.date).days, 1)

    def test_january_2024(self) -> None:
        grid = build_month_grid(2024, 0)
        self.assertEqual(grid[0].date, date(2024, 1, 1))
        self.assertTrue(grid[0].is_current_month)
        self.assertEqual(grid[30].date, date(2024, 1, 31))
        self.assertTrue(grid[30].is_current_month)
        self.assertEqual(grid[31].date, date(2024, 2, 1))
        self.assertFalse(grid[31].is_current_month)
        self.assertEqual([h.name for h in grid[0].holidays], ["New Year's Day"])

    def test_leading_cells_from_previous_month(self) -> None:
        grid = build_month_grid(2025, 1)  # 1 Feb 2025 is a Saturday
        self.assertEqual(grid[0].date, date(2025, 1, 27))
        self.assertFalse(any(cell.is_current_month for cell in grid[:5]))
        self.assertEqual(grid[5].date, date(2025, 2, 1))

    def test_christmas_in_december(self) -> None:
        for year in (2023, 2024, 2025):
            with self.subTest(year=year):
                grid = build_month_grid(year, 11)
                cell = next(c for c in grid if c.is_current_month and c.date.day == 25)
                christmas = [h for h in cell.holidays if h.name == "Christmas Day"]
                self.assertEqual(len(christmas), 1)
                self.assertEqual(christmas[0].kind, HolidayKind.RELIGIOUS)

    def test_holidays_match_cell_date(self) -> None:
        for month_index in range(12):
            for cell in build_month_grid(2024, month_index):
                for holiday in cell.holidays:
                    self.assertEqual(holiday.date, cell.date)

    def test_padding_uses_next_year_holidays(self) -> None:
        grid = build_month_grid(2025, 11)  # trailing cells run into January 2026
        new_year = next(c for c in grid if c.date == date(2026, 1, 1))
        self.assertFalse(new_year.is_current_month)
        self.assertEqual([h.name for h in new_year.holidays], ["New Year's Day"])
        self.assertEqual(new_year.holidays[0].date, date(2026, 1, 1))

    def test_padding_uses_previous_year_holidays(self) -> None:
        grid = build_month_grid(2023, 0)  # 1 Jan 2023 is a Sunday
        self.assertEqual(grid[0].date, date(2022, 12, 26))
        self.assertEqual([h.name for h in grid[0].holidays], ["Boxing Day"])
        self.assertEqual(grid[6].date, date(2023, 1, 1))

    def test_grid_touches_at_most_two_years(self) -> None:
        for year in range(2015, 2035):
            for month_index in (0, 11):
                years = {cell.date.year for cell in build_month_grid(year, month_index)}
                self.assertLessEqual(len(years), 2)
                self.assertTrue(years <= {year - 1, year, year + 1})

    def test_first_representable_month(self) -> None:
        grid = build_month_grid(1, 0)  # 1 Jan 0001 is a Monday
        self.assertEqual(grid[0].date, date(1, 1, 1))

    def test_invalid_month_index(self) -> None:
        with self.assertRaises(ValueError):
            build_month_grid(2024, 12)
        with self.assertRaises(ValueError):
            build_month_grid(2024, -1)

    def test_every_holiday_lands_on_its_own_cell(self) -> None:
        for year in (2023, 2024, 2038):
            grids = {month_index: build_month_grid(year, month_index) for month_index in range(12)}
            for holiday in calendar_uk.compute_holidays(year):
                with self.subTest(year=year, holiday=holiday.name):
                    cell = next(
                        c
                        for c in grids[holiday.date.month - 1]
                        if c.is_current_month and c.date == holiday.date
                    )
                    self.assertIn(holiday, cell.holidays)

    def test_unrepresentable_year_has_one_message(self) -> None:
        for year, month_index in ((0, 0), (10000, 0), (-5, 6), (9999, 11)):
            with self.subTest(year=year, month=month_index + 1):
                with self.assertRaisesRegex(ValueError, "leaves the supported date range"):
                    build_month_grid(year, month_index)

    def test_grid_past_last_representable_date(self) -> None:
        with self.assertRaises(ValueError):
            build_month_grid(9999, 11)


if __name__ == "__main__":
    unittest.main()
