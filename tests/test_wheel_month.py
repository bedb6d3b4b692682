# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import date, datetime, timedelta, timezone

from lifewheel.wheel.month import month_label, normalize, parse_month, shift_month, to_iso


class TestMonthKey(unittest.TestCase):
    def test_same_month_normalizes_to_identical_key(self) -> None:
        a = normalize(datetime(2024, 3, 1, 0, 0, 1))
        b = normalize(date(2024, 3, 31))
        c = normalize("2024-03-17T23:59:59Z")
        self.assertEqual(a, date(2024, 3, 1))
        self.assertEqual(a, b)
        self.assertEqual(b, c)
        self.assertEqual(len({a, b, c}), 1)

    def test_different_months_and_years_differ(self) -> None:
        self.assertNotEqual(normalize(date(2024, 3, 31)), normalize(date(2024, 4, 1)))
        self.assertNotEqual(normalize(date(2023, 3, 5)), normalize(date(2024, 3, 5)))

    def test_timezone_is_not_shifted(self) -> None:
        # Local calendar fields win; no conversion to UTC.
        aware = datetime(2024, 4, 1, 0, 30, tzinfo=timezone(timedelta(hours=2)))
        self.assertEqual(normalize(aware), date(2024, 4, 1))

    def test_parse_month_formats(self) -> None:
        self.assertEqual(parse_month("2024-03"), date(2024, 3, 1))
        self.assertEqual(parse_month("2024-3"), date(2024, 3, 1))
        self.assertEqual(parse_month("2024-03-15"), date(2024, 3, 1))
        self.assertEqual(parse_month(" 2024-12-31T10:00:00+05:00 "), date(2024, 12, 1))

    def test_parse_month_rejects_garbage(self) -> None:
        for bad in ("", "March", "2024-13", "2024-00", "20240315x"):
            with self.assertRaises(ValueError, msg=bad):
                parse_month(bad)

    def test_normalize_rejects_other_types(self) -> None:
        with self.assertRaises(TypeError):
            normalize(20240301)  # type: ignore[arg-type]

    def test_shift_month_crosses_year_boundaries(self) -> None:
        self.assertEqual(shift_month(date(2024, 1, 1), -1), date(2023, 12, 1))
        self.assertEqual(shift_month(date(2024, 12, 1), 1), date(2025, 1, 1))
        self.assertEqual(shift_month(date(2024, 5, 1), -17), date(2022, 12, 1))
        self.assertEqual(shift_month(date(2024, 5, 1), 0), date(2024, 5, 1))

    def test_label_and_iso(self) -> None:
        self.assertEqual(month_label(date(2024, 3, 1)), "March 2024")
        self.assertEqual(to_iso(date(2024, 3, 20)), "2024-03-01")


if __name__ == "__main__":
    unittest.main()
