from __future__ import annotations

from datetime import datetime
import unittest

from fastapi import HTTPException

from hiring_funnel.api.params import (
    expand_end_of_day,
    parse_datetime,
    parse_id_list,
    parse_job_id,
    parse_positive_numbers,
)


class DateParamTests(unittest.TestCase):
    def test_iso_values_normalize_to_naive_utc(self) -> None:
        self.assertEqual(parse_datetime("2025-01-02T10:00:00Z", field="startDate"), datetime(2025, 1, 2, 10))
        self.assertEqual(parse_datetime("2025-01-02T12:00:00+02:00", field="startDate"), datetime(2025, 1, 2, 10))
        self.assertIsNone(parse_datetime("  ", field="startDate"))
        self.assertIsNone(parse_datetime(None, field="startDate"))

    def test_malformed_date_is_a_bad_request(self) -> None:
        with self.assertRaises(HTTPException) as ctx:
            parse_datetime("yesterday", field="endDate")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.detail, "Invalid endDate format.")

    def test_date_only_end_covers_whole_day(self) -> None:
        raw = "2025-01-02"
        self.assertEqual(
            expand_end_of_day(raw, parse_datetime(raw, field="endDate")),
            datetime(2025, 1, 2, 23, 59, 59, 999999),
        )
        exact = parse_datetime("2025-01-02T08:00:00", field="endDate")
        self.assertEqual(expand_end_of_day("2025-01-02T08:00:00", exact), exact)


class NumericParamTests(unittest.TestCase):
    def test_job_id(self) -> None:
        self.assertEqual(parse_job_id(" 12 "), 12)
        self.assertIsNone(parse_job_id(None))
        for raw in ("abc", "0", "-4", "1.5"):
            with self.assertRaises(HTTPException) as ctx:
                parse_job_id(raw)
            self.assertEqual(ctx.exception.status_code, 400)

    def test_positive_number_lists(self) -> None:
        self.assertListEqual(parse_positive_numbers(["2,3", "x", "-1", "5", "inf", ""]), [2.0, 3.0, 5.0])
        self.assertListEqual(parse_positive_numbers(None), [])
        self.assertListEqual(parse_id_list(["3,4.5", "7"]), [3, 7])


if __name__ == "__main__":
    unittest.main()
