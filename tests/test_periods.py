import unittest
from datetime import datetime, timedelta, timezone

from finance_api.utils.periods import current_month_range, in_current_month, to_naive_utc


class CurrentMonthTests(unittest.TestCase):
    def test_range_starts_on_first_and_ends_on_next_first(self) -> None:
        start, end = current_month_range(datetime(2024, 5, 17, 13, 45))

        self.assertEqual(start, datetime(2024, 5, 1))
        self.assertEqual(end, datetime(2024, 6, 1))

    def test_december_rolls_into_next_year(self) -> None:
        start, end = current_month_range(datetime(2024, 12, 31, 23, 59))

        self.assertEqual(start, datetime(2024, 12, 1))
        self.assertEqual(end, datetime(2025, 1, 1))

    def test_membership_is_half_open(self) -> None:
        now = datetime(2024, 2, 10)

        self.assertTrue(in_current_month(datetime(2024, 2, 1), now))
        self.assertTrue(in_current_month(datetime(2024, 2, 29, 23, 59, 59), now))
        self.assertFalse(in_current_month(datetime(2024, 3, 1), now))
        self.assertFalse(in_current_month(datetime(2024, 1, 31, 23, 59), now))

    def test_aware_datetimes_are_compared_in_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        # 01:00 on June 1st at +02:00 is still May 31st in UTC
        value = datetime(2024, 6, 1, 1, 0, tzinfo=plus_two)

        self.assertEqual(to_naive_utc(value), datetime(2024, 5, 31, 23, 0))
        self.assertTrue(in_current_month(value, datetime(2024, 5, 15)))


if __name__ == "__main__":
    unittest.main()
