import unittest
from datetime import date

from finance_api.utils.bills import (
    DUE_SOON,
    PAID,
    UPCOMING,
    bill_status,
    is_due_soon,
    search_and_sort_bills,
    summarize_bills,
)


class BillStatusTests(unittest.TestCase):
    def test_due_in_three_days_is_due_soon(self) -> None:
        self.assertTrue(is_due_soon(13, date(2024, 5, 10)))
        self.assertEqual(bill_status(13, False, date(2024, 5, 10)), DUE_SOON)

    def test_window_edges(self) -> None:
        self.assertTrue(is_due_soon(15, date(2024, 5, 10)))
        self.assertFalse(is_due_soon(16, date(2024, 5, 10)))

    def test_due_today_is_upcoming(self) -> None:
        self.assertEqual(bill_status(10, False, date(2024, 5, 10)), UPCOMING)

    def test_far_away_is_upcoming(self) -> None:
        self.assertEqual(bill_status(25, False, date(2024, 5, 10)), UPCOMING)

    def test_paid_wins_over_due_soon(self) -> None:
        self.assertEqual(bill_status(12, True, date(2024, 5, 10)), PAID)

    def test_window_does_not_wrap_into_next_month(self) -> None:
        # May 30: a bill due on the 2nd is next month's, not due soon
        self.assertEqual(bill_status(2, False, date(2024, 5, 30)), UPCOMING)
        self.assertEqual(bill_status(1, False, date(2024, 12, 29)), UPCOMING)

    def test_due_day_past_month_end_stays_in_window(self) -> None:
        # Day 31 compared by number, even in February
        self.assertEqual(bill_status(31, False, date(2024, 2, 27)), DUE_SOON)


class BillSummaryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.bills = [
            {"name": "Spark Electric", "amount": -100.0, "due_day": 5, "status": PAID},
            {"name": "Aqua Flow", "amount": -40.5, "due_day": 12, "status": DUE_SOON},
            {"name": "Pixel Playground", "amount": -10.0, "due_day": 28, "status": UPCOMING},
        ]

    def test_summary_buckets(self) -> None:
        summary = summarize_bills(self.bills)

        self.assertEqual(summary["paid"], {"count": 1, "amount": 100.0})
        self.assertEqual(summary["due_soon"], {"count": 1, "amount": 40.5})
        self.assertEqual(summary["upcoming"], {"count": 2, "amount": 50.5})
        self.assertEqual(summary["total"], 2)
        self.assertEqual(summary["total_amount"], 50.5)

    def test_search_is_case_insensitive(self) -> None:
        result = search_and_sort_bills(self.bills, search="aqua")

        self.assertEqual([b["name"] for b in result], ["Aqua Flow"])

    def test_sorts(self) -> None:
        def names(sort):
            return [b["name"] for b in search_and_sort_bills(self.bills, sort=sort)]

        self.assertEqual(names("Latest"), ["Spark Electric", "Aqua Flow", "Pixel Playground"])
        self.assertEqual(names("Oldest"), ["Pixel Playground", "Aqua Flow", "Spark Electric"])
        self.assertEqual(names("A to Z"), ["Aqua Flow", "Pixel Playground", "Spark Electric"])
        self.assertEqual(names("Highest"), ["Spark Electric", "Aqua Flow", "Pixel Playground"])
        self.assertEqual(names("Lowest"), ["Pixel Playground", "Aqua Flow", "Spark Electric"])


if __name__ == "__main__":
    unittest.main()
