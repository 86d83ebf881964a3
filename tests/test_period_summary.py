import unittest
from datetime import date, datetime, timedelta, timezone

from medstock.core.ledger import Medicine, Transaction, TransactionType
from medstock.core.period import calculate_period_summary

NOW = datetime(2026, 10, 19, 12, 0)


def _medicine(medicine_id, stock, *movements):
    return Medicine(
        id=medicine_id,
        name=medicine_id.title(),
        current_stock=stock,
        low_stock_threshold=10,
        transactions=tuple(
            Transaction(id="{}-{}".format(medicine_id, index), kind=kind, quantity=qty, timestamp=ts)
            for index, (kind, qty, ts) in enumerate(movements, start=1)
        ),
    )


class PeriodSummaryTest(unittest.TestCase):
    def test_reconstructs_window_from_current_stock(self):
        medicine = _medicine(
            "amoxicillin",
            100,
            (TransactionType.IN, 50, NOW - timedelta(days=40)),
            (TransactionType.OUT, 20, NOW - timedelta(days=10)),
            (TransactionType.OUT, 10, NOW - timedelta(days=2)),
        )
        (summary,) = calculate_period_summary(
            [medicine], (NOW - timedelta(days=15)).date(), NOW.date()
        )

        self.assertEqual(summary.ending_stock, 100)
        self.assertEqual(summary.total_in, 0)
        self.assertEqual(summary.total_out, 30)
        self.assertEqual(summary.starting_stock, 130)

    def test_undoes_movements_after_the_window(self):
        medicine = _medicine(
            "losartan",
            40,
            (TransactionType.IN, 100, datetime(2026, 9, 1, 9, 0)),
            (TransactionType.OUT, 25, datetime(2026, 9, 10, 9, 0)),
            (TransactionType.IN, 30, datetime(2026, 10, 1, 9, 0)),
            (TransactionType.OUT, 15, datetime(2026, 10, 5, 9, 0)),
        )
        (summary,) = calculate_period_summary([medicine], date(2026, 9, 5), date(2026, 9, 30))

        self.assertEqual(summary.ending_stock, 40 - 30 + 15)
        self.assertEqual(summary.total_in, 0)
        self.assertEqual(summary.total_out, 25)
        self.assertEqual(summary.starting_stock, 50)
        self.assertEqual(
            summary.starting_stock + summary.total_in - summary.total_out,
            summary.ending_stock,
        )

    def test_boundary_days_are_inclusive(self):
        medicine = _medicine(
            "ors",
            10,
            (TransactionType.IN, 1, datetime(2026, 10, 1, 0, 0)),
            (TransactionType.IN, 2, datetime(2026, 10, 3, 23, 59, 59, 999999)),
            (TransactionType.IN, 4, datetime(2026, 10, 4, 0, 0)),
            (TransactionType.IN, 8, datetime(2026, 9, 30, 23, 59, 59)),
        )
        (summary,) = calculate_period_summary([medicine], date(2026, 10, 1), date(2026, 10, 3))

        self.assertEqual(summary.total_in, 3)
        self.assertEqual(summary.ending_stock, 6)
        self.assertEqual(summary.starting_stock, 3)

    def test_datetime_bounds_use_their_calendar_day(self):
        start = datetime(2026, 10, 1, 15, 30)
        end = datetime(2026, 10, 1, 8, 0)
        medicine = _medicine(
            "metformin",
            5,
            (TransactionType.OUT, 3, datetime(2026, 10, 1, 0, 5)),
            (TransactionType.OUT, 2, datetime(2026, 10, 1, 22, 0)),
        )
        (summary,) = calculate_period_summary([medicine], start, end)

        self.assertEqual(summary.total_out, 5)
        self.assertEqual(start, datetime(2026, 10, 1, 15, 30))
        self.assertEqual(end, datetime(2026, 10, 1, 8, 0))

    def test_no_later_movements_keeps_current_stock(self):
        medicine = _medicine(
            "paracetamol",
            532,
            (TransactionType.IN, 200, NOW - timedelta(days=3)),
            (TransactionType.OUT, 60, NOW - timedelta(days=1)),
        )
        (summary,) = calculate_period_summary([medicine], NOW.date(), NOW.date())

        self.assertEqual(summary.ending_stock, 532)
        self.assertEqual(summary.starting_stock, 532)

    def test_inconsistent_ledger_is_not_clamped(self):
        medicine = _medicine(
            "amoxicillin",
            0,
            (TransactionType.OUT, 10, datetime(2026, 10, 2, 9, 0)),
            (TransactionType.IN, 50, datetime(2026, 10, 10, 9, 0)),
        )
        (summary,) = calculate_period_summary([medicine], date(2026, 10, 1), date(2026, 10, 5))

        self.assertEqual(summary.ending_stock, -50)
        self.assertEqual(summary.starting_stock, -40)

    def test_preserves_input_order(self):
        medicines = [_medicine(name, 10) for name in ("zinc", "amoxicillin", "ors")]
        summaries = calculate_period_summary(medicines, date(2026, 10, 1), date(2026, 10, 5))

        self.assertEqual([s.medicine_id for s in summaries], ["zinc", "amoxicillin", "ors"])
        self.assertEqual(calculate_period_summary([], date(2026, 10, 1), date(2026, 10, 5)), [])

    def test_aware_timestamps_follow_the_given_zone(self):
        manila = timezone(timedelta(hours=8))
        medicine = _medicine(
            "ors",
            10,
            (TransactionType.OUT, 4, datetime(2026, 10, 10, 20, 0, tzinfo=timezone.utc)),
        )
        (summary,) = calculate_period_summary(
            [medicine], date(2026, 10, 11), date(2026, 10, 11), tz=manila
        )

        self.assertEqual(summary.total_out, 4)
        self.assertEqual(summary.starting_stock, 14)


if __name__ == "__main__":
    unittest.main()
