import unittest
from datetime import date, datetime, timedelta

from medstock.core.consumption import calculate_weekly_trend
from medstock.core.dates import subtract_months, week_start
from medstock.core.ledger import Medicine, Transaction, TransactionType

# a Monday
NOW = datetime(2026, 10, 19, 12, 0)


def _medicine(*movements):
    return Medicine(
        id="ors",
        name="ORS Sachet",
        current_stock=100,
        low_stock_threshold=20,
        transactions=tuple(
            Transaction(id="t{}".format(index), kind=kind, quantity=qty, timestamp=ts)
            for index, (kind, qty, ts) in enumerate(movements, start=1)
        ),
    )


class WeeklyTrendTest(unittest.TestCase):
    def test_buckets_start_on_sunday(self):
        trend = calculate_weekly_trend(_medicine(), now=NOW)

        self.assertEqual(len(trend), 26)
        self.assertEqual(trend[-1].week_start, date(2026, 10, 18))
        self.assertEqual(trend[0].week_start, date(2026, 4, 26))
        self.assertTrue(all(week.week_start.weekday() == 6 for week in trend))
        self.assertTrue(all(week.dispensed == 0 for week in trend))

    def test_moving_average_over_four_weeks(self):
        medicine = _medicine(
            (TransactionType.OUT, 10, NOW),
            (TransactionType.OUT, 20, datetime(2026, 10, 17, 9, 0)),
            (TransactionType.IN, 300, datetime(2026, 10, 17, 9, 0)),
            (TransactionType.OUT, 50, NOW - timedelta(days=200)),
        )
        trend = calculate_weekly_trend(medicine, now=NOW)

        self.assertEqual(trend[-1].dispensed, 10)
        self.assertEqual(trend[-2].week_start, date(2026, 10, 11))
        self.assertEqual(trend[-2].dispensed, 20)
        self.assertEqual(trend[-1].moving_average, 7.5)
        self.assertEqual(trend[-2].moving_average, 5.0)
        self.assertEqual(trend[0].moving_average, 0.0)
        self.assertEqual(sum(week.dispensed for week in trend), 30)

    def test_moving_average_rounds_half_up(self):
        trend = calculate_weekly_trend(_medicine((TransactionType.OUT, 1, NOW)), now=NOW)
        self.assertEqual(trend[-1].moving_average, 0.3)


class DateHelpersTest(unittest.TestCase):
    def test_week_start(self):
        self.assertEqual(week_start(date(2026, 10, 18)), date(2026, 10, 18))
        self.assertEqual(week_start(date(2026, 10, 24)), date(2026, 10, 18))

    def test_subtract_months_clamps_to_month_end(self):
        self.assertEqual(subtract_months(datetime(2026, 8, 31, 8, 0), 6), datetime(2026, 2, 28, 8, 0))
        self.assertEqual(subtract_months(datetime(2026, 3, 15), 6), datetime(2025, 9, 15))


if __name__ == "__main__":
    unittest.main()
