import json
import logging
import unittest
from datetime import datetime, timezone

from medstock.core.ledger import TransactionType
from medstock.core.logging import JsonFormatter
from medstock.services.alert_service import build_low_stock_alerts
from medstock.services.ledger_service import create_medicine, get_medicine, record_transaction
from tests.test_ledger_service import make_session

NOW = datetime(2026, 10, 19, 4, 0, tzinfo=timezone.utc)


def _record(**extra):
    record = logging.LogRecord(
        name="medstock.services.ledger_service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Removed %s units from %s",
        args=(3, "Amoxicillin 500mg"),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class JsonFormatterTest(unittest.TestCase):
    def test_medicine_id_is_included_when_present(self):
        payload = json.loads(JsonFormatter().format(_record(medicine_id="amox-500")))

        self.assertEqual(payload["medicine_id"], "amox-500")
        self.assertEqual(payload["message"], "Removed 3 units from Amoxicillin 500mg")
        self.assertEqual(payload["level"], "INFO")

    def test_medicine_id_is_omitted_otherwise(self):
        payload = json.loads(JsonFormatter().format(_record()))

        self.assertNotIn("medicine_id", payload)


class ServiceLogContextTest(unittest.TestCase):
    def setUp(self):
        self.db = make_session()
        create_medicine(
            self.db,
            medicine_id="amox-500",
            name="Amoxicillin 500mg",
            description="",
            current_stock=12,
            low_stock_threshold=10,
        )

    def tearDown(self):
        self.db.close()

    def test_transactions_log_the_medicine_id(self):
        with self.assertLogs("medstock.services.ledger_service", level="INFO") as captured:
            record_transaction(self.db, "amox-500", TransactionType.OUT, 3, now=NOW)

        self.assertEqual([record.medicine_id for record in captured.records], ["amox-500"])

    def test_low_stock_alerts_log_the_medicine_id(self):
        record_transaction(self.db, "amox-500", TransactionType.OUT, 5, now=NOW)
        medicine = get_medicine(self.db, "amox-500")

        with self.assertLogs("medstock.services.alert_service", level="WARNING") as captured:
            build_low_stock_alerts([medicine], now=NOW)

        self.assertEqual([record.medicine_id for record in captured.records], ["amox-500"])


if __name__ == "__main__":
    unittest.main()
