# segments/tests/test_converters.py

from datetime import date, datetime
from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from common.exceptions import DomainValidationError
from segments.converters import rate_from_payload, rates_from_settings, to_date
from segments.domain import FixedRate, PercentageRate


class DateConversionTests(SimpleTestCase):
    def test_accepts_dates_strings_and_datetimes(self):
        self.assertEqual(to_date(date(2026, 3, 1)), date(2026, 3, 1))
        self.assertEqual(to_date("2026-03-01"), date(2026, 3, 1))
        self.assertIsNone(to_date(None))
        self.assertIsNone(to_date(""))

    @override_settings(TIME_ZONE="Asia/Baghdad")
    def test_datetimes_become_local_dates(self):
        self.assertEqual(to_date("2026-03-01T22:30:00+00:00"), date(2026, 3, 2))
        self.assertEqual(to_date(datetime(2026, 3, 1, 10, 0)), date(2026, 3, 1))

    def test_garbage_is_rejected(self):
        with self.assertRaises(DomainValidationError):
            to_date("yesterday")


class RateConversionTests(SimpleTestCase):
    def test_kinds(self):
        self.assertEqual(rate_from_payload({"kind": "fixed", "value": "12.5"}), FixedRate(Decimal("12.5")))
        self.assertEqual(rate_from_payload({"kind": "Percentage", "value": 50}), PercentageRate(Decimal("50")))
        self.assertIsNone(rate_from_payload(None))

    def test_invalid_rates(self):
        with self.assertRaises(DomainValidationError):
            rate_from_payload({"kind": "ratio", "value": 1})
        with self.assertRaises(DomainValidationError):
            rate_from_payload({"kind": "fixed", "value": -1})

    def test_non_finite_values_rejected(self):
        for value in ("NaN", "sNaN", "Infinity", "-Infinity", Decimal("NaN")):
            with self.assertRaises(DomainValidationError):
                rate_from_payload({"kind": "fixed", "value": value})

    def test_company_settings_only_known_services(self):
        rates = rates_from_settings(
            {"tickets": {"kind": "fixed", "value": 10}, "firmRetention": 80}
        )
        self.assertEqual(rates, {"tickets": FixedRate(Decimal("10"))})
