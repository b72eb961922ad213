# profit_sharing/tests/test_monthly_profits.py

from datetime import date
from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings

from common.exceptions import DomainValidationError
from profit_sharing.models import ManualDistributionPartner, ManualProfitDistribution, MonthlyProfit, ProfitShare
from profit_sharing.services.monthly_profits import (
    accrue_firm_profit,
    get_profit_shares_for_month,
    list_monthly_profits,
    month_id_for,
    seed_monthly_profit,
    validate_month_id,
)
from relations.models import Relation



class MonthIdTests(TestCase):
    def test_month_id_from_date(self):
        self.assertEqual(month_id_for(date(2026, 3, 9)), "2026-03")

    def test_invalid_month_ids_are_rejected(self):
        for bad in ("2026-13", "2026-3", "26-03", "", None):
            with self.assertRaises(DomainValidationError):
                validate_month_id(bad)


class SeedMonthlyProfitTests(TestCase):
    def test_seed_is_idempotent(self):
        seed_monthly_profit("2026-01", Decimal("1200"), "USD")
        seed_monthly_profit("2026-01", Decimal("1200"), "USD")

        self.assertEqual(MonthlyProfit.objects.count(), 1)
        self.assertEqual(MonthlyProfit.objects.get(pk="2026-01").total_profit, Decimal("1200.00"))

    def test_seed_defaults_currency(self):
        obj = seed_monthly_profit("2026-02", "10.005")
        self.assertEqual(obj.currency, "USD")
        self.assertEqual(obj.total_profit, Decimal("10.01"))

    def test_unsupported_currency(self):
        with self.assertRaises(DomainValidationError):
            seed_monthly_profit("2026-02", 10, "EUR")

    def test_command(self):
        out = StringIO()
        call_command("seed_monthly_profit", "2026-04", "250.5", "--currency", "IQD", stdout=out)

        obj = MonthlyProfit.objects.get(pk="2026-04")
        self.assertEqual(obj.total_profit, Decimal("250.50"))
        self.assertEqual(obj.currency, "IQD")
        self.assertIn("2026-04", out.getvalue())

    def test_command_rejects_bad_input(self):
        with self.assertRaises(CommandError):
            call_command("seed_monthly_profit", "2026-04", "abc")
        with self.assertRaises(CommandError):
            call_command("seed_monthly_profit", "April", "10")


class AccrueFirmProfitTests(TestCase):
    def test_accrual_creates_then_adds(self):
        accrue_firm_profit("2026-01", Decimal("100"), "USD")
        accrue_firm_profit("2026-01", Decimal("50.25"), "USD")

        self.assertEqual(MonthlyProfit.objects.get(pk="2026-01").total_profit, Decimal("150.25"))

    @override_settings(SUPPORTED_CURRENCIES=["USD", "IQD"])
    def test_currency_mismatch_is_refused(self):
        accrue_firm_profit("2026-01", Decimal("100"), "USD")

        with self.assertRaises(DomainValidationError):
            accrue_firm_profit("2026-01", Decimal("100"), "IQD")

        self.assertEqual(MonthlyProfit.objects.get(pk="2026-01").total_profit, Decimal("100.00"))


class ListMonthlyProfitsTests(TestCase):
    def setUp(self):
        self.partner = Relation.objects.create(name="Partner A", relation_type="supplier")

    def test_merges_system_and_manual_newest_first(self):
        seed_monthly_profit("2020-01", 100, "USD")
        seed_monthly_profit("2020-03", 300, "USD")
        manual = ManualProfitDistribution.objects.create(
            from_date=date(2026, 5, 1),
            to_date=date(2026, 5, 31),
            profit=Decimal("80"),
            currency="USD",
            distributed_total=Decimal("80"),
        )
        ManualDistributionPartner.objects.create(
            distribution=manual,
            partner=self.partner,
            partner_name=self.partner.name,
            percentage=Decimal("100"),
            amount=Decimal("80"),
        )

        rows = list_monthly_profits()

        self.assertEqual([r["id"] for r in rows], [str(manual.id), "2020-03", "2020-01"])
        self.assertFalse(rows[0]["from_system"])
        self.assertTrue(rows[1]["from_system"])
        self.assertEqual(rows[0]["partners"][0]["partner_name"], "Partner A")
        self.assertNotIn("sort_key", rows[0])

    def test_shares_for_system_month(self):
        month = seed_monthly_profit("2026-01", 1000, "USD")
        ProfitShare.objects.create(
            monthly_profit=month,
            partner=self.partner,
            partner_name=self.partner.name,
            percentage=Decimal("25"),
            amount=Decimal("250"),
        )

        rows = get_profit_shares_for_month("2026-01")

        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["profit_month_id"], "2026-01")
        self.assertEqual(rows[0]["amount"], Decimal("250.00"))

    def test_shares_for_manual_distribution_and_unknown_id(self):
        manual = ManualProfitDistribution.objects.create(
            from_date=date(2026, 5, 1),
            to_date=date(2026, 5, 31),
            profit=Decimal("80"),
            currency="USD",
        )
        ManualDistributionPartner.objects.create(
            distribution=manual,
            partner=self.partner,
            partner_name=self.partner.name,
            percentage=Decimal("100"),
            amount=Decimal("80"),
        )

        self.assertEqual(len(get_profit_shares_for_month(str(manual.id))), 1)
        self.assertEqual(get_profit_shares_for_month("not-an-id"), [])
