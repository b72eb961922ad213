# segments/tests/test_apportionment.py

from decimal import Decimal

from django.test import SimpleTestCase

from segments.domain import CompanyEntry, FixedRate, PartnerDeclaration, PercentageRate, ServiceLine
from segments.services.apportionment import (
    DEFAULT_RATES,
    aggregate_period,
    company_total,
    compute_entry,
    is_balanced,
    percentage_summary,
    resolve_service_amount,
    service_lines_for,
    split_profit,
)

D = Decimal


def partner(pid, pct):
    return PartnerDeclaration(partner_id=pid, partner_name=pid, percentage=D(pct))


class RateResolverTests(SimpleTestCase):
    def test_zero_count_is_always_zero(self):
        for rate in (FixedRate(D("0")), FixedRate(D("12.5")), PercentageRate(D("50")), PercentageRate(D("0"))):
            with self.subTest(rate=rate):
                self.assertEqual(resolve_service_amount(0, rate), D("0"))

    def test_fixed_is_count_times_value(self):
        for n, v in ((1, "10"), (3, "7.25"), (12, "0"), (40, "1000")):
            with self.subTest(n=n, v=v):
                self.assertEqual(resolve_service_amount(n, FixedRate(D(v))), n * D(v))

    def test_percentage_is_count_times_value_over_hundred(self):
        for n, v in ((10, "50"), (3, "33.3"), (7, "100"), (1, "0")):
            with self.subTest(n=n, v=v):
                self.assertEqual(resolve_service_amount(n, PercentageRate(D(v))), n * D(v) / D(100))

    def test_no_rounding(self):
        self.assertEqual(resolve_service_amount(1, PercentageRate(D("33.333"))), D("0.33333"))


class CompanyTotalTests(SimpleTestCase):
    def test_company_without_partners(self):
        lines = (
            ServiceLine("tickets", 10, PercentageRate(D("50"))),
            ServiceLine("visas", 0, PercentageRate(D("100"))),
            ServiceLine("hotels", 0, PercentageRate(D("100"))),
            ServiceLine("groups", 0, PercentageRate(D("100"))),
        )
        total = company_total(lines)
        self.assertEqual(total, D("5"))

        split = split_profit(total, False, D("100"), [])
        self.assertEqual(split.firm_share, D("5"))
        self.assertEqual(split.partner_pool, D("0"))
        self.assertEqual(split.allocations, ())

    def test_default_rates(self):
        lines = service_lines_for({"tickets": 2, "visas": 1})
        self.assertEqual([l.rate for l in lines], [DEFAULT_RATES[s] for s in ("tickets", "visas", "hotels", "groups")])
        self.assertEqual(company_total(lines), D("2"))

    def test_override_beats_company_default(self):
        lines = service_lines_for(
            {"tickets": 2, "hotels": 1},
            overrides={"tickets": FixedRate(D("15"))},
            company_rates={"tickets": FixedRate(D("10")), "hotels": FixedRate(D("40"))},
        )
        self.assertEqual(company_total(lines), D("70"))


class SplitterTests(SimpleTestCase):
    def test_no_partner_flag_keeps_everything(self):
        for total in ("0", "1", "999.99"):
            with self.subTest(total=total):
                split = split_profit(D(total), False, D("25"), [partner("A", "100")])
                self.assertEqual(split.firm_share, D(total))
                self.assertEqual(split.partner_pool, D("0"))

    def test_firm_share_and_pool_always_add_up(self):
        cases = [
            ("1000", "60", [("A", "40"), ("B", "60")]),
            ("333.33", "33.3", [("A", "50")]),
            ("0.01", "0", [("A", "70"), ("B", "20")]),
            ("12345.67", "100", []),
        ]
        for total, retention, partners in cases:
            with self.subTest(total=total, retention=retention):
                split = split_profit(D(total), True, D(retention), [partner(p, pct) for p, pct in partners])
                self.assertLessEqual(abs(split.firm_share + split.partner_pool - D(total)), D("1e-9"))

    def test_allocations_sum_to_pool_when_percentages_total_hundred(self):
        split = split_profit(D("777.77"), True, D("12.5"), [partner("A", "33.33"), partner("B", "33.33"), partner("C", "33.34")])
        self.assertLessEqual(abs(split.distributed - split.partner_pool), D("0.01"))

    def test_two_partners_scenario(self):
        split = split_profit(D("1000"), True, D("60"), [partner("A", "40"), partner("B", "60")])

        self.assertEqual(split.partner_pool, D("400"))
        self.assertEqual(split.firm_share, D("600"))
        self.assertEqual([(a.partner_id, a.share) for a in split.allocations], [("A", D("160")), ("B", D("240"))])
        self.assertEqual(split.distributed, split.partner_pool)

    def test_unbalanced_partners_are_not_rejected(self):
        split = split_profit(D("100"), True, D("50"), [partner("A", "30"), partner("B", "50")])
        self.assertEqual(split.remainder, D("10"))

    def test_empty_partner_list_reports_whole_pool_as_remainder(self):
        split = split_profit(D("100"), True, D("40"), [])
        self.assertEqual(split.allocations, ())
        self.assertEqual(split.remainder, D("60"))


class PeriodAggregatorTests(SimpleTestCase):
    def _entry(self, client_id, tickets, visas=0):
        return CompanyEntry(
            client_id=client_id,
            client_name=client_id,
            service_lines=service_lines_for({"tickets": tickets, "visas": visas}),
        )

    def test_remainder_is_zero_for_balanced_partner_table(self):
        partners = [partner("A", "25"), partner("B", "75")]
        entries = [
            compute_entry(self._entry(c, t, v), has_partner=True, firm_retention_percentage=D("35"), partners=partners)
            for c, t, v in (("c1", 10, 3), ("c2", 7, 0), ("c3", 0, 11))
        ]

        totals = aggregate_period(entries)

        self.assertEqual(totals.grand_total, D("5") + D("3") + D("3.5") + D("11"))
        self.assertLessEqual(abs(totals.remainder), D("0.01"))
        self.assertEqual(totals.firm_total + totals.partner_pool_total, totals.grand_total)

    def test_remainder_without_partners_is_zero(self):
        entries = [
            compute_entry(self._entry("c1", 4), has_partner=False, firm_retention_percentage=D("100"), partners=[])
        ]
        totals = aggregate_period(entries)
        self.assertEqual(totals.firm_total, D("2"))
        self.assertEqual(totals.remainder, D("0"))

    def test_empty_period(self):
        totals = aggregate_period([])
        self.assertEqual(totals.grand_total, D("0"))
        self.assertEqual(totals.remainder, D("0"))


class PercentageSummaryTests(SimpleTestCase):
    def test_summary_with_partners(self):
        summary = percentage_summary(True, D("60"), [partner("A", "30"), partner("B", "50")])

        self.assertEqual(summary["firm_retention_percentage"], D("60"))
        self.assertEqual(summary["available_for_partners_percentage"], D("40"))
        self.assertEqual(summary["distributed_percentage"], D("80"))
        self.assertEqual(summary["remaining_percentage"], D("20"))
        self.assertFalse(summary["is_balanced"])

    def test_without_partners_firm_keeps_hundred(self):
        summary = percentage_summary(False, D("60"), [])
        self.assertEqual(summary["firm_retention_percentage"], D("100"))
        self.assertTrue(summary["is_balanced"])

    def test_balance_tolerance(self):
        self.assertTrue(is_balanced(True, [partner("A", "33.33"), partner("B", "66.66")]))
        self.assertFalse(is_balanced(True, [partner("A", "33"), partner("B", "66")]))
