# segments/tests/test_period_service.py

from datetime import date
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.test import TestCase, override_settings

from accounting.models.journal import JournalEntry
from accounting.services.account_resolver import clear_active_chart_cache
from accounting.services.exceptions import PostingError
from audit.models import AuditLog
from common.exceptions import DomainValidationError
from profit_sharing.models import MonthlyProfit
from relations.models import Relation
from segments.domain import STATUS_DRAFT, STATUS_SAVED, STATUS_VALIDATED
from segments.models import SegmentEntry, SegmentPeriod
from segments.services.period_lifecycle import InvalidPeriodTransitionError
from segments.services.period_service import (
    PeriodValidationError,
    build_draft,
    preview_period,
    save_period,
    validate_period,
)

User = get_user_model()


class PeriodServiceTestBase(TestCase):
    def setUp(self):
        clear_active_chart_cache()
        call_command("seed_agency_chart", verbosity=0)

        self.user = User.objects.create_user(
            email="acc@example.com", password="pass", role="accountant", first_name="Omar"
        )
        self.acme = Relation.objects.create(name="Acme Co", type="company")
        self.globe = Relation.objects.create(
            name="Globe Co",
            type="company",
            segment_settings={"tickets": {"kind": "fixed", "value": 20}},
        )
        self.partner_a = Relation.objects.create(name="Partner A", relation_type="supplier")
        self.partner_b = Relation.objects.create(name="Partner B", relation_type="supplier")

    def payload(self, **overrides):
        data = {
            "from_date": date(2026, 1, 1),
            "to_date": date(2026, 1, 31),
            "entry_date": date(2026, 2, 1),
            "currency": "USD",
            "has_partner": True,
            "firm_retention_percentage": Decimal("60"),
            "partners": [
                {"partner_id": self.partner_a.id, "percentage": Decimal("40")},
                {"partner_id": self.partner_b.id, "percentage": Decimal("60")},
            ],
            "entries": [
                {"client_id": self.acme.id, "tickets": 1000, "rates": {"tickets": {"kind": "fixed", "value": Decimal("1")}}},
            ],
        }
        data.update(overrides)
        return data


class BuildAndValidateTests(PeriodServiceTestBase):
    def test_draft_uses_period_partner_table_for_every_entry(self):
        draft = build_draft(
            self.payload(entries=[{"client_id": self.acme.id, "visas": 500}, {"client_id": self.globe.id, "tickets": 25}])
        )

        self.assertEqual(draft.status, STATUS_DRAFT)
        first, second = draft.entries
        self.assertEqual(first.total, Decimal("500"))
        self.assertEqual(second.total, Decimal("500"))  # company default: 20 per ticket
        for entry in draft.entries:
            self.assertEqual(entry.firm_share, Decimal("300"))
            self.assertEqual([a.share for a in entry.partner_shares], [Decimal("80"), Decimal("120")])

    def test_validate_moves_draft_to_validated(self):
        validated = validate_period(build_draft(self.payload()))
        self.assertEqual(validated.status, STATUS_VALIDATED)

    def test_unbalanced_partners_keep_draft_and_report_message(self):
        draft = build_draft(
            self.payload(
                partners=[
                    {"partner_id": self.partner_a.id, "percentage": Decimal("30")},
                    {"partner_id": self.partner_b.id, "percentage": Decimal("50")},
                ]
            )
        )

        with self.assertRaises(PeriodValidationError) as ctx:
            validate_period(draft)

        self.assertIn("100%", str(ctx.exception))
        self.assertTrue(any("not fully distributed" in m for m in ctx.exception.messages))
        self.assertEqual(draft.status, STATUS_DRAFT)

    def test_unknown_company_rejected(self):
        with self.assertRaises(DomainValidationError) as ctx:
            build_draft(self.payload(entries=[{"client_id": "8a0c7f6e-4f7e-4d0c-9a59-000000000000", "tickets": 1}]))
        self.assertIn("Unknown company", str(ctx.exception))

    def test_individual_or_supplier_cannot_carry_entries(self):
        walk_in = Relation.objects.create(name="Walk-in Traveller")

        for relation in (walk_in, self.partner_a):
            with self.assertRaises(DomainValidationError) as ctx:
                build_draft(self.payload(entries=[{"client_id": relation.id, "tickets": 1}]))
            self.assertIn("only company clients", str(ctx.exception))

    def test_company_of_type_both_can_carry_entries(self):
        hub = Relation.objects.create(name="Hub Co", type="company", relation_type="both")
        draft = build_draft(self.payload(entries=[{"client_id": hub.id, "visas": 10}]))
        self.assertEqual(draft.entries[0].client_name, "Hub Co")

    def test_entry_without_company_fails_validation(self):
        draft = build_draft(self.payload(entries=[{"tickets": 4}]))
        with self.assertRaises(PeriodValidationError) as ctx:
            validate_period(draft)
        self.assertIn("Every entry must name a company.", ctx.exception.messages)

    def test_preview_reports_summary_without_raising(self):
        preview = preview_period(build_draft(self.payload(partners=[])))

        self.assertTrue(preview["errors"])
        self.assertEqual(preview["summary"]["available_for_partners_percentage"], Decimal("40"))
        self.assertEqual(preview["totals"].remainder, Decimal("400"))

    def test_default_retention_when_omitted(self):
        with override_settings(SEGMENT_FIRM_RETENTION_DEFAULT=Decimal("75")):
            draft = build_draft(self.payload(firm_retention_percentage=None))
        self.assertEqual(draft.firm_retention_percentage, Decimal("75"))

    def test_no_partner_period_keeps_hundred_percent(self):
        draft = build_draft(self.payload(has_partner=False, partners=[]))
        self.assertEqual(draft.firm_retention_percentage, Decimal("100"))
        self.assertEqual(draft.entries[0].firm_share, Decimal("1000"))


class SavePeriodTests(PeriodServiceTestBase):
    def test_invalid_partner_split_never_reaches_posting(self):
        draft = build_draft(
            self.payload(
                partners=[
                    {"partner_id": self.partner_a.id, "percentage": Decimal("30")},
                    {"partner_id": self.partner_b.id, "percentage": Decimal("50")},
                ]
            )
        )

        with mock.patch("segments.services.period_service.post_all") as post_all:
            with self.assertRaises(PeriodValidationError):
                save_period(user=self.user, draft=draft)

        post_all.assert_not_called()
        self.assertFalse(SegmentPeriod.objects.exists())
        self.assertFalse(JournalEntry.objects.exists())

    def test_save_persists_posts_and_rolls_up(self):
        draft = build_draft(self.payload())

        with self.captureOnCommitCallbacks(execute=True):
            saved = save_period(user=self.user, draft=draft)

        period = saved.period
        self.assertEqual(saved.draft.status, STATUS_SAVED)
        self.assertEqual(period.grand_total, Decimal("1000.00"))
        self.assertEqual(period.firm_total, Decimal("600.00"))
        self.assertEqual(period.distributed_total, Decimal("400.00"))

        entry = SegmentEntry.objects.get(period=period)
        self.assertEqual(entry.invoice_number, f"BK-{period.pk}-1")
        self.assertEqual(entry.created_by_name, "Omar")
        self.assertEqual(entry.partner_shares.count(), 2)

        self.assertEqual(len(saved.voucher_ids), 2)
        refs = set(JournalEntry.objects.values_list("reference", flat=True))
        self.assertEqual(refs, {f"SEGMENT_PERIOD:{period.pk}", f"SEGMENT_PARTNER_SHARE:{period.pk}"})

        self.acme.refresh_from_db()
        self.partner_a.refresh_from_db()
        self.assertEqual(self.acme.use_count, 1)
        self.assertEqual(self.partner_a.use_count, 1)

        month = MonthlyProfit.objects.get(pk="2026-01")
        self.assertEqual(month.total_profit, Decimal("600.00"))

        log = AuditLog.objects.get()
        self.assertEqual(log.target_type, "SEGMENT")
        self.assertEqual(log.target_id, str(period.pk))

    def test_posting_failure_rolls_back_everything(self):
        draft = build_draft(self.payload())

        with mock.patch(
            "segments.services.period_service.post_all",
            side_effect=PostingError("Database not available."),
        ):
            with self.captureOnCommitCallbacks(execute=True):
                with self.assertRaises(PostingError):
                    save_period(user=self.user, draft=draft)

        self.assertFalse(SegmentPeriod.objects.exists())
        self.assertFalse(SegmentEntry.objects.exists())
        self.assertFalse(MonthlyProfit.objects.exists())
        self.assertFalse(AuditLog.objects.exists())
        self.acme.refresh_from_db()
        self.assertEqual(self.acme.use_count, 0)

    def test_three_equal_partners_within_tolerance_save(self):
        partner_c = Relation.objects.create(name="Partner C", relation_type="supplier")
        draft = build_draft(
            self.payload(
                firm_retention_percentage=Decimal("0"),
                partners=[
                    {"partner_id": p.id, "percentage": Decimal("33.33")}
                    for p in (self.partner_a, self.partner_b, partner_c)
                ],
                entries=[
                    {"client_id": self.acme.id, "tickets": 2000, "rates": {"tickets": {"kind": "fixed", "value": Decimal("1")}}},
                ],
            )
        )

        preview = preview_period(draft)
        self.assertEqual(preview["errors"], [])
        self.assertEqual(preview["totals"].remainder, Decimal("0.20"))

        saved = save_period(user=self.user, draft=draft)
        self.assertEqual(saved.period.partner_pool_total, Decimal("2000.00"))
        self.assertEqual(saved.period.distributed_total, Decimal("1999.80"))

    @override_settings(ACCOUNTING_POSTING_ENABLED=False)
    def test_posting_can_be_switched_off(self):
        saved = save_period(user=self.user, draft=build_draft(self.payload()))
        self.assertEqual(saved.voucher_ids, ())
        self.assertFalse(JournalEntry.objects.exists())

    def test_monthly_profit_accumulates_across_periods(self):
        save_period(user=self.user, draft=build_draft(self.payload()))
        save_period(user=self.user, draft=build_draft(self.payload(has_partner=False, partners=[])))

        self.assertEqual(MonthlyProfit.objects.get(pk="2026-01").total_profit, Decimal("1600.00"))

    def test_saved_draft_cannot_be_saved_again(self):
        saved = save_period(user=self.user, draft=build_draft(self.payload()))
        with self.assertRaises(InvalidPeriodTransitionError):
            save_period(user=self.user, draft=saved.draft)

    def test_saved_period_is_immutable(self):
        saved = save_period(user=self.user, draft=build_draft(self.payload()))
        period = saved.period

        with self.assertRaises(ValidationError):
            period.save()
        with self.assertRaises(ValidationError):
            period.delete()
