# profit_sharing/tests/test_manual_distributions.py

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.db.models import Sum
from django.test import TestCase, override_settings

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry
from accounting.services.account_resolver import clear_active_chart_cache
from audit.models import AuditLog
from common.exceptions import DomainValidationError
from profit_sharing.models import ManualDistributionPartner, ManualProfitDistribution
from profit_sharing.services.manual_distributions import (
    delete_manual_distribution,
    save_manual_distribution,
    update_manual_distribution,
)
from relations.models import Relation

User = get_user_model()


def _balance(code: str, entry_type: str) -> Decimal:
    total = LedgerEntry.objects.filter(account__code=code, entry_type=entry_type).aggregate(s=Sum("amount"))["s"]
    return total or Decimal("0.00")


class ManualDistributionTests(TestCase):
    def setUp(self):
        clear_active_chart_cache()
        call_command("seed_agency_chart", verbosity=0)

        self.user = User.objects.create_user(
            email="mgr@example.com", password="pass", role="manager", first_name="Sara"
        )
        self.a = Relation.objects.create(name="Partner A", relation_type="supplier")
        self.b = Relation.objects.create(name="Partner B", relation_type="supplier")

    def _save(self, **overrides):
        data = {
            "user": self.user,
            "from_date": date(2026, 3, 1),
            "to_date": date(2026, 3, 31),
            "profit": Decimal("1000"),
            "currency": "USD",
            "partners": [
                {"partner_id": self.a.id, "percentage": Decimal("60")},
                {"partner_id": self.b.id, "percentage": Decimal("40")},
            ],
        }
        data.update(overrides)
        return save_manual_distribution(**data)

    def test_create_splits_and_posts_revision_one(self):
        with self.captureOnCommitCallbacks(execute=True):
            distribution = self._save()

        amounts = dict(distribution.partners.values_list("partner_name", "amount"))
        self.assertEqual(amounts, {"Partner A": Decimal("600.00"), "Partner B": Decimal("400.00")})
        self.assertEqual(distribution.distributed_total, Decimal("1000.00"))
        self.assertEqual(distribution.revision, 1)

        entry = JournalEntry.objects.get(reference=f"MANUAL_DISTRIBUTION:{distribution.pk}:rev1")
        self.assertEqual(entry.currency, "USD")
        self.assertEqual(_balance("3200", "DEBIT"), Decimal("1000.00"))
        self.assertEqual(_balance("2200", "CREDIT"), Decimal("1000.00"))

        self.assertTrue(AuditLog.objects.filter(target_type="MANUAL_PROFIT", action="CREATE").exists())

    def test_percentages_must_total_hundred_within_tolerance(self):
        with self.assertRaises(DomainValidationError):
            self._save(
                partners=[
                    {"partner_id": self.a.id, "percentage": Decimal("60")},
                    {"partner_id": self.b.id, "percentage": Decimal("39.98")},
                ]
            )
        self.assertFalse(ManualProfitDistribution.objects.exists())
        self.assertFalse(JournalEntry.objects.exists())

        # 99.99 sits inside the tolerance
        distribution = self._save(
            partners=[
                {"partner_id": self.a.id, "percentage": Decimal("33.33")},
                {"partner_id": self.b.id, "percentage": Decimal("66.66")},
            ]
        )
        self.assertEqual(distribution.distributed_total, Decimal("999.90"))

    def test_header_validation(self):
        with self.assertRaises(DomainValidationError):
            self._save(from_date=date(2026, 4, 1))
        with self.assertRaises(DomainValidationError):
            self._save(profit=Decimal("0"))
        with self.assertRaises(DomainValidationError):
            self._save(partners=[])
        with self.assertRaises(DomainValidationError):
            self._save(currency="EUR")

    def test_unknown_partner_leaves_nothing(self):
        with self.assertRaises(DomainValidationError):
            self._save(partners=[{"partner_id": "00000000-0000-0000-0000-000000000000", "percentage": Decimal("100")}])
        self.assertFalse(ManualProfitDistribution.objects.exists())

    def test_update_posts_difference_and_bumps_revision(self):
        distribution = self._save()

        updated = update_manual_distribution(
            user=self.user,
            distribution_id=distribution.pk,
            from_date=date(2026, 3, 1),
            to_date=date(2026, 3, 31),
            profit=Decimal("800"),
            currency="USD",
            partners=[{"partner_id": self.a.id, "percentage": Decimal("100")}],
        )

        self.assertEqual(updated.revision, 2)
        self.assertEqual(updated.distributed_total, Decimal("800.00"))
        self.assertEqual(ManualDistributionPartner.objects.filter(distribution=updated).count(), 1)

        reversal = JournalEntry.objects.get(reference=f"MANUAL_DISTRIBUTION:{distribution.pk}:rev2")
        lines = {(l.account.code, l.entry_type): l.amount for l in reversal.ledger_entries.select_related("account")}
        self.assertEqual(lines, {("2200", "DEBIT"): Decimal("200.00"), ("3200", "CREDIT"): Decimal("200.00")})

        net = _balance("3200", "DEBIT") - _balance("3200", "CREDIT")
        self.assertEqual(net, Decimal("800.00"))

    def test_ledger_history_of_one_distribution_spans_revisions(self):
        first = self._save()
        self._save(profit=Decimal("300"))
        update_manual_distribution(
            user=self.user,
            distribution_id=first.pk,
            from_date=date(2026, 3, 1),
            to_date=date(2026, 3, 31),
            profit=Decimal("800"),
            currency="USD",
            partners=[{"partner_id": self.a.id, "percentage": Decimal("100")}],
        )

        lines = LedgerEntry.objects.for_source("MANUAL_DISTRIBUTION", first.pk)

        self.assertEqual(lines.count(), 4)
        self.assertEqual(lines.net_by_account_code(), {"3200": Decimal("800.00"), "2200": Decimal("-800.00")})
        self.assertEqual(
            sum(l.signed_amount for l in lines.select_related("journal_entry")),
            Decimal("0.00"),
        )
        self.assertEqual({l.currency for l in lines.select_related("journal_entry")}, {"USD"})

    def test_update_without_amount_change_posts_nothing(self):
        distribution = self._save()

        update_manual_distribution(
            user=self.user,
            distribution_id=distribution.pk,
            from_date=date(2026, 3, 1),
            to_date=date(2026, 3, 31),
            profit=Decimal("1000"),
            currency="USD",
            partners=[{"partner_id": self.b.id, "percentage": Decimal("100")}],
            notes="reassigned",
        )

        self.assertEqual(JournalEntry.objects.count(), 1)

    def test_currency_change_is_refused(self):
        distribution = self._save()

        with self.assertRaises(DomainValidationError):
            update_manual_distribution(
                user=self.user,
                distribution_id=distribution.pk,
                from_date=date(2026, 3, 1),
                to_date=date(2026, 3, 31),
                profit=Decimal("1000"),
                currency="IQD",
                partners=[{"partner_id": self.a.id, "percentage": Decimal("100")}],
            )

        distribution.refresh_from_db()
        self.assertEqual(distribution.revision, 1)

    def test_delete_posts_full_reversal(self):
        distribution = self._save()
        pk = distribution.pk

        with self.captureOnCommitCallbacks(execute=True):
            delete_manual_distribution(user=self.user, distribution_id=pk)

        self.assertFalse(ManualProfitDistribution.objects.exists())
        self.assertFalse(ManualDistributionPartner.objects.exists())
        self.assertTrue(JournalEntry.objects.filter(reference=f"MANUAL_DISTRIBUTION:{pk}:rev2").exists())
        self.assertEqual(_balance("3200", "DEBIT"), _balance("3200", "CREDIT"))
        self.assertEqual(_balance("2200", "DEBIT"), _balance("2200", "CREDIT"))
        self.assertTrue(AuditLog.objects.filter(target_type="MANUAL_PROFIT", action="DELETE").exists())

    def test_delete_missing(self):
        with self.assertRaises(DomainValidationError):
            delete_manual_distribution(user=self.user, distribution_id="missing")

    @override_settings(ACCOUNTING_POSTING_ENABLED=False)
    def test_posting_can_be_disabled(self):
        self._save()
        self.assertFalse(JournalEntry.objects.exists())
