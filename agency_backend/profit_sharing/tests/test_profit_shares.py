# profit_sharing/tests/test_profit_shares.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from audit.models import AuditLog
from common.exceptions import AuthorizationError, DomainValidationError
from profit_sharing.models import ProfitShare
from profit_sharing.services.monthly_profits import seed_monthly_profit
from profit_sharing.services.profit_shares import (
    delete_profit_share,
    save_profit_share,
    update_profit_share,
)
from relations.models import Relation

User = get_user_model()


class ProfitShareServiceTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email="mgr@example.com", password="pass", role="manager", first_name="Sara"
        )
        self.month = seed_monthly_profit("2026-01", Decimal("1000"), "USD")
        self.a = Relation.objects.create(name="Partner A", relation_type="supplier")
        self.b = Relation.objects.create(name="Partner B", relation_type="supplier")

    def test_amount_derived_from_month_total(self):
        with self.captureOnCommitCallbacks(execute=True):
            share = save_profit_share(user=self.user, month_id="2026-01", partner_id=self.a.id, percentage=Decimal("30"))

        self.assertEqual(share.amount, Decimal("300.00"))
        self.assertEqual(share.partner_name, "Partner A")
        self.assertEqual(share.created_by, "Sara")

        log = AuditLog.objects.get(target_type="PROFIT_SHARE")
        self.assertEqual(log.action, "CREATE")
        self.assertEqual(log.target_id, str(share.pk))

    def test_explicit_amount_is_kept(self):
        share = save_profit_share(
            user=self.user, month_id="2026-01", partner_id=self.a.id, percentage=Decimal("30"), amount=Decimal("250")
        )
        self.assertEqual(share.amount, Decimal("250.00"))

    def test_month_total_cannot_exceed_hundred(self):
        save_profit_share(user=self.user, month_id="2026-01", partner_id=self.a.id, percentage=Decimal("70"))

        with self.assertRaises(DomainValidationError):
            save_profit_share(user=self.user, month_id="2026-01", partner_id=self.b.id, percentage=Decimal("30.02"))

        save_profit_share(user=self.user, month_id="2026-01", partner_id=self.b.id, percentage=Decimal("30"))
        self.assertEqual(ProfitShare.objects.count(), 2)

    def test_unknown_month_or_partner(self):
        with self.assertRaises(DomainValidationError):
            save_profit_share(user=self.user, month_id="2025-12", partner_id=self.a.id, percentage=Decimal("10"))
        with self.assertRaises(DomainValidationError):
            save_profit_share(user=self.user, month_id="2026-01", partner_id="nope", percentage=Decimal("10"))
        self.assertFalse(ProfitShare.objects.exists())

    def test_invalid_percentage(self):
        for pct in (Decimal("0"), Decimal("-1"), Decimal("100.5")):
            with self.assertRaises(DomainValidationError):
                save_profit_share(user=self.user, month_id="2026-01", partner_id=self.a.id, percentage=pct)

    def test_anonymous_user_refused(self):
        with self.assertRaises(AuthorizationError):
            save_profit_share(user=None, month_id="2026-01", partner_id=self.a.id, percentage=Decimal("10"))

    def test_update_excludes_itself_from_cap(self):
        share = save_profit_share(user=self.user, month_id="2026-01", partner_id=self.a.id, percentage=Decimal("60"))
        save_profit_share(user=self.user, month_id="2026-01", partner_id=self.b.id, percentage=Decimal("40"))

        updated = update_profit_share(user=self.user, share_id=share.pk, percentage=Decimal("55"))
        self.assertEqual(updated.amount, Decimal("550.00"))

        with self.assertRaises(DomainValidationError):
            update_profit_share(user=self.user, share_id=share.pk, percentage=Decimal("61"))

    def test_delete_writes_audit(self):
        share = save_profit_share(user=self.user, month_id="2026-01", partner_id=self.a.id, percentage=Decimal("10"))

        with self.captureOnCommitCallbacks(execute=True):
            delete_profit_share(user=self.user, share_id=share.pk)

        self.assertFalse(ProfitShare.objects.exists())
        self.assertTrue(AuditLog.objects.filter(target_type="PROFIT_SHARE", action="DELETE").exists())

    def test_update_missing_share(self):
        with self.assertRaises(DomainValidationError):
            update_profit_share(user=self.user, share_id="00000000-0000-0000-0000-000000000000", notes="x")
