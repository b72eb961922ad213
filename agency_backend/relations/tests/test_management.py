# relations/tests/test_management.py

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings

from audit.models import AuditLog
from common.exceptions import AuthorizationError, DomainValidationError
from profit_sharing.services.manual_distributions import save_manual_distribution
from profit_sharing.services.monthly_profits import seed_monthly_profit
from profit_sharing.services.profit_shares import save_profit_share
from relations.models import Relation
from relations.services.management import (
    RelationInUseError,
    create_relation,
    create_relations_bulk,
    delete_relation,
    delete_relations_bulk,
    increment_use_count,
    update_relation,
)

User = get_user_model()


class RelationManagementTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email="manager@example.com", password="pass", role="manager", first_name="Sara"
        )

    def test_create_records_actor_and_audits(self):
        with self.captureOnCommitCallbacks(execute=True):
            relation = create_relation(
                user=self.user,
                data={"name": "  Acme Travel ", "type": "company", "use_count": 99},
            )

        self.assertEqual(relation.name, "Acme Travel")
        self.assertEqual(relation.created_by, "Sara")
        self.assertEqual(relation.use_count, 0)

        log = AuditLog.objects.get()
        self.assertEqual(log.action, "CREATE")
        self.assertEqual(log.target_type, "CLIENT")
        self.assertEqual(log.target_id, str(relation.id))

    def test_anonymous_cannot_mutate(self):
        with self.assertRaises(AuthorizationError):
            create_relation(user=None, data={"name": "X"})

    def test_invalid_choice_is_domain_error(self):
        with self.assertRaises(DomainValidationError):
            create_relation(user=self.user, data={"name": "X", "relation_type": "partner"})

    def test_bulk_create_applies_defaults(self):
        count = create_relations_bulk(
            user=self.user,
            rows=[{"name": "One"}, {"name": "Two", "relation_type": "supplier"}],
        )

        self.assertEqual(count, 2)
        one = Relation.objects.get(name="One")
        self.assertEqual(one.type, "individual")
        self.assertEqual(one.relation_type, "client")
        self.assertEqual(one.created_by, "Imported by Sara")

    def test_bulk_create_is_all_or_nothing(self):
        with self.assertRaises(DomainValidationError):
            create_relations_bulk(user=self.user, rows=[{"name": "Good"}, {"name": ""}])
        self.assertFalse(Relation.objects.exists())

    def test_update(self):
        relation = Relation.objects.create(name="Old")

        with self.captureOnCommitCallbacks(execute=True):
            updated = update_relation(user=self.user, relation_id=relation.id, data={"name": "New"})

        self.assertEqual(updated.name, "New")
        self.assertEqual(AuditLog.objects.get().action, "UPDATE")

    def test_delete_refused_when_in_use(self):
        relation = Relation.objects.create(name="Busy")
        increment_use_count([relation.id])

        with self.assertRaises(RelationInUseError):
            delete_relation(user=self.user, relation_id=relation.id)
        self.assertTrue(Relation.objects.filter(pk=relation.pk).exists())

    def test_delete_unused(self):
        relation = Relation.objects.create(name="Idle")

        with self.captureOnCommitCallbacks(execute=True):
            delete_relation(user=self.user, relation_id=relation.id)

        self.assertFalse(Relation.objects.exists())
        self.assertEqual(AuditLog.objects.get().action, "DELETE")

    def test_delete_missing_relation(self):
        with self.assertRaises(DomainValidationError):
            delete_relation(user=self.user, relation_id="not-a-uuid")

    def test_bulk_delete_refuses_whole_batch_if_any_in_use(self):
        idle = Relation.objects.create(name="Idle")
        busy = Relation.objects.create(name="Busy", use_count=1)

        with self.assertRaises(RelationInUseError):
            delete_relations_bulk(user=self.user, relation_ids=[idle.id, busy.id])
        self.assertEqual(Relation.objects.count(), 2)

        self.assertEqual(delete_relations_bulk(user=self.user, relation_ids=[idle.id]), 1)

    def test_profit_share_partner_counts_as_in_use(self):
        month = seed_monthly_profit("2026-01", Decimal("1000"), "USD")
        partner = Relation.objects.create(name="Partner A", relation_type="supplier")
        save_profit_share(user=self.user, month_id=month.id, partner_id=partner.id, percentage=Decimal("40"))

        partner.refresh_from_db()
        self.assertEqual(partner.use_count, 1)
        with self.assertRaises(RelationInUseError):
            delete_relation(user=self.user, relation_id=partner.id)
        with self.assertRaises(RelationInUseError):
            delete_relations_bulk(user=self.user, relation_ids=[partner.id])
        self.assertTrue(Relation.objects.filter(pk=partner.pk).exists())

    @override_settings(ACCOUNTING_POSTING_ENABLED=False)
    def test_manual_distribution_partners_count_as_in_use(self):
        a = Relation.objects.create(name="Partner A", relation_type="supplier")
        b = Relation.objects.create(name="Partner B", relation_type="supplier")
        save_manual_distribution(
            user=self.user,
            from_date=date(2026, 3, 1),
            to_date=date(2026, 3, 31),
            profit=Decimal("1000"),
            currency="USD",
            partners=[
                {"partner_id": a.id, "percentage": Decimal("50")},
                {"partner_id": b.id, "percentage": Decimal("50")},
            ],
        )

        self.assertEqual(
            sorted(Relation.objects.values_list("use_count", flat=True)),
            [1, 1],
        )
        with self.assertRaises(RelationInUseError):
            delete_relations_bulk(user=self.user, relation_ids=[a.id, b.id])
        self.assertEqual(Relation.objects.count(), 2)

    def test_referenced_relation_with_stale_count_is_still_refused(self):
        month = seed_monthly_profit("2026-02", Decimal("500"), "USD")
        partner = Relation.objects.create(name="Partner C", relation_type="supplier")
        save_profit_share(user=self.user, month_id=month.id, partner_id=partner.id, percentage=Decimal("10"))
        Relation.objects.filter(pk=partner.pk).update(use_count=0)

        with self.assertRaises(RelationInUseError):
            delete_relation(user=self.user, relation_id=partner.id)
        with self.assertRaises(RelationInUseError):
            delete_relations_bulk(user=self.user, relation_ids=[partner.id])
        self.assertTrue(Relation.objects.filter(pk=partner.pk).exists())
