# relations/tests/test_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from profit_sharing.services.monthly_profits import seed_monthly_profit
from profit_sharing.services.profit_shares import save_profit_share
from relations.models import Relation

User = get_user_model()


class RelationApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create_user(email="m@example.com", password="pass", role="manager")
        self.agent = User.objects.create_user(email="a@example.com", password="pass", role="agent")

    def test_requires_authentication(self):
        res = self.client.get("/api/relations/")
        self.assertEqual(res.status_code, 401)

    def test_list_returns_page_and_total(self):
        for i in range(3):
            Relation.objects.create(name=f"R{i}", use_count=i)
        self.client.force_authenticate(self.agent)

        res = self.client.get("/api/relations/", {"limit": 2})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["total"], 3)
        self.assertEqual([r["name"] for r in res.data["results"]], ["R2", "R1"])

    def test_create_and_update(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/relations/",
            {
                "name": "Acme",
                "type": "company",
                "segment_settings": {"tickets": {"kind": "fixed", "value": 5}},
            },
            format="json",
        )
        self.assertEqual(res.status_code, 201)
        relation_id = res.data["relation"]["id"]

        res = self.client.patch(f"/api/relations/{relation_id}/", {"phone": "123"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(Relation.objects.get(pk=relation_id).phone, "123")

    def test_bad_segment_settings_rejected(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/relations/",
            {"name": "Acme", "segment_settings": {"tickets": {"kind": "bogus", "value": 5}}},
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_agent_cannot_delete(self):
        relation = Relation.objects.create(name="Keep")
        self.client.force_authenticate(self.agent)

        res = self.client.delete(f"/api/relations/{relation.id}/")
        self.assertEqual(res.status_code, 403)

    def test_delete_in_use_reports_error(self):
        relation = Relation.objects.create(name="Busy", use_count=3)
        self.client.force_authenticate(self.manager)

        res = self.client.delete(f"/api/relations/{relation.id}/")

        self.assertEqual(res.status_code, 400)
        self.assertFalse(res.data["success"])

    def test_non_finite_segment_rate_rejected(self):
        self.client.force_authenticate(self.manager)

        for value in ("NaN", "Infinity", "-inf"):
            res = self.client.post(
                "/api/relations/",
                {"name": "Acme", "type": "company", "segment_settings": {"tickets": {"kind": "fixed", "value": value}}},
                format="json",
            )
            self.assertEqual(res.status_code, 400, value)
        self.assertFalse(Relation.objects.exists())

    def test_unknown_segment_service_rejected(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/relations/",
            {"name": "Acme", "segment_settings": {"cruises": {"kind": "fixed", "value": 5}}},
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_segment_settings_stored_normalized(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/relations/",
            {"name": "Acme", "type": "company", "segment_settings": {"visas": {"kind": "Percentage", "value": 12.5}}},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        relation = Relation.objects.get(pk=res.data["relation"]["id"])
        self.assertEqual(relation.segment_settings, {"visas": {"kind": "percentage", "value": "12.5"}})

    def test_delete_of_referenced_partner_reports_error(self):
        month = seed_monthly_profit("2026-01", Decimal("1000"), "USD")
        partner = Relation.objects.create(name="Partner", relation_type="supplier")
        save_profit_share(user=self.manager, month_id=month.id, partner_id=partner.id, percentage=Decimal("25"))
        Relation.objects.filter(pk=partner.pk).update(use_count=0)
        self.client.force_authenticate(self.manager)

        res = self.client.delete(f"/api/relations/{partner.id}/")

        self.assertEqual(res.status_code, 400)
        self.assertFalse(res.data["success"])
        self.assertTrue(Relation.objects.filter(pk=partner.pk).exists())
