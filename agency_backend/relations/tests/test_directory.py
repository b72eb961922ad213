# relations/tests/test_directory.py

from django.test import TestCase

from relations.models import Relation
from relations.services.directory import list_relations, parse_sort, search_relations


def make_relation(name, **kwargs):
    return Relation.objects.create(name=name, **kwargs)


class ListRelationsTests(TestCase):
    def setUp(self):
        self.acme = make_relation("Acme Travel", code="AC1", relation_type="client", use_count=5)
        self.sky = make_relation("Sky Air", code="SKY", relation_type="supplier", use_count=2, phone="0770123")
        self.both = make_relation("Orbit Tours", relation_type="both", use_count=9, payment_type="credit")
        self.dormant = make_relation("Dormant Co", relation_type="client", status="inactive")

    def test_client_listing_includes_both(self):
        items, total = list_relations(relation_type="client", all=True)

        self.assertEqual(total, 2)
        self.assertEqual({r.name for r in items}, {"Acme Travel", "Orbit Tours"})

    def test_supplier_listing_includes_both(self):
        items, _ = list_relations(relation_type="supplier", all=True)
        self.assertEqual({r.name for r in items}, {"Sky Air", "Orbit Tours"})

    def test_inactive_hidden_unless_requested(self):
        _, total = list_relations(all=True)
        self.assertEqual(total, 3)

        _, total = list_relations(include_inactive=True, all=True)
        self.assertEqual(total, 4)

        items, _ = list_relations(status="inactive", all=True)
        self.assertEqual([r.name for r in items], ["Dormant Co"])

    def test_default_sort_is_most_used_first(self):
        items, _ = list_relations(all=True)
        self.assertEqual([r.name for r in items], ["Orbit Tours", "Acme Travel", "Sky Air"])

    def test_search_matches_name_phone_and_code_case_insensitively(self):
        self.assertEqual([r.name for r in list_relations(search="acme", all=True)[0]], ["Acme Travel"])
        self.assertEqual([r.name for r in list_relations(search="0770", all=True)[0]], ["Sky Air"])
        self.assertEqual([r.name for r in list_relations(search="sky", all=True)[0]], ["Sky Air"])

    def test_pagination_reports_total_of_filtered_set(self):
        page1, total = list_relations(page=1, limit=2)
        page2, _ = list_relations(page=2, limit=2)

        self.assertEqual(total, 3)
        self.assertEqual(len(page1), 2)
        self.assertEqual([r.name for r in page2], ["Sky Air"])

    def test_blank_values_sort_last(self):
        items, _ = list_relations(sort_by="code_asc", all=True)
        self.assertEqual([r.name for r in items][-1], "Orbit Tours")

        items, _ = list_relations(sort_by="code_desc", all=True)
        self.assertEqual([r.name for r in items][-1], "Orbit Tours")

    def test_payment_type_filter(self):
        items, _ = list_relations(payment_type="credit", all=True)
        self.assertEqual([r.name for r in items], ["Orbit Tours"])

    def test_search_options(self):
        options = search_relations(search="orbit")
        self.assertEqual(
            options,
            [
                {
                    "value": str(self.both.id),
                    "label": "Orbit Tours",
                    "relation_type": "both",
                    "payment_type": "credit",
                }
            ],
        )


class ParseSortTests(TestCase):
    def test_parse(self):
        self.assertEqual(parse_sort("name_asc"), ("name", False))
        self.assertEqual(parse_sort("useCount_desc"), ("use_count", True))
        self.assertEqual(parse_sort("use_count"), ("use_count", False))
        self.assertEqual(parse_sort("password_desc"), ("use_count", True))
