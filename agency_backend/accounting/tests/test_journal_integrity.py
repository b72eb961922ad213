# accounting/tests/test_journal_integrity.py

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.test import TestCase

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry
from accounting.services.account_resolver import clear_active_chart_cache, get_account_by_code
from accounting.services.exceptions import IdempotencyError, JournalEntryCreationError
from accounting.services.journal_entry_service import create_journal_entry


class JournalEntryServiceTests(TestCase):
    def setUp(self):
        clear_active_chart_cache()
        call_command("seed_agency_chart", verbosity=0)
        self.cash = get_account_by_code("1000")
        self.revenue = get_account_by_code("4100")

    def _post(self, **overrides):
        kwargs = {
            "description": "Test entry",
            "postings": [
                {"account": self.cash, "debit": "100.00", "credit": "0.00"},
                {"account": self.revenue, "debit": "0.00", "credit": "100.00"},
            ],
            "currency": "USD",
            "reference_type": "TEST",
            "reference_id": "A1",
        }
        kwargs.update(overrides)
        return create_journal_entry(**kwargs)

    def test_balanced_entry_creates_ledger_lines(self):
        je = self._post()

        self.assertIsInstance(je, JournalEntry)
        self.assertEqual(je.reference, "TEST:A1")
        self.assertEqual(je.currency, "USD")

        lines = LedgerEntry.objects.filter(journal_entry=je)
        self.assertEqual(lines.count(), 2)
        debit = sum((l.amount for l in lines if l.entry_type == LedgerEntry.DEBIT), Decimal("0.00"))
        credit = sum((l.amount for l in lines if l.entry_type == LedgerEntry.CREDIT), Decimal("0.00"))
        self.assertEqual(debit, Decimal("100.00"))
        self.assertEqual(credit, Decimal("100.00"))

    def test_unbalanced_raises(self):
        with self.assertRaises(JournalEntryCreationError):
            self._post(
                postings=[
                    {"account": self.cash, "debit": "100.00", "credit": "0.00"},
                    {"account": self.revenue, "debit": "0.00", "credit": "90.00"},
                ],
            )

    def test_duplicate_reference_is_refused(self):
        self._post()
        with self.assertRaises(IdempotencyError):
            self._post()
        self.assertEqual(JournalEntry.objects.count(), 1)

    def test_unsupported_currency_is_refused(self):
        with self.assertRaises(JournalEntryCreationError):
            self._post(currency="EUR")

    def test_journal_and_ledger_rows_are_immutable(self):
        je = self._post()

        with self.assertRaises(ValidationError):
            je.description = "changed"
            je.save()
        with self.assertRaises(ValidationError):
            je.delete()
        with self.assertRaises(ValidationError):
            LedgerEntry.objects.filter(journal_entry=je).first().delete()
