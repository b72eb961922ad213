# accounting/models/ledger.py

"""
LEDGER LINES

Each voucher posted by the agency (segment period profit, partner revenue
share, manual distribution revision, expense voucher) writes exactly one
DEBIT and one CREDIT line here, in the voucher's currency.

Lines are append-only. A correction is a new voucher, so the full history of
a source record (e.g. every revision of one manual distribution) is read back
with LedgerEntry.objects.for_source("MANUAL_DISTRIBUTION", <id>).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Case, DecimalField, F, Q, Sum, Value, When

from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from common.money import ZERO, normalize_currency


class LedgerEntryQuerySet(models.QuerySet):
    def posted(self, *, currency: str, as_of=None):
        """Posted lines of ONE currency, optionally up to a posting time."""
        qs = self.filter(
            journal_entry__is_posted=True,
            journal_entry__currency=normalize_currency(currency),
        )
        if as_of is not None:
            qs = qs.filter(journal_entry__posted_at__lte=as_of)
        return qs

    def for_source(self, source_type: str, source_id):
        # revisions are posted as TYPE:id:revN
        base = f"{source_type.strip()}:{str(source_id).strip()}"
        return self.filter(
            Q(journal_entry__reference=base) | Q(journal_entry__reference__startswith=f"{base}:")
        )

    def side_totals(self):
        return self.values("account_id", "entry_type").annotate(total=Sum("amount"))

    def net_by_account_code(self) -> dict[str, Decimal]:
        """Debit minus credit per account code."""
        signed = Case(
            When(entry_type=LedgerEntry.DEBIT, then=F("amount")),
            default=-F("amount"),
            output_field=DecimalField(max_digits=18, decimal_places=2),
        )
        rows = self.values("account__code").annotate(net=Sum(signed, default=Value(ZERO)))
        return {r["account__code"]: r["net"] for r in rows}


class LedgerEntry(models.Model):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    ENTRY_TYPES = [
        (DEBIT, "Debit"),
        (CREDIT, "Credit"),
    ]

    journal_entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.PROTECT,
        related_name="ledger_entries",
    )
    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="ledger_entries",
    )
    entry_type = models.CharField(max_length=6, choices=ENTRY_TYPES)
    amount = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = LedgerEntryQuerySet.as_manager()

    class Meta:
        verbose_name = "Ledger Entry"
        verbose_name_plural = "Ledger Entries"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["account", "entry_type"], name="le_account_type_idx"),
            models.Index(fields=["journal_entry", "entry_type"], name="le_journal_type_idx"),
        ]

    def __str__(self):
        return f"{self.journal_entry.reference or self.journal_entry_id}: {self.entry_type} {self.amount} {self.currency} {self.account.code}"

    @property
    def currency(self) -> str:
        return self.journal_entry.currency

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.entry_type == self.DEBIT else -self.amount

    def clean(self):
        if self.entry_type not in (self.DEBIT, self.CREDIT):
            raise ValidationError("Ledger line side must be DEBIT or CREDIT")
        if self.amount is None or self.amount <= 0:
            raise ValidationError("Ledger line amount must be positive; the side carries the direction")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("Posted ledger lines cannot be edited; post a correcting voucher instead")
        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Posted ledger lines cannot be deleted; post a reversing voucher instead")
