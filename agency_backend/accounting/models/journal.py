# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL ENTRY MODEL (VOUCHER HEADER)

Represents a single accounting transaction. Its id is the voucher id handed
back to callers of the posting adapter.

Guarantees:
- Immutable once created (no updates, no deletes)
- Idempotency via reference uniqueness ("<SOURCE_TYPE>:<source id>")
- One currency per entry; all ledger lines are in that currency
- posted_at is the accounting effective date (used for reports)
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone


class JournalEntry(models.Model):
    reference = models.CharField(
        max_length=150,
        blank=True,
        null=True,
        help_text="Source reference (segment period, expense voucher, distribution, ...)",
    )

    source_type = models.CharField(max_length=50, blank=True, default="")

    description = models.TextField(help_text="Narrative description of the journal entry")

    currency = models.CharField(max_length=3, help_text="ISO currency code")

    created_by = models.CharField(
        max_length=64,
        blank=True,
        default="",
        help_text="User id of the actor who caused the posting",
    )

    posted_at = models.DateTimeField(
        default=timezone.now,
        help_text="Accounting effective date",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    is_posted = models.BooleanField(
        default=True,
        help_text="Once posted, journal entries are immutable",
    )

    class Meta:
        ordering = ["-posted_at", "-created_at"]
        indexes = [
            models.Index(fields=["posted_at"], name="je_posted_at_idx"),
            models.Index(fields=["reference"], name="je_reference_idx"),
            models.Index(fields=["source_type"], name="je_source_type_idx"),
            models.Index(fields=["currency"], name="je_currency_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["reference"],
                condition=Q(reference__isnull=False) & ~Q(reference=""),
                name="uniq_journal_reference_not_blank",
            )
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"JournalEntry #{self.id} ({self.currency}) {self.posted_at.date()}"

    def clean(self):
        if self.reference is not None:
            ref = str(self.reference).strip()
            self.reference = ref or None

        self.description = (self.description or "").strip()
        if not self.description:
            raise ValidationError("Journal entry description is required")

        self.currency = (self.currency or "").strip().upper()
        if len(self.currency) != 3:
            raise ValidationError("Journal entry currency must be a 3-letter code")

        if self.posted_at and timezone.is_naive(self.posted_at):
            self.posted_at = timezone.make_aware(self.posted_at, timezone.get_current_timezone())

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalEntry records are immutable once created")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalEntry records are immutable and cannot be deleted")
