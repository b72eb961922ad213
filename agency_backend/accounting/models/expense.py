# accounting/models/expense.py

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from accounting.models.journal import JournalEntry


class ExpenseVoucher(models.Model):
    """
    Expense voucher (business event) paid out of a cash box.

    Accounting effect (via the posting adapter):
    - Dr expense_<expense_type>
    - Cr <box_account_code>

    The voucher is created together with its journal entry in one transaction
    and is immutable afterwards.
    """

    expense_date = models.DateField(default=timezone.localdate)

    expense_type = models.SlugField(max_length=40)

    amount = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    currency = models.CharField(max_length=3)
    exchange_rate = models.DecimalField(max_digits=16, decimal_places=6, null=True, blank=True)

    box_account_code = models.CharField(max_length=50)

    payee = models.CharField(max_length=150, blank=True, default="")
    notes = models.CharField(max_length=255, blank=True, default="")

    journal_entry = models.OneToOneField(
        JournalEntry,
        on_delete=models.PROTECT,
        related_name="expense_voucher",
    )

    created_by = models.CharField(max_length=64)
    created_by_name = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-expense_date", "-created_at"]
        verbose_name = "Expense Voucher"
        verbose_name_plural = "Expense Vouchers"
        indexes = [
            models.Index(fields=["expense_date"], name="expv_date_idx"),
            models.Index(fields=["expense_type"], name="expv_type_idx"),
        ]

    def __str__(self):
        return f"ExpenseVoucher #{self.id} - {self.amount} {self.currency} ({self.expense_date})"

    @property
    def expense_account_code(self) -> str:
        return f"expense_{self.expense_type}"

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("Expense vouchers are immutable once posted")
        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Posted expense vouchers cannot be deleted")
