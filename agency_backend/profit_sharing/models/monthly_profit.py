# profit_sharing/models/monthly_profit.py

"""
MONTHLY PROFIT (SYSTEM DERIVED)

Keyed by month "YYYY-MM". Written by the system only:
- saving a segment period adds its firm share to the month of its to_date
- seed_monthly_profit sets a month's total (idempotent upsert)

ProfitShare rows allocate a month's profit to partners and are managed
independently.
"""

import uuid
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models

from relations.models import Relation

month_id_validator = RegexValidator(
    regex=r"^\d{4}-(0[1-9]|1[0-2])$",
    message="Month id must look like YYYY-MM",
)


class MonthlyProfit(models.Model):
    id = models.CharField(primary_key=True, max_length=7, validators=[month_id_validator])
    total_profit = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3)
    notes = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    from_system = True

    class Meta:
        ordering = ["-id"]

    def __str__(self):
        return f"{self.id}: {self.total_profit} {self.currency}"


class ProfitShare(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    monthly_profit = models.ForeignKey(
        MonthlyProfit,
        on_delete=models.PROTECT,
        related_name="shares",
    )
    partner = models.ForeignKey(
        Relation,
        on_delete=models.PROTECT,
        related_name="profit_shares",
    )
    partner_name = models.CharField(max_length=255)

    percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    amount = models.DecimalField(max_digits=16, decimal_places=2)
    notes = models.CharField(max_length=255, blank=True, default="")

    created_by = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["monthly_profit_id", "partner_name"]
        indexes = [
            models.Index(fields=["monthly_profit", "partner"], name="ps_month_partner_idx"),
        ]

    def __str__(self):
        return f"{self.partner_name} {self.percentage}% of {self.monthly_profit_id}"
