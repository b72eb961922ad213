# segments/models/period.py

"""
======================================================
PATH: segments/models/period.py
======================================================
SEGMENT PERIOD (SAVED)

A date-bounded batch of company profit entries after validation and save.

Guarantees:
- Only SAVED periods are persisted (drafts live in the request)
- Immutable: corrections are made with a new period
- Totals are stored rounded to 2 places; one currency per period
- Ledger vouchers are found by reference SEGMENT_PERIOD:<id> and
  SEGMENT_PARTNER_SHARE:<id>
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from relations.models import Relation
from segments.models.immutable import ImmutableModel

PERCENT_VALIDATORS = [MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))]


class SegmentPeriod(ImmutableModel):
    STATUS_SAVED = "SAVED"
    STATUS_CHOICES = [(STATUS_SAVED, "Saved")]

    from_date = models.DateField()
    to_date = models.DateField()
    entry_date = models.DateField()

    currency = models.CharField(max_length=3)

    has_partner = models.BooleanField(default=False)
    firm_retention_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=PERCENT_VALIDATORS,
    )

    grand_total = models.DecimalField(max_digits=16, decimal_places=2)
    firm_total = models.DecimalField(max_digits=16, decimal_places=2)
    partner_pool_total = models.DecimalField(max_digits=16, decimal_places=2)
    distributed_total = models.DecimalField(max_digits=16, decimal_places=2)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_SAVED)

    created_by = models.CharField(max_length=64, blank=True, default="")
    created_by_name = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-to_date", "-id"]
        indexes = [
            models.Index(fields=["from_date", "to_date"], name="seg_period_dates_idx"),
        ]

    def __str__(self):
        return f"Segment period {self.from_date} → {self.to_date} ({self.currency})"

    @property
    def month_id(self) -> str:
        return self.to_date.strftime("%Y-%m")

    def clean(self):
        if self.from_date and self.to_date and self.from_date > self.to_date:
            raise ValidationError("from_date must be on or before to_date")
        if not self.currency or len(self.currency) != 3:
            raise ValidationError("currency must be a 3-letter code")


class PeriodPartner(ImmutableModel):
    """One row of the partner table shared by every entry of the period."""

    period = models.ForeignKey(
        SegmentPeriod,
        on_delete=models.PROTECT,
        related_name="partners",
    )
    partner = models.ForeignKey(
        Relation,
        on_delete=models.PROTECT,
        related_name="segment_partnerships",
    )
    partner_name = models.CharField(max_length=255)
    percentage = models.DecimalField(max_digits=5, decimal_places=2, validators=PERCENT_VALIDATORS)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.partner_name} {self.percentage}%"
