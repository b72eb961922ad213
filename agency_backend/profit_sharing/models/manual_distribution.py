# profit_sharing/models/manual_distribution.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from relations.models import Relation


class ManualProfitDistribution(models.Model):
    """
    Profit entered by hand for an explicit date range and split between partners.

    Edited or deleted only as a whole record. Each change bumps `revision`
    and posts the difference to the ledger as SOURCE:<id>:rev<revision>.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    from_date = models.DateField()
    to_date = models.DateField()

    profit = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    currency = models.CharField(max_length=3)
    distributed_total = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))

    revision = models.PositiveIntegerField(default=1)
    notes = models.CharField(max_length=255, blank=True, default="")

    created_by = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    from_system = False

    class Meta:
        ordering = ["-to_date", "-created_at"]

    def __str__(self):
        return f"Manual profit {self.from_date} → {self.to_date}: {self.profit} {self.currency}"

    def clean(self):
        if self.from_date and self.to_date and self.from_date > self.to_date:
            raise ValidationError("from_date must be on or before to_date")


class ManualDistributionPartner(models.Model):
    distribution = models.ForeignKey(
        ManualProfitDistribution,
        on_delete=models.CASCADE,
        related_name="partners",
    )
    partner = models.ForeignKey(
        Relation,
        on_delete=models.PROTECT,
        related_name="manual_profit_lines",
    )
    partner_name = models.CharField(max_length=255)
    percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    amount = models.DecimalField(max_digits=16, decimal_places=2)

    class Meta:
        ordering = ["distribution_id", "id"]

    def __str__(self):
        return f"{self.partner_name} {self.percentage}%"
