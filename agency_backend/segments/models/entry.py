# segments/models/entry.py

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from relations.models import Relation
from segments.models.immutable import ImmutableModel
from segments.models.period import SegmentPeriod


class SegmentEntry(ImmutableModel):
    """
    One company's service counts, rates and resulting profit within a period.

    rates snapshot: {"tickets": {"kind": "percentage", "value": "50"}, ...}
    """

    period = models.ForeignKey(
        SegmentPeriod,
        on_delete=models.PROTECT,
        related_name="entries",
    )
    invoice_number = models.CharField(max_length=50, unique=True)

    client = models.ForeignKey(
        Relation,
        on_delete=models.PROTECT,
        related_name="segment_entries",
    )
    client_name = models.CharField(max_length=255)

    tickets = models.PositiveIntegerField(default=0)
    visas = models.PositiveIntegerField(default=0)
    hotels = models.PositiveIntegerField(default=0)
    groups = models.PositiveIntegerField(default=0)
    rates = models.JSONField(default=dict, blank=True)

    total = models.DecimalField(max_digits=16, decimal_places=2)
    firm_share = models.DecimalField(max_digits=16, decimal_places=2)
    partner_share = models.DecimalField(max_digits=16, decimal_places=2)

    notes = models.TextField(blank=True, default="")
    created_by_name = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["period_id", "id"]
        verbose_name_plural = "Segment entries"

    def __str__(self):
        return f"{self.invoice_number} {self.client_name}: {self.total}"


class SegmentPartnerShare(ImmutableModel):
    entry = models.ForeignKey(
        SegmentEntry,
        on_delete=models.PROTECT,
        related_name="partner_shares",
    )
    partner = models.ForeignKey(
        Relation,
        on_delete=models.PROTECT,
        related_name="segment_partner_shares",
    )
    partner_name = models.CharField(max_length=255)
    share = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )

    class Meta:
        ordering = ["entry_id", "id"]

    def __str__(self):
        return f"{self.partner_name}: {self.share}"
