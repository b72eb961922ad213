# relations/models/relation.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models


class Relation(models.Model):
    """
    A client, a supplier, or both.

    RULES:
    - relation_type "both" shows up in client AND supplier listings
    - use_count counts saved business records that reference the relation;
      a used relation can no longer be deleted
    - segment_settings holds a company's default segment rates:
        {"tickets": {"kind": "percentage", "value": 50}, ...}
    """

    class Type(models.TextChoices):
        COMPANY = "company", "Company"
        INDIVIDUAL = "individual", "Individual"

    class RelationType(models.TextChoices):
        CLIENT = "client", "Client"
        SUPPLIER = "supplier", "Supplier"
        BOTH = "both", "Client & Supplier"

    class PaymentType(models.TextChoices):
        CASH = "cash", "Cash"
        CREDIT = "credit", "Credit"

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        INACTIVE = "inactive", "Inactive"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, db_index=True)
    code = models.CharField(max_length=50, blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")

    type = models.CharField(max_length=20, choices=Type.choices, default=Type.INDIVIDUAL)
    relation_type = models.CharField(
        max_length=20,
        choices=RelationType.choices,
        default=RelationType.CLIENT,
    )
    payment_type = models.CharField(
        max_length=20,
        choices=PaymentType.choices,
        default=PaymentType.CASH,
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)

    country = models.CharField(max_length=100, blank=True, default="")
    province = models.CharField(max_length=100, blank=True, default="")

    use_count = models.PositiveIntegerField(default=0)
    segment_settings = models.JSONField(default=dict, blank=True)

    created_by = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["relation_type", "status"], name="rel_type_status_idx"),
            models.Index(fields=["use_count"], name="rel_use_count_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})" if self.code else self.name

    @property
    def is_company(self) -> bool:
        return self.type == self.Type.COMPANY

    @property
    def label(self) -> str:
        return str(self)

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "Name is required"})
        if not isinstance(self.segment_settings, dict):
            raise ValidationError({"segment_settings": "segment_settings must be an object"})
