# audit/models/audit_log.py

"""
======================================================
PATH: audit/models/audit_log.py
======================================================
AUDIT LOG MODEL

One row per successful back-office mutation.

Guarantees:
- Append-only (no updates, no deletes)
- Written by audit.receivers after the mutating transaction commits
- user_id / user_name are snapshots (users may be renamed or removed later)
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models


class AuditLog(models.Model):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

    ACTION_CHOICES = [
        (CREATE, "Create"),
        (UPDATE, "Update"),
        (DELETE, "Delete"),
    ]

    user_id = models.CharField(max_length=64)
    user_name = models.CharField(max_length=255)

    action = models.CharField(max_length=10, choices=ACTION_CHOICES)

    target_type = models.CharField(
        max_length=50,
        help_text="CLIENT, SEGMENT, PROFIT_SHARE, VOUCHER, ...",
    )
    target_id = models.CharField(max_length=100, blank=True, default="")

    description = models.TextField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["created_at"], name="audit_audit_created_8f1c2a_idx"),
            models.Index(fields=["target_type", "target_id"], name="audit_audit_target__3b7e91_idx"),
            models.Index(fields=["user_id"], name="audit_audit_user_id_c4d2e0_idx"),
        ]

    def __str__(self):
        return f"{self.action} {self.target_type}:{self.target_id} by {self.user_name}"

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("AuditLog records are immutable once created")
        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("AuditLog records are immutable and cannot be deleted")
