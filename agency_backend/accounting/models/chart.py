# accounting/models/chart.py

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models, transaction


class ChartOfAccounts(models.Model):
    """
    Represents the agency's Chart of Accounts.

    Rules:
    - Only ONE chart can be active at a time.
    - A stable `code` exists so resolvers don't depend on chart.name formatting.
    """

    name = models.CharField(max_length=100, unique=True)

    code = models.SlugField(
        max_length=64,
        unique=True,
        help_text="Stable chart key used by resolvers/seeders. Do not change after go-live.",
    )

    industry = models.CharField(max_length=100, blank=True, default="")

    is_active = models.BooleanField(default=False, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Chart of Accounts"
        verbose_name_plural = "Charts of Accounts"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.code})"

    def clean(self):
        if not (self.code or "").strip():
            raise ValidationError({"code": "code is required"})

    def save(self, *args, **kwargs):
        """
        Enforce a single active chart and clear the resolver cache when the
        active chart changes.
        """
        self.full_clean()

        from accounting.services.account_resolver import clear_active_chart_cache

        with transaction.atomic():
            was_active = False
            if self.pk:
                prev = (
                    ChartOfAccounts.objects.filter(pk=self.pk)
                    .values_list("is_active", flat=True)
                    .first()
                )
                was_active = bool(prev)

            if self.is_active:
                ChartOfAccounts.objects.exclude(pk=self.pk).update(is_active=False)

            super().save(*args, **kwargs)

        if self.is_active or was_active:
            clear_active_chart_cache()
