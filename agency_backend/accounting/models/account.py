# accounting/models/account.py

"""
AGENCY ACCOUNTS

Accounts of a chart, addressed by code. Posting requests name their debit and
credit accounts by code ("1000", "3200", "expense_rent", ...).

Cash boxes (is_cash_box) are the treasury accounts staff pay expense vouchers
from; they must be asset accounts.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class AccountQuerySet(models.QuerySet):
    def usable(self, chart):
        return self.filter(chart=chart, is_active=True).order_by("code")

    def cash_boxes(self, chart):
        return self.usable(chart).filter(is_cash_box=True)


class Account(models.Model):
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"

    ACCOUNT_TYPES = [
        (ASSET, "Asset"),
        (LIABILITY, "Liability"),
        (EQUITY, "Equity"),
        (REVENUE, "Revenue"),
        (EXPENSE, "Expense"),
    ]

    # side on which the balance normally grows
    DEBIT_NORMAL_TYPES = (ASSET, EXPENSE)

    chart = models.ForeignKey(
        "accounting.ChartOfAccounts",
        on_delete=models.PROTECT,
        related_name="accounts",
    )
    code = models.CharField(max_length=50)
    name = models.CharField(max_length=150)
    account_type = models.CharField(max_length=20, choices=ACCOUNT_TYPES)
    is_cash_box = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AccountQuerySet.as_manager()

    class Meta:
        ordering = ["code"]
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        indexes = [
            models.Index(fields=["chart", "code"], name="acct_chart_code_idx"),
            models.Index(fields=["chart", "account_type"], name="acct_chart_type_idx"),
            models.Index(fields=["is_active"], name="acct_is_active_idx"),
        ]
        constraints = [
            models.UniqueConstraint(fields=["chart", "code"], name="uniq_account_chart_code"),
            models.CheckConstraint(condition=~Q(code=""), name="chk_account_code_not_blank"),
            models.CheckConstraint(condition=~Q(name=""), name="chk_account_name_not_blank"),
            models.CheckConstraint(
                condition=Q(is_cash_box=False) | Q(account_type="ASSET"),
                name="chk_account_cash_box_is_asset",
            ),
        ]

    def __str__(self):
        return f"{self.code} {self.name}"

    @property
    def normal_side(self) -> str:
        return "DEBIT" if self.account_type in self.DEBIT_NORMAL_TYPES else "CREDIT"

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()

        if not self.code:
            raise ValidationError("Account code is required")
        if not self.name:
            raise ValidationError("Account name is required")
        if self.is_cash_box and self.account_type != self.ASSET:
            raise ValidationError(f"Cash box {self.code} must be an asset account")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
