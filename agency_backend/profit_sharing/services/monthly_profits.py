# profit_sharing/services/monthly_profits.py

"""
MONTHLY PROFITS (READ SIDE + SYSTEM WRITES)

list_monthly_profits() merges system months and manual distributions into
one newest-first list:
- a system month sorts at the first day of its month
- a manual distribution sorts at its created_at
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from common.exceptions import DomainValidationError
from common.money import money, normalize_currency
from profit_sharing.models import ManualProfitDistribution, MonthlyProfit, ProfitShare

logger = logging.getLogger(__name__)

MONTH_ID_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def month_id_for(day: date) -> str:
    return day.strftime("%Y-%m")


def validate_month_id(month_id: str) -> str:
    month_id = (month_id or "").strip()
    if not MONTH_ID_RE.match(month_id):
        raise DomainValidationError(f"Invalid month id {month_id!r} (expected YYYY-MM)")
    return month_id


def _month_start(month_id: str) -> datetime:
    year, month = (int(part) for part in month_id.split("-"))
    return timezone.make_aware(datetime.combine(date(year, month, 1), time.min))


def validate_currency(currency) -> str:
    code = normalize_currency(currency) or settings.DEFAULT_CURRENCY
    if code not in settings.SUPPORTED_CURRENCIES:
        raise DomainValidationError(f"Unsupported currency: {code}")
    return code


@transaction.atomic
def seed_monthly_profit(month_id: str, profit, currency: str | None = None) -> MonthlyProfit:
    """Set a month's total profit. Running it twice with the same input changes nothing."""
    month_id = validate_month_id(month_id)
    currency = validate_currency(currency)

    obj, created = MonthlyProfit.objects.update_or_create(
        id=month_id,
        defaults={
            "total_profit": money(profit),
            "currency": currency,
            "notes": f"Profit for {month_id}",
        },
    )
    logger.info("Monthly profit seeded", extra={"month_id": month_id, "was_created": created})
    return obj


def accrue_firm_profit(month_id: str, amount, currency: str) -> MonthlyProfit:
    """
    Add a saved period's firm share to its month. Must run inside the caller's
    transaction so a failed save leaves the month untouched.
    """
    month_id = validate_month_id(month_id)
    currency = validate_currency(currency)

    obj, _ = MonthlyProfit.objects.select_for_update().get_or_create(
        id=month_id,
        defaults={
            "total_profit": Decimal("0.00"),
            "currency": currency,
            "notes": f"Profit for {month_id}",
        },
    )

    if obj.currency != currency:
        raise DomainValidationError(
            f"Monthly profit {month_id} is kept in {obj.currency}; cannot add {currency} profit to it."
        )

    obj.total_profit = money(obj.total_profit + money(amount))
    obj.save(update_fields=["total_profit", "updated_at"])
    return obj


def _system_row(m: MonthlyProfit) -> dict:
    return {
        "id": m.id,
        "total_profit": m.total_profit,
        "currency": m.currency,
        "created_at": m.created_at,
        "from_system": True,
        "notes": m.notes,
        "from_date": None,
        "to_date": None,
        "partners": [],
        "sort_key": _month_start(m.id),
    }


def _manual_row(d: ManualProfitDistribution) -> dict:
    return {
        "id": str(d.id),
        "total_profit": d.profit,
        "currency": d.currency,
        "created_at": d.created_at,
        "from_system": False,
        "notes": d.notes or f"Manual profit for {d.from_date.isoformat()} to {d.to_date.isoformat()}",
        "from_date": d.from_date,
        "to_date": d.to_date,
        "partners": [_manual_line(d, line) for line in d.partners.all()],
        "sort_key": d.created_at,
    }


def _manual_line(d: ManualProfitDistribution, line) -> dict:
    return {
        "id": str(line.pk),
        "profit_month_id": str(d.id),
        "partner_id": str(line.partner_id),
        "partner_name": line.partner_name,
        "percentage": line.percentage,
        "amount": line.amount,
        "notes": "Share of a manual distribution",
    }


def list_monthly_profits() -> list[dict]:
    rows = [_system_row(m) for m in MonthlyProfit.objects.all()]
    rows += [
        _manual_row(d)
        for d in ManualProfitDistribution.objects.prefetch_related("partners")
    ]
    rows.sort(key=lambda r: r["sort_key"], reverse=True)
    for row in rows:
        del row["sort_key"]
    return rows


def get_profit_shares_for_month(profit_id: str) -> list[dict]:
    """
    Shares of a system month, or the partner lines of a manual distribution
    when profit_id is a distribution id.
    """
    profit_id = (profit_id or "").strip()

    if not MONTH_ID_RE.match(profit_id):
        try:
            distribution = (
                ManualProfitDistribution.objects.prefetch_related("partners").filter(pk=profit_id).first()
            )
        except (ValueError, ValidationError):
            # neither a month nor a distribution id
            distribution = None
        if distribution is None:
            return []
        return [_manual_line(distribution, line) for line in distribution.partners.all()]

    return [
        {
            "id": str(s.pk),
            "profit_month_id": s.monthly_profit_id,
            "partner_id": str(s.partner_id),
            "partner_name": s.partner_name,
            "percentage": s.percentage,
            "amount": s.amount,
            "notes": s.notes,
        }
        for s in ProfitShare.objects.filter(monthly_profit_id=profit_id)
    ]
