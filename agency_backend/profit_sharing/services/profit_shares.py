# profit_sharing/services/profit_shares.py

"""
PROFIT SHARES

Partner allocations of a system month. Created, updated and deleted one at a
time. The percentages of one month may not add up to more than 100.
When no amount is given it is derived from the month's total profit.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Sum

from audit.events import ACTION_CREATE, ACTION_DELETE, ACTION_UPDATE, emit_audit_event
from common.db import persistence_guard
from common.exceptions import DomainValidationError
from common.money import HUNDRED, TOLERANCE, ZERO, money, to_decimal
from profit_sharing.models import MonthlyProfit, ProfitShare
from profit_sharing.services.monthly_profits import validate_month_id
from profit_sharing.services.partners import load_partner
from relations.services.management import increment_use_count
from users.services.identity import resolve_actor

AUDIT_TARGET = "PROFIT_SHARE"


def _percentage(value) -> Decimal:
    pct = to_decimal(value)
    if pct <= ZERO or pct > HUNDRED:
        raise DomainValidationError("Percentage must be greater than 0 and at most 100")
    return pct


def _check_month_total(month: MonthlyProfit, percentage: Decimal, exclude_id=None) -> None:
    qs = ProfitShare.objects.filter(monthly_profit=month)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    allocated = qs.aggregate(total=Sum("percentage"))["total"] or ZERO

    if allocated + percentage > HUNDRED + TOLERANCE:
        raise DomainValidationError(
            f"Shares of {month.id} would total {allocated + percentage}%; the maximum is 100%."
        )


def _get_share(share_id) -> ProfitShare:
    try:
        share = ProfitShare.objects.select_related("monthly_profit").filter(pk=share_id).first()
    except (ValueError, ValidationError):
        share = None
    if share is None:
        raise DomainValidationError(f"Profit share {share_id} not found")
    return share


def save_profit_share(*, user, month_id: str, partner_id, percentage, amount=None, notes: str = "") -> ProfitShare:
    actor = resolve_actor(user)
    month_id = validate_month_id(month_id)
    pct = _percentage(percentage)

    with persistence_guard("save profit share"), transaction.atomic():
        month = MonthlyProfit.objects.select_for_update().filter(pk=month_id).first()
        if month is None:
            raise DomainValidationError(f"No monthly profit recorded for {month_id}")

        partner = load_partner(partner_id)
        _check_month_total(month, pct)

        share = ProfitShare.objects.create(
            monthly_profit=month,
            partner=partner,
            partner_name=partner.name,
            percentage=pct,
            amount=money(amount if amount is not None else month.total_profit * pct / HUNDRED),
            notes=(notes or "").strip(),
            created_by=actor.name,
        )
        increment_use_count([partner.pk])

        emit_audit_event(
            actor,
            action=ACTION_CREATE,
            target_type=AUDIT_TARGET,
            description=f"Allocated {pct}% of {month_id} to {partner.name}",
            target_id=share.pk,
        )

    return share


def update_profit_share(*, user, share_id, percentage=None, amount=None, notes=None) -> ProfitShare:
    actor = resolve_actor(user)

    with persistence_guard("update profit share"), transaction.atomic():
        share = _get_share(share_id)
        month = share.monthly_profit

        if percentage is not None:
            pct = _percentage(percentage)
            _check_month_total(month, pct, exclude_id=share.pk)
            share.percentage = pct
            if amount is None:
                share.amount = money(month.total_profit * pct / HUNDRED)

        if amount is not None:
            share.amount = money(amount)
        if notes is not None:
            share.notes = notes.strip()

        share.save()

        emit_audit_event(
            actor,
            action=ACTION_UPDATE,
            target_type=AUDIT_TARGET,
            description=f"Updated profit share of {share.partner_name} for {month.id}",
            target_id=share.pk,
        )

    return share


def delete_profit_share(*, user, share_id) -> None:
    actor = resolve_actor(user)

    with persistence_guard("delete profit share"), transaction.atomic():
        share = _get_share(share_id)
        share_pk, partner_name, month_id = share.pk, share.partner_name, share.monthly_profit_id
        share.delete()

        emit_audit_event(
            actor,
            action=ACTION_DELETE,
            target_type=AUDIT_TARGET,
            description=f"Deleted profit share of {partner_name} for {month_id}",
            target_id=share_pk,
        )
