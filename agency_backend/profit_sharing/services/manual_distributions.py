# profit_sharing/services/manual_distributions.py

"""
MANUAL PROFIT DISTRIBUTIONS

Whole-record create / update / delete of a hand-entered profit split.

Rules:
- partner percentages must add up to 100 (± 0.01)
- each partner's amount = profit x percentage / 100 (rounded to 2 places)
- the currency of an existing distribution is fixed

Accounting Effect (through the posting adapter):
- create:  Dr PROFIT_DISTRIBUTION / Cr PARTNERS_PAYABLE   distributed total
- update:  the difference against the previous total (either direction)
- delete:  full reversal
Ledger rows are never edited; every change is a new voucher tagged
MANUAL_DISTRIBUTION:<id>:rev<revision>.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounting.services.posting import post_journal_entry, posting_enabled
from accounting.services.posting_rules import manual_distribution_request
from audit.events import ACTION_CREATE, ACTION_DELETE, ACTION_UPDATE, emit_audit_event
from common.db import persistence_guard
from common.exceptions import DomainValidationError
from common.money import HUNDRED, ZERO, money, to_decimal, within_tolerance
from profit_sharing.models import ManualDistributionPartner, ManualProfitDistribution
from profit_sharing.services.monthly_profits import validate_currency
from profit_sharing.services.partners import load_partners
from relations.services.management import increment_use_count
from users.services.identity import resolve_actor

logger = logging.getLogger(__name__)

AUDIT_TARGET = "MANUAL_PROFIT"


def _validate_header(from_date: date, to_date: date, profit) -> Decimal:
    if not from_date or not to_date:
        raise DomainValidationError("from_date and to_date are required")
    if from_date > to_date:
        raise DomainValidationError("from_date must be on or before to_date")

    amount = to_decimal(profit)
    if money(amount) <= ZERO:
        raise DomainValidationError("Profit must be > 0")
    return amount


def _build_lines(profit: Decimal, partners: list[dict]) -> tuple[list[dict], Decimal]:
    if not partners:
        raise DomainValidationError("At least one partner is required")

    total_pct = ZERO
    for p in partners:
        pct = to_decimal(p.get("percentage"))
        if pct <= ZERO or pct > HUNDRED:
            raise DomainValidationError("Partner percentage must be greater than 0 and at most 100")
        total_pct += pct

    if not within_tolerance(total_pct, HUNDRED):
        raise DomainValidationError(
            f"Partner percentages must add up to exactly 100%. Current total: {total_pct}%"
        )

    relations = load_partners(p.get("partner_id") for p in partners)

    lines = []
    for p in partners:
        relation = relations[str(p.get("partner_id"))]
        pct = to_decimal(p.get("percentage"))
        lines.append(
            {
                "partner": relation,
                "partner_name": relation.name,
                "percentage": pct,
                "amount": money(profit * pct / HUNDRED),
            }
        )

    distributed = sum((line["amount"] for line in lines), ZERO)
    return lines, distributed


def _write_lines(distribution: ManualProfitDistribution, lines: list[dict]) -> None:
    ManualDistributionPartner.objects.bulk_create(
        [ManualDistributionPartner(distribution=distribution, **line) for line in lines]
    )
    increment_use_count(line["partner"].pk for line in lines)


def _post_delta(distribution, *, revision: int, delta, entry_date, description: str, actor) -> str | None:
    if not posting_enabled():
        return None

    request = manual_distribution_request(
        distribution_id=distribution.pk,
        revision=revision,
        amount_delta=delta,
        currency=distribution.currency,
        entry_date=entry_date,
        description=description,
        user_id=actor.uid,
    )
    if request is None:
        return None
    return post_journal_entry(request)


def _get_for_update(distribution_id) -> ManualProfitDistribution:
    try:
        distribution = ManualProfitDistribution.objects.select_for_update().filter(pk=distribution_id).first()
    except (ValueError, ValidationError):
        distribution = None
    if distribution is None:
        raise DomainValidationError(f"Manual distribution {distribution_id} not found")
    return distribution


def save_manual_distribution(
    *,
    user,
    from_date: date,
    to_date: date,
    profit,
    currency: str,
    partners: list[dict],
    notes: str = "",
) -> ManualProfitDistribution:
    actor = resolve_actor(user)
    amount = _validate_header(from_date, to_date, profit)
    currency = validate_currency(currency)

    with persistence_guard("save manual distribution"), transaction.atomic():
        lines, distributed = _build_lines(amount, partners)

        distribution = ManualProfitDistribution(
            from_date=from_date,
            to_date=to_date,
            profit=money(amount),
            currency=currency,
            distributed_total=distributed,
            revision=1,
            notes=(notes or "").strip(),
            created_by=actor.name,
        )
        distribution.full_clean()
        distribution.save()
        _write_lines(distribution, lines)

        _post_delta(
            distribution,
            revision=1,
            delta=distributed,
            entry_date=to_date,
            description=f"Manual profit distribution {from_date.isoformat()} → {to_date.isoformat()}",
            actor=actor,
        )

        emit_audit_event(
            actor,
            action=ACTION_CREATE,
            target_type=AUDIT_TARGET,
            description=f"Distributed {money(amount)} {currency} manually between {len(lines)} partners",
            target_id=distribution.pk,
        )

    logger.info("Manual distribution saved", extra={"distribution_id": str(distribution.pk)})
    return distribution


def update_manual_distribution(
    *,
    user,
    distribution_id,
    from_date: date,
    to_date: date,
    profit,
    currency: str,
    partners: list[dict],
    notes: str | None = None,
) -> ManualProfitDistribution:
    actor = resolve_actor(user)
    amount = _validate_header(from_date, to_date, profit)
    currency = validate_currency(currency)

    with persistence_guard("update manual distribution"), transaction.atomic():
        distribution = _get_for_update(distribution_id)
        if distribution.currency != currency:
            raise DomainValidationError(
                "The currency of a distribution cannot be changed; delete it and create a new one."
            )

        lines, distributed = _build_lines(amount, partners)
        previous = distribution.distributed_total

        distribution.from_date = from_date
        distribution.to_date = to_date
        distribution.profit = money(amount)
        distribution.distributed_total = distributed
        distribution.revision += 1
        if notes is not None:
            distribution.notes = notes.strip()
        distribution.full_clean()
        distribution.save()

        distribution.partners.all().delete()
        _write_lines(distribution, lines)

        _post_delta(
            distribution,
            revision=distribution.revision,
            delta=distributed - previous,
            entry_date=to_date,
            description=f"Adjustment of manual profit distribution (rev {distribution.revision})",
            actor=actor,
        )

        emit_audit_event(
            actor,
            action=ACTION_UPDATE,
            target_type=AUDIT_TARGET,
            description=f"Updated manual distribution (ID: {distribution.pk})",
            target_id=distribution.pk,
        )

    return distribution


def delete_manual_distribution(*, user, distribution_id) -> None:
    actor = resolve_actor(user)

    with persistence_guard("delete manual distribution"), transaction.atomic():
        distribution = _get_for_update(distribution_id)
        distribution_pk = distribution.pk

        _post_delta(
            distribution,
            revision=distribution.revision + 1,
            delta=-distribution.distributed_total,
            entry_date=timezone.localdate(),
            description=f"Reversal of deleted manual profit distribution {distribution_pk}",
            actor=actor,
        )

        distribution.delete()

        emit_audit_event(
            actor,
            action=ACTION_DELETE,
            target_type=AUDIT_TARGET,
            description=f"Deleted manual distribution (ID: {distribution_pk})",
            target_id=distribution_pk,
        )
