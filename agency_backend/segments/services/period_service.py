# segments/services/period_service.py

"""
======================================================
PATH: segments/services/period_service.py
======================================================
SEGMENT PERIOD SERVICE

Draft → Validated → Saved.

build_draft()     payload + referenced relations → computed PeriodDraft
preview_period()  totals, percentage summary and validation messages
validate_period() VALIDATED draft, or PeriodValidationError (draft stays DRAFT)
save_period()     validate, then persist everything in ONE transaction:
                    - SegmentPeriod, partner table, entries (BK-<period>-<n>),
                      per-entry partner shares
                    - ledger postings through the posting adapter
                    - use_count of every referenced relation
                    - firm share rolled into the monthly profit of to_date
                    - audit event (dispatched after commit)
                  Any failure (posting included) rolls all of it back.

The posting adapter is never reached for a period that fails validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from accounting.services.posting import posting_enabled
from accounting.services.posting_rules import post_all, segment_period_requests
from audit.events import ACTION_CREATE, emit_audit_event
from common.db import persistence_guard
from common.exceptions import DomainValidationError
from common.money import HUNDRED, TOLERANCE, ZERO, money, to_decimal, within_tolerance
from profit_sharing.services.monthly_profits import accrue_firm_profit
from relations.models import Relation
from relations.services.management import increment_use_count
from segments.converters import period_from_model, period_from_payload, rate_to_payload
from segments.domain import STATUS_DRAFT, STATUS_SAVED, STATUS_VALIDATED, PeriodDraft, PeriodTotals
from segments.models import PeriodPartner, SegmentEntry, SegmentPartnerShare, SegmentPeriod
from segments.services.apportionment import (
    aggregate_period,
    compute_entry,
    percentage_summary,
    total_partner_percentage,
)
from segments.services.period_lifecycle import validate_transition
from users.services.identity import resolve_actor

logger = logging.getLogger(__name__)

AUDIT_TARGET = "SEGMENT"


class PeriodValidationError(DomainValidationError):
    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__(self.messages[0] if self.messages else "Invalid segment period")


@dataclass(frozen=True)
class SavedPeriod:
    period: SegmentPeriod
    draft: PeriodDraft
    totals: PeriodTotals
    voucher_ids: tuple[str, ...]


# ============================================================
# DRAFT
# ============================================================


def _referenced_relation_ids(data: dict) -> set[str]:
    ids = {str(e.get("client_id")) for e in data.get("entries") or [] if e.get("client_id")}
    ids |= {str(p.get("partner_id")) for p in data.get("partners") or [] if p.get("partner_id")}
    return ids


def _load_relations(ids: set[str]) -> dict[str, Relation]:
    try:
        found = {str(r.pk): r for r in Relation.objects.filter(pk__in=ids)}
    except (ValueError, ValidationError) as exc:
        raise DomainValidationError("Invalid company or partner id") from exc

    missing = sorted(ids - set(found))
    if missing:
        raise DomainValidationError(f"Unknown company or partner: {', '.join(missing)}")
    return found


def _require_company_clients(data: dict, relations: dict[str, Relation]) -> None:
    for e in data.get("entries") or []:
        relation = relations.get(str(e.get("client_id") or ""))
        if relation is None:
            continue
        if not relation.is_company or relation.relation_type == Relation.RelationType.SUPPLIER:
            raise DomainValidationError(
                f"{relation.name} cannot carry segment entries: only company clients can."
            )


def compute_draft(draft: PeriodDraft) -> PeriodDraft:
    """Recompute every entry with the period's single partner table."""
    entries = tuple(
        compute_entry(
            e,
            has_partner=draft.has_partner,
            firm_retention_percentage=draft.firm_retention_percentage,
            partners=draft.partners,
        )
        for e in draft.entries
    )
    return replace(draft, entries=entries)


def build_draft(data: dict) -> PeriodDraft:
    relations = _load_relations(_referenced_relation_ids(data))
    _require_company_clients(data, relations)
    draft = period_from_payload(
        data,
        relations=relations,
        default_retention=settings.SEGMENT_FIRM_RETENTION_DEFAULT,
    )
    return compute_draft(draft)


# ============================================================
# VALIDATION
# ============================================================


def remainder_allowance(totals: PeriodTotals) -> Decimal:
    """
    Undistributed pool still accepted when the partner table sums to 100 ± 0.01:
    the pool's share of the percentage tolerance, never below one cent.
    """
    return max(TOLERANCE, abs(totals.partner_pool_total) * TOLERANCE / HUNDRED)


def validation_errors(draft: PeriodDraft, totals: PeriodTotals | None = None) -> list[str]:
    errors: list[str] = []

    if not draft.entries:
        errors.append("No entries to save.")

    if not draft.from_date or not draft.to_date:
        errors.append("Period from and to dates are required.")
    elif draft.from_date > draft.to_date:
        errors.append("Period start date must be on or before its end date.")

    if draft.currency not in settings.SUPPORTED_CURRENCIES:
        errors.append(f"Unsupported currency: {draft.currency or '(blank)'}")

    if any(not e.client_id for e in draft.entries):
        errors.append("Every entry must name a company.")

    retention = to_decimal(draft.firm_retention_percentage)
    if retention < ZERO or retention > HUNDRED:
        errors.append("Firm retention percentage must be between 0 and 100.")

    if any(to_decimal(p.percentage) < ZERO or to_decimal(p.percentage) > HUNDRED for p in draft.partners):
        errors.append("Partner percentages must be between 0 and 100.")

    if draft.has_partner:
        partner_pct = total_partner_percentage(draft.partners)
        if not within_tolerance(partner_pct, HUNDRED):
            errors.append(
                "Partner shares must add up to exactly 100% of the amount available to partners. "
                f"Current total: {money(partner_pct)}%"
            )

    totals = totals or aggregate_period(draft.entries)
    if abs(totals.remainder) > remainder_allowance(totals):
        errors.append(
            f"Partner pool is not fully distributed: {money(totals.remainder)} {draft.currency} remains."
        )

    return errors


def validate_period(draft: PeriodDraft) -> PeriodDraft:
    if draft.status != STATUS_DRAFT:
        validate_transition(from_status=draft.status, to_status=STATUS_DRAFT)
        draft = replace(draft, status=STATUS_DRAFT)

    errors = validation_errors(draft)
    if errors:
        raise PeriodValidationError(errors)

    validate_transition(from_status=draft.status, to_status=STATUS_VALIDATED)
    return replace(draft, status=STATUS_VALIDATED, messages=())


def preview_period(draft: PeriodDraft) -> dict:
    totals = aggregate_period(draft.entries)
    errors = validation_errors(draft, totals)
    return {
        "draft": replace(draft, messages=tuple(errors)),
        "totals": totals,
        "summary": percentage_summary(draft.has_partner, draft.firm_retention_percentage, draft.partners),
        "errors": errors,
    }


# ============================================================
# SAVE
# ============================================================


def _rates_snapshot(entry) -> dict:
    return {line.service: rate_to_payload(line.rate) for line in entry.service_lines}


def _persist(draft: PeriodDraft, totals: PeriodTotals, actor) -> SegmentPeriod:
    period = SegmentPeriod(
        from_date=draft.from_date,
        to_date=draft.to_date,
        entry_date=draft.entry_date,
        currency=draft.currency,
        has_partner=draft.has_partner,
        firm_retention_percentage=money(draft.firm_retention_percentage),
        grand_total=money(totals.grand_total),
        firm_total=money(totals.firm_total),
        partner_pool_total=money(totals.partner_pool_total),
        distributed_total=money(totals.distributed_total),
        created_by=actor.uid,
        created_by_name=actor.name,
    )
    period.save()

    for p in draft.partners:
        PeriodPartner(
            period=period,
            partner_id=p.partner_id,
            partner_name=p.partner_name,
            percentage=money(p.percentage),
        ).save()

    for n, entry in enumerate(draft.entries, start=1):
        counts = {line.service: line.count for line in entry.service_lines}
        row = SegmentEntry(
            period=period,
            invoice_number=f"BK-{period.pk}-{n}",
            client_id=entry.client_id,
            client_name=entry.client_name,
            rates=_rates_snapshot(entry),
            total=money(entry.total),
            firm_share=money(entry.firm_share),
            partner_share=money(entry.partner_share),
            notes=entry.notes,
            created_by_name=actor.name,
            **counts,
        )
        row.save()

        for a in entry.partner_shares:
            SegmentPartnerShare(
                entry=row,
                partner_id=a.partner_id,
                partner_name=a.partner_name,
                share=money(a.share),
            ).save()

    return period


def save_period(*, user, draft: PeriodDraft) -> SavedPeriod:
    actor = resolve_actor(user)

    # validation happens before any write or posting
    validated = validate_period(draft)
    totals = aggregate_period(validated.entries)
    validate_transition(from_status=validated.status, to_status=STATUS_SAVED)

    with persistence_guard("save segment period"), transaction.atomic():
        period = _persist(validated, totals, actor)

        voucher_ids: list[str] = []
        if posting_enabled():
            voucher_ids = post_all(
                segment_period_requests(
                    period_id=period.pk,
                    from_date=period.from_date,
                    to_date=period.to_date,
                    entry_date=period.entry_date,
                    currency=period.currency,
                    grand_total=totals.grand_total,
                    distributed_total=totals.distributed_total,
                    user_id=actor.uid,
                )
            )

        increment_use_count(
            [e.client_id for e in validated.entries] + [p.partner_id for p in validated.partners]
        )

        accrue_firm_profit(period.month_id, totals.firm_total, period.currency)

        emit_audit_event(
            actor,
            action=ACTION_CREATE,
            target_type=AUDIT_TARGET,
            description=(
                f"Saved segment period {period.from_date.isoformat()} → {period.to_date.isoformat()} "
                f"with {len(validated.entries)} entries ({period.grand_total} {period.currency})"
            ),
            target_id=period.pk,
        )

    logger.info(
        "Segment period saved",
        extra={
            "period_id": period.pk,
            "entries": len(validated.entries),
            "grand_total": str(period.grand_total),
            "currency": period.currency,
            "vouchers": voucher_ids,
        },
    )

    return SavedPeriod(
        period=period,
        draft=replace(validated, status=STATUS_SAVED),
        totals=totals,
        voucher_ids=tuple(voucher_ids),
    )


# ============================================================
# READ
# ============================================================


def list_periods(*, from_date=None, to_date=None, currency=None):
    qs = SegmentPeriod.objects.all()
    if from_date:
        qs = qs.filter(to_date__gte=from_date)
    if to_date:
        qs = qs.filter(from_date__lte=to_date)
    if currency:
        qs = qs.filter(currency=currency.upper())
    return qs


def get_period_draft(period_id) -> PeriodDraft | None:
    period = SegmentPeriod.objects.filter(pk=period_id).first()
    if period is None:
        return None
    return period_from_model(period)
