# segments/converters.py

"""
SEGMENT CONVERTERS (SERIALIZATION BOUNDARY)

The one place where outside representations become domain objects and back:

    API payload (validated serializer data) ──▶ PeriodDraft
    Relation.segment_settings               ──▶ {service: RateSpec}
    SegmentPeriod + rows                     ──▶ PeriodDraft (status SAVED)
    PeriodDraft / PeriodTotals               ──▶ JSON-safe dicts

Dates are normalized here: date objects pass through, datetimes become
local dates, ISO strings are parsed. Money leaves as 2-place strings.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from common.exceptions import DomainValidationError
from common.money import money, normalize_currency, to_decimal
from segments.domain import (
    RATE_FIXED,
    RATE_PERCENTAGE,
    SERVICES,
    STATUS_SAVED,
    CompanyEntry,
    FixedRate,
    PartnerAllocation,
    PartnerDeclaration,
    PercentageRate,
    PeriodDraft,
    PeriodTotals,
    RateSpec,
)
from segments.services.apportionment import service_lines_for

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def to_date(value) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return timezone.localdate(to_aware_datetime(value))
    if isinstance(value, date):
        return value

    text = str(value).strip()
    parsed = parse_date(text)
    if parsed is not None:
        return parsed

    dt = parse_datetime(text)
    if dt is None:
        raise DomainValidationError(f"Invalid date: {value!r}")
    return timezone.localdate(to_aware_datetime(dt))


def to_aware_datetime(value: datetime) -> datetime:
    if timezone.is_naive(value):
        return timezone.make_aware(value, timezone.get_current_timezone())
    return value


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------


def rate_from_payload(data) -> RateSpec | None:
    if not data:
        return None

    kind = (data.get("kind") or "").strip().lower()
    try:
        value = to_decimal(data.get("value"))
    except ValueError as exc:
        raise DomainValidationError(str(exc)) from exc

    if value < 0:
        raise DomainValidationError("Rate value must be >= 0")
    if kind == RATE_FIXED:
        return FixedRate(value)
    if kind == RATE_PERCENTAGE:
        return PercentageRate(value)
    raise DomainValidationError(f"Unknown rate kind: {kind or '(blank)'}")


def rate_to_payload(rate: RateSpec) -> dict:
    return {"kind": rate.kind, "value": str(rate.value)}


def rates_from_settings(segment_settings: dict | None) -> dict[str, RateSpec]:
    rates = {}
    for service in SERVICES:
        rate = rate_from_payload((segment_settings or {}).get(service))
        if rate is not None:
            rates[service] = rate
    return rates


# ---------------------------------------------------------------------------
# Payload -> domain
# ---------------------------------------------------------------------------


def partner_from_payload(data: dict, relations: dict) -> PartnerDeclaration:
    partner_id = str(data.get("partner_id") or "")
    relation = relations.get(partner_id)
    return PartnerDeclaration(
        id=str(data.get("id") or ""),
        partner_id=partner_id,
        partner_name=(relation.name if relation else data.get("partner_name")) or "",
        percentage=to_decimal(data.get("percentage")),
    )


def entry_from_payload(data: dict, relations: dict) -> CompanyEntry:
    client_id = str(data.get("client_id") or "")
    relation = relations.get(client_id)

    overrides = {}
    for service, spec in (data.get("rates") or {}).items():
        rate = rate_from_payload(spec)
        if rate is not None:
            overrides[service] = rate

    company_rates = rates_from_settings(relation.segment_settings) if relation else {}

    return CompanyEntry(
        id=str(data.get("id") or ""),
        client_id=client_id,
        client_name=relation.name if relation else "",
        service_lines=service_lines_for(data, overrides=overrides, company_rates=company_rates),
        notes=(data.get("notes") or "").strip(),
    )


def period_from_payload(data: dict, *, relations: dict, default_retention) -> PeriodDraft:
    """
    relations: {relation id (str): Relation} for every client and partner
    referenced by the payload.
    """
    has_partner = bool(data.get("has_partner"))
    retention = data.get("firm_retention_percentage")
    if not has_partner:
        retention = Decimal("100")
    elif retention in (None, ""):
        retention = default_retention

    return PeriodDraft(
        from_date=to_date(data.get("from_date")),
        to_date=to_date(data.get("to_date")),
        entry_date=to_date(data.get("entry_date")) or timezone.localdate(),
        currency=normalize_currency(data.get("currency")),
        has_partner=has_partner,
        firm_retention_percentage=to_decimal(retention),
        partners=tuple(partner_from_payload(p, relations) for p in (data.get("partners") or [])),
        entries=tuple(entry_from_payload(e, relations) for e in (data.get("entries") or [])),
    )


# ---------------------------------------------------------------------------
# Models -> domain
# ---------------------------------------------------------------------------


def _rate_from_snapshot(rates: dict, service: str) -> RateSpec:
    rate = rate_from_payload((rates or {}).get(service))
    if rate is None:
        raise DomainValidationError(f"Stored entry has no rate for {service}")
    return rate


def period_from_model(period) -> PeriodDraft:
    partners = tuple(
        PartnerDeclaration(
            id=str(p.pk),
            partner_id=str(p.partner_id),
            partner_name=p.partner_name,
            percentage=p.percentage,
        )
        for p in period.partners.all()
    )

    entries = []
    for row in period.entries.prefetch_related("partner_shares"):
        overrides = {s: _rate_from_snapshot(row.rates, s) for s in SERVICES}
        counts = {s: getattr(row, s) for s in SERVICES}
        entries.append(
            CompanyEntry(
                id=row.invoice_number,
                client_id=str(row.client_id),
                client_name=row.client_name,
                service_lines=service_lines_for(counts, overrides=overrides),
                notes=row.notes,
                total=row.total,
                firm_share=row.firm_share,
                partner_share=row.partner_share,
                partner_shares=tuple(
                    PartnerAllocation(
                        partner_id=str(s.partner_id),
                        partner_name=s.partner_name,
                        share=s.share,
                    )
                    for s in row.partner_shares.all()
                ),
            )
        )

    return PeriodDraft(
        from_date=period.from_date,
        to_date=period.to_date,
        entry_date=period.entry_date,
        currency=period.currency,
        has_partner=period.has_partner,
        firm_retention_percentage=period.firm_retention_percentage,
        partners=partners,
        entries=tuple(entries),
        status=STATUS_SAVED,
    )


# ---------------------------------------------------------------------------
# Domain -> JSON
# ---------------------------------------------------------------------------


def _amount(value) -> str:
    return str(money(value))


def allocation_to_payload(a: PartnerAllocation) -> dict:
    return {"partner_id": a.partner_id, "partner_name": a.partner_name, "share": _amount(a.share)}


def entry_to_payload(entry: CompanyEntry) -> dict:
    return {
        "id": entry.id,
        "client_id": entry.client_id,
        "client_name": entry.client_name,
        "notes": entry.notes,
        "services": {
            line.service: {"count": line.count, "rate": rate_to_payload(line.rate)}
            for line in entry.service_lines
        },
        "total": _amount(entry.total),
        "firm_share": _amount(entry.firm_share),
        "partner_share": _amount(entry.partner_share),
        "partner_shares": [allocation_to_payload(a) for a in entry.partner_shares],
    }


def totals_to_payload(totals: PeriodTotals) -> dict:
    return {
        "grand_total": _amount(totals.grand_total),
        "firm_total": _amount(totals.firm_total),
        "partner_pool_total": _amount(totals.partner_pool_total),
        "distributed_total": _amount(totals.distributed_total),
        "remainder": _amount(totals.remainder),
    }


def summary_to_payload(summary: dict) -> dict:
    return {k: (v if isinstance(v, bool) else str(money(v))) for k, v in summary.items()}


def period_to_payload(draft: PeriodDraft) -> dict:
    return {
        "status": draft.status,
        "from_date": draft.from_date.isoformat() if draft.from_date else None,
        "to_date": draft.to_date.isoformat() if draft.to_date else None,
        "entry_date": draft.entry_date.isoformat() if draft.entry_date else None,
        "currency": draft.currency,
        "has_partner": draft.has_partner,
        "firm_retention_percentage": str(money(draft.firm_retention_percentage)),
        "partners": [
            {
                "partner_id": p.partner_id,
                "partner_name": p.partner_name,
                "percentage": str(money(p.percentage)),
            }
            for p in draft.partners
        ],
        "entries": [entry_to_payload(e) for e in draft.entries],
    }
