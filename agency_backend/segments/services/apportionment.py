# segments/services/apportionment.py

"""
SEGMENT PROFIT APPORTIONMENT (PURE)

    resolve_service_amount  count x rate -> amount
    company_total           sum of a company's four service lines
    split_profit            firm share / partner pool / partner allocations
    compute_entry           the three above for one company
    aggregate_period        period totals + remainder
    percentage_summary      the percentage view shown while drafting

Guarantees:
- No database access, no side effects
- Never raises on business input (unbalanced partner tables are allowed here;
  rejecting them is the period validator's job)
- Full Decimal precision, no rounding
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Sequence

from common.money import HUNDRED, ZERO, to_decimal, within_tolerance
from segments.domain import (
    SERVICES,
    CompanyEntry,
    FixedRate,
    PartnerAllocation,
    PartnerDeclaration,
    PercentageRate,
    PeriodTotals,
    RateSpec,
    ServiceLine,
    SplitResult,
)

# default rate per service when neither the company nor the request sets one
DEFAULT_RATES: dict[str, RateSpec] = {
    "tickets": PercentageRate(Decimal("50")),
    "visas": PercentageRate(Decimal("100")),
    "hotels": PercentageRate(Decimal("100")),
    "groups": PercentageRate(Decimal("100")),
}


def resolve_service_amount(count: int, rate: RateSpec) -> Decimal:
    value = to_decimal(rate.value)
    if not count or value == ZERO:
        return ZERO

    if isinstance(rate, FixedRate):
        return count * value
    if isinstance(rate, PercentageRate):
        return count * value / HUNDRED

    raise TypeError(f"Unknown rate spec: {rate!r}")


def company_total(service_lines: Iterable[ServiceLine]) -> Decimal:
    return sum(
        (resolve_service_amount(line.count, line.rate) for line in service_lines),
        ZERO,
    )


def split_profit(
    total_profit,
    has_partner: bool,
    firm_retention_percentage,
    partners: Sequence[PartnerDeclaration],
) -> SplitResult:
    total = to_decimal(total_profit)

    if not has_partner:
        return SplitResult(firm_share=total, partner_pool=ZERO, allocations=())

    retention = to_decimal(firm_retention_percentage)
    pool = total * (HUNDRED - retention) / HUNDRED

    allocations = tuple(
        PartnerAllocation(
            partner_id=p.partner_id,
            partner_name=p.partner_name,
            share=pool * to_decimal(p.percentage) / HUNDRED,
        )
        for p in partners
    )

    return SplitResult(firm_share=total - pool, partner_pool=pool, allocations=allocations)


def compute_entry(
    entry: CompanyEntry,
    *,
    has_partner: bool,
    firm_retention_percentage,
    partners: Sequence[PartnerDeclaration],
) -> CompanyEntry:
    """Return the entry with total, shares and partner allocations filled in."""
    total = company_total(entry.service_lines)
    split = split_profit(total, has_partner, firm_retention_percentage, partners)
    return replace(
        entry,
        total=total,
        firm_share=split.firm_share,
        partner_share=split.partner_pool,
        partner_shares=split.allocations,
    )


def aggregate_period(entries: Iterable[CompanyEntry]) -> PeriodTotals:
    grand_total = firm_total = pool_total = distributed = ZERO

    for entry in entries:
        grand_total += to_decimal(entry.total)
        firm_total += to_decimal(entry.firm_share)
        pool_total += to_decimal(entry.partner_share)
        distributed += sum((to_decimal(a.share) for a in entry.partner_shares), ZERO)

    return PeriodTotals(
        grand_total=grand_total,
        firm_total=firm_total,
        partner_pool_total=pool_total,
        distributed_total=distributed,
        remainder=pool_total - distributed,
    )


def total_partner_percentage(partners: Iterable[PartnerDeclaration]) -> Decimal:
    return sum((to_decimal(p.percentage) for p in partners), ZERO)


def is_balanced(has_partner: bool, partners: Iterable[PartnerDeclaration]) -> bool:
    if not has_partner:
        return True
    return within_tolerance(total_partner_percentage(partners), HUNDRED)


def percentage_summary(
    has_partner: bool,
    firm_retention_percentage,
    partners: Sequence[PartnerDeclaration],
) -> dict:
    retention = to_decimal(firm_retention_percentage) if has_partner else HUNDRED
    distributed = total_partner_percentage(partners) if has_partner else ZERO

    return {
        "firm_retention_percentage": retention,
        "available_for_partners_percentage": HUNDRED - retention,
        "distributed_percentage": distributed,
        "remaining_percentage": (HUNDRED - distributed) if has_partner else ZERO,
        "is_balanced": is_balanced(has_partner, partners),
    }


def service_lines_for(counts: dict, overrides: dict | None = None, company_rates: dict | None = None) -> tuple[ServiceLine, ...]:
    """
    Build the four service lines of an entry.

    Rate precedence per service: request override, then the company's own
    default, then DEFAULT_RATES.
    """
    overrides = overrides or {}
    company_rates = company_rates or {}

    lines = []
    for service in SERVICES:
        rate = overrides.get(service) or company_rates.get(service) or DEFAULT_RATES[service]
        lines.append(ServiceLine(service=service, count=int(counts.get(service) or 0), rate=rate))
    return tuple(lines)
