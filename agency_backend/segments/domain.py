# segments/domain.py

"""
SEGMENT DOMAIN TYPES

Plain value objects used by the apportionment functions. No ORM, no I/O.

RateSpec is a closed sum type: FixedRate | PercentageRate.
  - FixedRate(v):      every unit earns v
  - PercentageRate(v): every unit earns v / 100

Amounts are Decimal at full precision; rounding happens at the edges.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Union

SERVICE_TICKETS = "tickets"
SERVICE_VISAS = "visas"
SERVICE_HOTELS = "hotels"
SERVICE_GROUPS = "groups"

SERVICES = (SERVICE_TICKETS, SERVICE_VISAS, SERVICE_HOTELS, SERVICE_GROUPS)

RATE_FIXED = "fixed"
RATE_PERCENTAGE = "percentage"

STATUS_DRAFT = "DRAFT"
STATUS_VALIDATED = "VALIDATED"
STATUS_SAVED = "SAVED"


@dataclass(frozen=True)
class FixedRate:
    value: Decimal

    kind = RATE_FIXED


@dataclass(frozen=True)
class PercentageRate:
    value: Decimal

    kind = RATE_PERCENTAGE


RateSpec = Union[FixedRate, PercentageRate]


@dataclass(frozen=True)
class ServiceLine:
    service: str
    count: int
    rate: RateSpec


@dataclass(frozen=True)
class PartnerDeclaration:
    partner_id: str
    partner_name: str
    percentage: Decimal
    id: str = ""


@dataclass(frozen=True)
class PartnerAllocation:
    partner_id: str
    partner_name: str
    share: Decimal


@dataclass(frozen=True)
class SplitResult:
    firm_share: Decimal
    partner_pool: Decimal
    allocations: tuple[PartnerAllocation, ...] = ()

    @property
    def distributed(self) -> Decimal:
        return sum((a.share for a in self.allocations), Decimal("0"))

    @property
    def remainder(self) -> Decimal:
        return self.partner_pool - self.distributed


@dataclass(frozen=True)
class CompanyEntry:
    client_id: str
    client_name: str
    service_lines: tuple[ServiceLine, ...]
    total: Decimal = Decimal("0")
    firm_share: Decimal = Decimal("0")
    partner_share: Decimal = Decimal("0")
    partner_shares: tuple[PartnerAllocation, ...] = ()
    notes: str = ""
    id: str = ""

    def line(self, service: str) -> ServiceLine | None:
        for line in self.service_lines:
            if line.service == service:
                return line
        return None


@dataclass(frozen=True)
class PeriodTotals:
    grand_total: Decimal
    firm_total: Decimal
    partner_pool_total: Decimal
    distributed_total: Decimal
    remainder: Decimal


@dataclass(frozen=True)
class PeriodDraft:
    from_date: date | None
    to_date: date | None
    entry_date: date | None
    currency: str
    has_partner: bool
    firm_retention_percentage: Decimal
    partners: tuple[PartnerDeclaration, ...] = ()
    entries: tuple[CompanyEntry, ...] = ()
    status: str = STATUS_DRAFT
    messages: tuple[str, ...] = field(default=())
