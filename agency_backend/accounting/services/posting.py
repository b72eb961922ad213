# accounting/services/posting.py

"""
======================================================
PATH: accounting/services/posting.py
======================================================
POSTING ADAPTER (JOURNAL POSTING BOUNDARY)

The only doorway from business services into the ledger.

Contract:
    post_journal_entry(JournalPostingRequest) -> voucher id (str)

- Account ids in a request are account CODES of the active chart.
- One request = one balanced two-line journal entry (Dr debit / Cr credit).
- Idempotent per (source_type, source_id): a repeated source is refused.
- Every failure surfaces as PostingError:
    unknown or inactive account, non-positive amount, unsupported currency,
    duplicate source reference, database unavailable.

This module DOES NOT decide which accounts a business event hits; posting
rules (accounting/services/posting_rules.py) build the requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date as date_type, datetime, time
from decimal import Decimal

from django.conf import settings
from django.db import InterfaceError, OperationalError, transaction
from django.utils import timezone

from accounting.services.account_resolver import get_account_by_code, get_active_chart
from accounting.services.exceptions import (
    AccountResolutionError,
    IdempotencyError,
    JournalEntryCreationError,
    PostingError,
)
from accounting.services.journal_entry_service import create_journal_entry
from common.money import ZERO, money, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JournalPostingRequest:
    source_type: str
    source_id: str
    description: str
    amount: Decimal
    currency: str
    date: date_type | datetime
    debit_account_id: str
    credit_account_id: str
    user_id: str = ""


def posting_enabled() -> bool:
    return bool(getattr(settings, "ACCOUNTING_POSTING_ENABLED", True))


def _posted_at(value) -> datetime:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date_type):
        dt = datetime.combine(value, time(23, 59, 59))
    else:
        raise PostingError("Posting date must be a date or datetime")

    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt, timezone.get_current_timezone())
    return dt


def post_journal_entry(request: JournalPostingRequest) -> str:
    """
    Record one balanced transaction and return its voucher id.
    Runs inside the caller's transaction when there is one.
    """
    try:
        amount = to_decimal(request.amount)
    except ValueError as exc:
        raise PostingError(str(exc)) from exc

    if money(amount) <= ZERO:
        raise PostingError(f"Posting amount must be > 0 (got {amount})")

    if not (request.source_type or "").strip() or not str(request.source_id or "").strip():
        raise PostingError("source_type and source_id are required")

    if request.debit_account_id == request.credit_account_id:
        raise PostingError("Debit and credit accounts must differ")

    posted_at = _posted_at(request.date)

    try:
        with transaction.atomic():
            chart = get_active_chart()
            debit_account = get_account_by_code(request.debit_account_id, chart=chart)
            credit_account = get_account_by_code(request.credit_account_id, chart=chart)

            je = create_journal_entry(
                description=request.description,
                postings=[
                    {"account": debit_account, "debit": amount, "credit": ZERO},
                    {"account": credit_account, "debit": ZERO, "credit": amount},
                ],
                currency=request.currency,
                reference_type=request.source_type,
                reference_id=str(request.source_id),
                posted_at=posted_at,
                created_by=request.user_id,
            )
    except IdempotencyError as exc:
        raise PostingError(f"Duplicate posting for {request.source_type}:{request.source_id}") from exc
    except (AccountResolutionError, JournalEntryCreationError) as exc:
        raise PostingError(str(exc)) from exc
    except (OperationalError, InterfaceError) as exc:
        logger.exception(
            "Ledger unavailable while posting",
            extra={"source_type": request.source_type, "source_id": request.source_id},
        )
        raise PostingError("Database not available.") from exc

    logger.info(
        "Journal entry posted",
        extra={
            "voucher_id": je.id,
            "source_type": request.source_type,
            "source_id": request.source_id,
            "amount": str(money(amount)),
            "currency": je.currency,
        },
    )
    return str(je.id)
