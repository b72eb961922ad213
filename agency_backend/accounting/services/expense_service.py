# PATH: accounting/services/expense_service.py

"""
EXPENSE VOUCHER SERVICE

Responsibilities:
- Validate the voucher payload
- Resolve the paying cash box (explicit, or the actor's default box)
- Post the journal entry through the posting adapter
- Persist the ExpenseVoucher business record linked to that entry
- Emit the audit event

All of it happens in one transaction: a posting failure leaves nothing behind.

Accounting Effect:
- Dr expense_<expense_type>
- Cr <cash box account>
"""

from __future__ import annotations

import logging
import uuid
from datetime import date as date_type
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from accounting.models.expense import ExpenseVoucher
from accounting.services.posting import post_journal_entry
from accounting.services.posting_rules import expense_voucher_request
from audit.events import ACTION_CREATE, emit_audit_event
from common.db import persistence_guard
from common.exceptions import DomainValidationError
from common.money import ZERO, money, normalize_currency
from users.services.identity import resolve_actor

logger = logging.getLogger(__name__)


def _normalize_expense_date(expense_date) -> date_type:
    if expense_date is None:
        return timezone.localdate()
    if isinstance(expense_date, date_type):
        return expense_date
    raise DomainValidationError("expense_date must be a date")


def _normalize_expense_type(expense_type: str) -> str:
    value = (expense_type or "").strip().lower().replace(" ", "_")
    if not value:
        raise DomainValidationError("expense_type is required")
    return value


def _resolve_box(user, box_account_code: str | None) -> str:
    code = (box_account_code or "").strip() or (getattr(user, "box_account_code", "") or "").strip()
    if not code:
        raise DomainValidationError("No cash box selected and the user has no default box.")
    return code


def create_expense_voucher(
    *,
    user,
    expense_type: str,
    amount,
    currency: str,
    expense_date=None,
    box_account_code: str | None = None,
    payee: str = "",
    notes: str = "",
    exchange_rate: Decimal | None = None,
) -> ExpenseVoucher:
    actor = resolve_actor(user)

    amt = money(amount)
    if amt <= ZERO:
        raise DomainValidationError("Amount must be > 0")

    currency = normalize_currency(currency)
    if currency not in settings.SUPPORTED_CURRENCIES:
        raise DomainValidationError(f"Unsupported currency: {currency or '(blank)'}")

    expense_type = _normalize_expense_type(expense_type)
    expense_date = _normalize_expense_date(expense_date)
    box = _resolve_box(user, box_account_code)
    notes = (notes or "").strip()

    with persistence_guard("create expense voucher"), transaction.atomic():
        voucher_id = post_journal_entry(
            expense_voucher_request(
                source_id=f"expense-{uuid.uuid4().hex}",
                expense_type=expense_type,
                amount=amt,
                currency=currency,
                expense_date=expense_date,
                box_account_code=box,
                notes=notes,
                user_id=actor.uid,
            )
        )

        voucher = ExpenseVoucher.objects.create(
            expense_date=expense_date,
            expense_type=expense_type,
            amount=amt,
            currency=currency,
            exchange_rate=exchange_rate,
            box_account_code=box,
            payee=(payee or "").strip(),
            notes=notes,
            journal_entry_id=int(voucher_id),
            created_by=actor.uid,
            created_by_name=actor.name,
        )

        emit_audit_event(
            actor,
            action=ACTION_CREATE,
            target_type="VOUCHER",
            description=f"Created expense voucher for {amt} {currency}.",
            target_id=voucher_id,
        )

    logger.info(
        "Expense voucher created",
        extra={"voucher_id": voucher_id, "expense_type": expense_type, "currency": currency},
    )
    return voucher
