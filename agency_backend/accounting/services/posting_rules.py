# accounting/services/posting_rules.py

"""
POSTING RULES (AUTHORITATIVE)

Defines HOW back-office business events map to accounting intent.

RESPONSIBILITIES:
- Resolve semantic accounts to account codes
- Construct JournalPostingRequest objects
- Hand them to the posting adapter

THIS MODULE DOES NOT:
- Write to the database
- Create JournalEntry / LedgerEntry directly
- Enforce debit == credit math (each request is a balanced pair by construction)

Rules:
- Segment period:       Dr SEGMENT_RECEIVABLE    / Cr SEGMENT_REVENUE   (grand total)
                        Dr PARTNER_SHARE_EXPENSE / Cr PARTNERS_PAYABLE  (distributed to partners)
- Manual distribution:  Dr PROFIT_DISTRIBUTION   / Cr PARTNERS_PAYABLE  (distributed amount)
                        edits post the difference, deletes post the reversal
- Expense voucher:      Dr expense_<type>        / Cr <cash box>
"""

from __future__ import annotations

from accounting.services.account_resolver import expense_account_code, resolve_code
from accounting.services.exceptions import AccountResolutionError, PostingError
from accounting.services.posting import JournalPostingRequest, post_journal_entry
from common.money import ZERO, money, to_decimal

SOURCE_SEGMENT_PERIOD = "SEGMENT_PERIOD"
SOURCE_SEGMENT_PARTNER_SHARE = "SEGMENT_PARTNER_SHARE"
SOURCE_MANUAL_DISTRIBUTION = "MANUAL_DISTRIBUTION"
SOURCE_MANUAL_EXPENSE = "manualExpense"


def _code(semantic_key: str) -> str:
    try:
        return resolve_code(semantic_key)
    except AccountResolutionError as exc:
        raise PostingError(str(exc)) from exc


def segment_period_requests(
    *,
    period_id,
    from_date,
    to_date,
    entry_date,
    currency: str,
    grand_total,
    distributed_total,
    user_id: str = "",
) -> list[JournalPostingRequest]:
    label = f"{from_date.isoformat()} → {to_date.isoformat()}"
    requests: list[JournalPostingRequest] = []

    if money(grand_total) > ZERO:
        requests.append(
            JournalPostingRequest(
                source_type=SOURCE_SEGMENT_PERIOD,
                source_id=str(period_id),
                description=f"Segment profit for period {label}",
                amount=to_decimal(grand_total),
                currency=currency,
                date=entry_date,
                debit_account_id=_code("SEGMENT_RECEIVABLE"),
                credit_account_id=_code("SEGMENT_REVENUE"),
                user_id=user_id,
            )
        )

    if money(distributed_total) > ZERO:
        requests.append(
            JournalPostingRequest(
                source_type=SOURCE_SEGMENT_PARTNER_SHARE,
                source_id=str(period_id),
                description=f"Partner revenue share for period {label}",
                amount=to_decimal(distributed_total),
                currency=currency,
                date=entry_date,
                debit_account_id=_code("PARTNER_SHARE_EXPENSE"),
                credit_account_id=_code("PARTNERS_PAYABLE"),
                user_id=user_id,
            )
        )

    return requests


def manual_distribution_request(
    *,
    distribution_id,
    revision: int,
    amount_delta,
    currency: str,
    entry_date,
    description: str,
    user_id: str = "",
) -> JournalPostingRequest | None:
    """
    Build the posting for a change of `amount_delta` in the distributed total.

    Positive deltas accrue more to partners, negative deltas reverse.
    Zero deltas need no posting (returns None).
    """
    delta = to_decimal(amount_delta)
    if money(delta) == ZERO:
        return None

    distribution = _code("PROFIT_DISTRIBUTION")
    payable = _code("PARTNERS_PAYABLE")
    debit, credit = (distribution, payable) if delta > 0 else (payable, distribution)

    return JournalPostingRequest(
        source_type=SOURCE_MANUAL_DISTRIBUTION,
        source_id=f"{distribution_id}:rev{revision}",
        description=description,
        amount=abs(delta),
        currency=currency,
        date=entry_date,
        debit_account_id=debit,
        credit_account_id=credit,
        user_id=user_id,
    )


def expense_voucher_request(
    *,
    source_id: str,
    expense_type: str,
    amount,
    currency: str,
    expense_date,
    box_account_code: str,
    notes: str = "",
    user_id: str = "",
) -> JournalPostingRequest:
    description = f"Expense {expense_type}: {notes or ''}".strip().rstrip(":")
    return JournalPostingRequest(
        source_type=SOURCE_MANUAL_EXPENSE,
        source_id=source_id,
        description=description,
        amount=to_decimal(amount),
        currency=currency,
        date=expense_date,
        debit_account_id=_expense_code(expense_type),
        credit_account_id=box_account_code,
        user_id=user_id,
    )


def _expense_code(expense_type: str) -> str:
    try:
        return expense_account_code(expense_type)
    except AccountResolutionError as exc:
        raise PostingError(str(exc)) from exc


def post_all(requests: list[JournalPostingRequest]) -> list[str]:
    return [post_journal_entry(r) for r in requests]
