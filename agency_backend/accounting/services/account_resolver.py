# accounting/services/account_resolver.py

"""
PATH: accounting/services/account_resolver.py

ACCOUNT RESOLVER (AUTHORITATIVE)

Answers two questions:
- "Which account code serves this purpose?" (semantic key -> code)
- "Which active account has this code?"      (code -> Account)

Posting requests carry account codes. Semantic keys let posting rules stay
independent of the numbering a particular chart uses.

Design goals:
- deterministic
- chart-safe (only the single active chart is ever used)
- hard-fail on missing setup (never post to a guessed account)
"""

from __future__ import annotations

import logging
from functools import lru_cache

from django.core.exceptions import MultipleObjectsReturned, ObjectDoesNotExist

from accounting.models.account import Account
from accounting.models.chart import ChartOfAccounts
from accounting.services.exceptions import AccountResolutionError

logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# SEMANTIC CODES BY CHART KEY
# ------------------------------------------------------------

DEFAULT_CODES = {
    "CASH": "1000",
    "BANK": "1020",
    "SEGMENT_RECEIVABLE": "1200",
    "ACCOUNTS_PAYABLE": "2000",
    "PARTNERS_PAYABLE": "2200",
    "PROFIT_DISTRIBUTION": "3200",
    "SEGMENT_REVENUE": "4100",
    "PARTNER_SHARE_EXPENSE": "5100",
}

CHART_CODE_MAP = {
    "travel_agency_standard": DEFAULT_CODES,
}

EXPENSE_ACCOUNT_PREFIX = "expense_"


def _codes_for_chart(chart: ChartOfAccounts) -> dict:
    return CHART_CODE_MAP.get((chart.code or "").strip().lower(), DEFAULT_CODES)


# ------------------------------------------------------------
# ACTIVE CHART
# ------------------------------------------------------------


@lru_cache(maxsize=1)
def get_active_chart() -> ChartOfAccounts:
    """
    Cached resolver for the *single* active chart.

    NOTE:
    If you toggle active charts in admin or tests, call clear_active_chart_cache()
    (ChartOfAccounts.save() already does).
    """
    try:
        return ChartOfAccounts.objects.get(is_active=True)
    except ObjectDoesNotExist as exc:
        raise AccountResolutionError(
            "No active Chart of Accounts. Run `manage.py seed_agency_chart` first."
        ) from exc
    except MultipleObjectsReturned as exc:
        raise AccountResolutionError(
            "Multiple active Charts of Accounts found. Only one active chart is allowed."
        ) from exc


def clear_active_chart_cache() -> None:
    get_active_chart.cache_clear()


# ------------------------------------------------------------
# RESOLUTION
# ------------------------------------------------------------


def resolve_code(semantic_key: str, *, chart: ChartOfAccounts | None = None) -> str:
    semantic_key = (semantic_key or "").strip().upper()
    if not semantic_key:
        raise AccountResolutionError("semantic_key is required")

    chart = chart or get_active_chart()
    code = (_codes_for_chart(chart).get(semantic_key) or "").strip()

    if not code:
        raise AccountResolutionError(
            f"Missing mapping for semantic key '{semantic_key}' in chart '{chart.name}'. "
            "Update CHART_CODE_MAP and ensure the seed command creates the account code."
        )

    return code


def expense_account_code(expense_type: str) -> str:
    expense_type = (expense_type or "").strip().lower()
    if not expense_type:
        raise AccountResolutionError("expense_type is required")
    return f"{EXPENSE_ACCOUNT_PREFIX}{expense_type}"


def get_account_by_code(code: str, *, chart: ChartOfAccounts | None = None) -> Account:
    code = (code or "").strip()
    if not code:
        raise AccountResolutionError("Account code is required")

    chart = chart or get_active_chart()

    try:
        return Account.objects.get(chart=chart, code=code, is_active=True)
    except ObjectDoesNotExist as exc:
        raise AccountResolutionError(
            f"Account with code={code} not found (or inactive) in active chart '{chart.name}'."
        ) from exc


def list_cash_boxes() -> list[Account]:
    chart = get_active_chart()
    return list(Account.objects.cash_boxes(chart))
