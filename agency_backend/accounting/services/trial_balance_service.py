# accounting/services/trial_balance_service.py

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone

from accounting.models.account import Account
from accounting.models.ledger import LedgerEntry
from accounting.services.account_resolver import get_active_chart
from common.money import ZERO, money, normalize_currency


def _to_minor_int(amount: Decimal) -> int:
    return int((money(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def _as_aware_dt(dt):
    if dt is None:
        return None
    if timezone.is_naive(dt):
        return timezone.make_aware(dt, timezone.get_current_timezone())
    return dt


class TrialBalanceService:
    """
    Trial Balance for ONE currency.

    Guarantees:
    - Scopes to provided chart OR ACTIVE chart, active accounts only
    - Only ledger lines whose journal entry is in `currency` are counted
      (amounts in different currencies are never added together)
    - Uses journal_entry.posted_at as the accounting timeline
    - Aggregates in bulk (no N+1)
    - Returns JSON-safe values (strings for amounts, ints for minor units)
    """

    def __init__(self, account_model=Account, ledger_model=LedgerEntry):
        self.Account = account_model
        self.Ledger = ledger_model

    def generate(self, *, currency: str, chart=None, as_of=None) -> dict:
        cutoff = _as_aware_dt(as_of) or timezone.now()
        currency = normalize_currency(currency)
        active_chart = chart or get_active_chart()

        accounts = list(self.Account.objects.usable(active_chart).only("id", "code", "name", "account_type"))

        rows = self.Ledger.objects.posted(currency=currency, as_of=cutoff).filter(account__in=accounts).side_totals()

        debit_by_account: dict[int, Decimal] = {}
        credit_by_account: dict[int, Decimal] = {}
        for r in rows:
            bucket = debit_by_account if r["entry_type"] == self.Ledger.DEBIT else credit_by_account
            bucket[r["account_id"]] = money(r["total"])

        accounts_output = []
        total_debit = ZERO
        total_credit = ZERO

        for acc in accounts:
            debit = debit_by_account.get(acc.id, ZERO)
            credit = credit_by_account.get(acc.id, ZERO)
            if debit == ZERO and credit == ZERO:
                continue

            accounts_output.append(
                {
                    "account_code": acc.code,
                    "account_name": acc.name,
                    "account_type": acc.account_type,
                    "normal_side": acc.normal_side,
                    "debit": str(money(debit)),
                    "credit": str(money(credit)),
                    "debit_minor": _to_minor_int(debit),
                    "credit_minor": _to_minor_int(credit),
                }
            )
            total_debit += debit
            total_credit += credit

        return {
            "as_of": cutoff.isoformat(),
            "currency": currency,
            "accounts": accounts_output,
            "totals": {
                "debit": str(money(total_debit)),
                "credit": str(money(total_credit)),
                "debit_minor": _to_minor_int(total_debit),
                "credit_minor": _to_minor_int(total_credit),
                "balanced": _to_minor_int(total_debit) == _to_minor_int(total_credit),
            },
        }
