# accounting/api/views/__init__.py

"""
accounting.api.views package

ViewSets are defined in accounting.api.view (singular).
Do NOT import accounting.api.urls from here to avoid circular imports.
"""

from accounting.api.view import JournalEntryViewSet, LedgerEntryViewSet
from accounting.api.views.accounts import ActiveChartAccountsView
from accounting.api.views.expenses import ExpenseVoucherListCreateView
from accounting.api.views.trial_balance import TrialBalanceView

__all__ = [
    "JournalEntryViewSet",
    "LedgerEntryViewSet",
    "TrialBalanceView",
    "ExpenseVoucherListCreateView",
    "ActiveChartAccountsView",
]
