# accounting/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from accounting.api.view import JournalEntryViewSet, LedgerEntryViewSet
from accounting.api.views.accounts import ActiveChartAccountsView
from accounting.api.views.expenses import ExpenseVoucherListCreateView
from accounting.api.views.trial_balance import TrialBalanceView

router = DefaultRouter()
router.register("journal-entries", JournalEntryViewSet, basename="journal-entry")
router.register("ledger-entries", LedgerEntryViewSet, basename="ledger-entry")

urlpatterns = [
    path("", include(router.urls)),
    # Reports
    path("trial-balance/", TrialBalanceView.as_view(), name="trial-balance"),
    # Master data
    path("accounts/", ActiveChartAccountsView.as_view(), name="accounts"),
    # Posting actions
    path("expense-vouchers/", ExpenseVoucherListCreateView.as_view(), name="expense-vouchers"),
]
