# accounting/admin.py

from django.contrib import admin

from accounting.models.account import Account
from accounting.models.chart import ChartOfAccounts
from accounting.models.expense import ExpenseVoucher
from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry


class ReadOnlyAdmin(admin.ModelAdmin):
    """Ledger-side records are append-only and written by services only."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# CHART OF ACCOUNTS
# ============================================================


@admin.register(ChartOfAccounts)
class ChartOfAccountsAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "industry", "is_active", "updated_at")
    list_filter = ("is_active",)
    search_fields = ("name", "code")
    readonly_fields = ("created_at", "updated_at")


# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "account_type", "is_cash_box", "chart", "is_active")
    list_filter = ("account_type", "is_cash_box", "is_active", "chart")
    search_fields = ("code", "name")
    ordering = ("chart", "code")
    readonly_fields = ("created_at", "updated_at")


# ============================================================
# JOURNAL / LEDGER / VOUCHERS (READ-ONLY)
# ============================================================


class LedgerEntryInline(admin.TabularInline):
    model = LedgerEntry
    extra = 0
    can_delete = False
    readonly_fields = ("account", "entry_type", "amount", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(JournalEntry)
class JournalEntryAdmin(ReadOnlyAdmin):
    list_display = ("id", "reference", "source_type", "currency", "posted_at", "created_by")
    list_filter = ("source_type", "currency")
    search_fields = ("description", "reference")
    ordering = ("-posted_at",)
    inlines = [LedgerEntryInline]


@admin.register(LedgerEntry)
class LedgerEntryAdmin(ReadOnlyAdmin):
    list_display = ("id", "journal_entry", "account", "entry_type", "amount", "created_at")
    list_filter = ("entry_type",)
    search_fields = ("journal_entry__reference", "account__code")


@admin.register(ExpenseVoucher)
class ExpenseVoucherAdmin(ReadOnlyAdmin):
    list_display = ("id", "expense_date", "expense_type", "amount", "currency", "box_account_code")
    list_filter = ("expense_type", "currency")
    search_fields = ("payee", "notes")
