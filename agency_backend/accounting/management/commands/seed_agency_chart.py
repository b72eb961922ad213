# accounting/management/commands/seed_agency_chart.py

from django.core.management.base import BaseCommand
from django.db import transaction

from accounting.models.account import Account
from accounting.models.chart import ChartOfAccounts

AGENCY_CODE = "travel_agency_standard"
AGENCY_NAME = "Travel Agency Standard Chart"
AGENCY_INDUSTRY = "Travel & Tourism"

# (code, name, type, is_cash_box)
AGENCY_ACCOUNTS = [
    # ASSETS
    ("1000", "Main Cash Box", Account.ASSET, True),
    ("1010", "Branch Cash Box", Account.ASSET, True),
    ("1011", "Airport Desk Cash Box", Account.ASSET, True),
    ("1020", "Bank Account", Account.ASSET, False),
    ("1200", "Segment Receivable", Account.ASSET, False),
    # LIABILITIES
    ("2000", "Accounts Payable", Account.LIABILITY, False),
    ("2200", "Partners Payable", Account.LIABILITY, False),
    # EQUITY
    ("3000", "Owner Capital", Account.EQUITY, False),
    ("3100", "Retained Earnings", Account.EQUITY, False),
    ("3200", "Profit Distribution", Account.EQUITY, False),
    # REVENUE
    ("4100", "Segment Revenue", Account.REVENUE, False),
    # EXPENSES
    ("5100", "Partner Revenue Share", Account.EXPENSE, False),
    ("expense_rent", "Rent", Account.EXPENSE, False),
    ("expense_salaries", "Salaries", Account.EXPENSE, False),
    ("expense_utilities", "Utilities", Account.EXPENSE, False),
    ("expense_office", "Office Supplies", Account.EXPENSE, False),
    ("expense_marketing", "Marketing", Account.EXPENSE, False),
    ("expense_general", "General Expenses", Account.EXPENSE, False),
]


class Command(BaseCommand):
    help = "Seed the travel agency Chart of Accounts and activate it (idempotent)."

    @transaction.atomic
    def handle(self, *args, **options):
        chart = ChartOfAccounts.objects.filter(code=AGENCY_CODE).first()

        if chart is None:
            chart = ChartOfAccounts.objects.create(
                name=AGENCY_NAME,
                code=AGENCY_CODE,
                industry=AGENCY_INDUSTRY,
                is_active=True,
            )
            self.stdout.write("Created agency chart")
        elif not chart.is_active:
            chart.is_active = True
            chart.save()

        created_count = 0
        updated_count = 0

        for code, name, account_type, is_cash_box in AGENCY_ACCOUNTS:
            acc, acc_created = Account.objects.get_or_create(
                chart=chart,
                code=code,
                defaults={
                    "name": name,
                    "account_type": account_type,
                    "is_cash_box": is_cash_box,
                    "is_active": True,
                },
            )

            if acc_created:
                created_count += 1
                continue

            wanted = {
                "name": name,
                "account_type": account_type,
                "is_cash_box": is_cash_box,
                "is_active": True,
            }
            changed = [f for f, v in wanted.items() if getattr(acc, f) != v]
            if changed:
                for f in changed:
                    setattr(acc, f, wanted[f])
                acc.save(update_fields=changed + ["updated_at"])
                updated_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Agency chart seeded ({created_count} new accounts, {updated_count} updated)."
            )
        )
