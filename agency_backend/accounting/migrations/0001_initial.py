import decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ChartOfAccounts",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                (
                    "code",
                    models.SlugField(
                        help_text="Stable chart key used by resolvers/seeders. Do not change after go-live.",
                        max_length=64,
                        unique=True,
                    ),
                ),
                ("industry", models.CharField(blank=True, default="", max_length=100)),
                ("is_active", models.BooleanField(db_index=True, default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Chart of Accounts",
                "verbose_name_plural": "Charts of Accounts",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=50)),
                ("name", models.CharField(max_length=150)),
                (
                    "account_type",
                    models.CharField(
                        choices=[
                            ("ASSET", "Asset"),
                            ("LIABILITY", "Liability"),
                            ("EQUITY", "Equity"),
                            ("REVENUE", "Revenue"),
                            ("EXPENSE", "Expense"),
                        ],
                        max_length=20,
                    ),
                ),
                ("is_cash_box", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "chart",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounts",
                        to="accounting.chartofaccounts",
                    ),
                ),
            ],
            options={
                "verbose_name": "Account",
                "verbose_name_plural": "Accounts",
                "ordering": ["code"],
                "indexes": [
                    models.Index(fields=["chart", "code"], name="acct_chart_code_idx"),
                    models.Index(fields=["chart", "account_type"], name="acct_chart_type_idx"),
                    models.Index(fields=["is_active"], name="acct_is_active_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("chart", "code"), name="uniq_account_chart_code"),
                    models.CheckConstraint(condition=models.Q(("code", ""), _negated=True), name="chk_account_code_not_blank"),
                    models.CheckConstraint(condition=models.Q(("name", ""), _negated=True), name="chk_account_name_not_blank"),
                    models.CheckConstraint(
                        condition=models.Q(("is_cash_box", False), ("account_type", "ASSET"), _connector="OR"),
                        name="chk_account_cash_box_is_asset",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        help_text="Source reference (segment period, expense voucher, distribution, ...)",
                        max_length=150,
                        null=True,
                    ),
                ),
                ("source_type", models.CharField(blank=True, default="", max_length=50)),
                ("description", models.TextField(help_text="Narrative description of the journal entry")),
                ("currency", models.CharField(help_text="ISO currency code", max_length=3)),
                (
                    "created_by",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="User id of the actor who caused the posting",
                        max_length=64,
                    ),
                ),
                (
                    "posted_at",
                    models.DateTimeField(default=django.utils.timezone.now, help_text="Accounting effective date"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "is_posted",
                    models.BooleanField(default=True, help_text="Once posted, journal entries are immutable"),
                ),
            ],
            options={
                "verbose_name": "Journal Entry",
                "verbose_name_plural": "Journal Entries",
                "ordering": ["-posted_at", "-created_at"],
                "indexes": [
                    models.Index(fields=["posted_at"], name="je_posted_at_idx"),
                    models.Index(fields=["reference"], name="je_reference_idx"),
                    models.Index(fields=["source_type"], name="je_source_type_idx"),
                    models.Index(fields=["currency"], name="je_currency_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("reference__isnull", False), models.Q(("reference", ""), _negated=True)),
                        fields=("reference",),
                        name="uniq_journal_reference_not_blank",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("entry_type", models.CharField(choices=[("DEBIT", "Debit"), ("CREDIT", "Credit")], max_length=6)),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.01"))],
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="accounting.account",
                    ),
                ),
                (
                    "journal_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Ledger Entry",
                "verbose_name_plural": "Ledger Entries",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["account", "entry_type"], name="le_account_type_idx"),
                    models.Index(fields=["journal_entry", "entry_type"], name="le_journal_type_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ExpenseVoucher",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("expense_date", models.DateField(default=django.utils.timezone.localdate)),
                ("expense_type", models.SlugField(max_length=40)),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.01"))],
                    ),
                ),
                ("currency", models.CharField(max_length=3)),
                ("exchange_rate", models.DecimalField(blank=True, decimal_places=6, max_digits=16, null=True)),
                ("box_account_code", models.CharField(max_length=50)),
                ("payee", models.CharField(blank=True, default="", max_length=150)),
                ("notes", models.CharField(blank=True, default="", max_length=255)),
                ("created_by", models.CharField(max_length=64)),
                ("created_by_name", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "journal_entry",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="expense_voucher",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Expense Voucher",
                "verbose_name_plural": "Expense Vouchers",
                "ordering": ["-expense_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["expense_date"], name="expv_date_idx"),
                    models.Index(fields=["expense_type"], name="expv_type_idx"),
                ],
            },
        ),
    ]
