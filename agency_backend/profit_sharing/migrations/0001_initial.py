import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("relations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="MonthlyProfit",
            fields=[
                (
                    "id",
                    models.CharField(
                        max_length=7,
                        primary_key=True,
                        serialize=False,
                        validators=[
                            django.core.validators.RegexValidator(
                                message="Month id must look like YYYY-MM",
                                regex="^\\d{4}-(0[1-9]|1[0-2])$",
                            )
                        ],
                    ),
                ),
                ("total_profit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
                ("currency", models.CharField(max_length=3)),
                ("notes", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["-id"]},
        ),
        migrations.CreateModel(
            name="ManualProfitDistribution",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("from_date", models.DateField()),
                ("to_date", models.DateField()),
                (
                    "profit",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                ("currency", models.CharField(max_length=3)),
                ("distributed_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
                ("revision", models.PositiveIntegerField(default=1)),
                ("notes", models.CharField(blank=True, default="", max_length=255)),
                ("created_by", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["-to_date", "-created_at"]},
        ),
        migrations.CreateModel(
            name="ProfitShare",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("partner_name", models.CharField(max_length=255)),
                (
                    "percentage",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("100")),
                        ],
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, max_digits=16)),
                ("notes", models.CharField(blank=True, default="", max_length=255)),
                ("created_by", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "monthly_profit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="shares",
                        to="profit_sharing.monthlyprofit",
                    ),
                ),
                (
                    "partner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="profit_shares",
                        to="relations.relation",
                    ),
                ),
            ],
            options={
                "ordering": ["monthly_profit_id", "partner_name"],
                "indexes": [
                    models.Index(fields=["monthly_profit", "partner"], name="ps_month_partner_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ManualDistributionPartner",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("partner_name", models.CharField(max_length=255)),
                (
                    "percentage",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("100")),
                        ],
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, max_digits=16)),
                (
                    "distribution",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="partners",
                        to="profit_sharing.manualprofitdistribution",
                    ),
                ),
                (
                    "partner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="manual_profit_lines",
                        to="relations.relation",
                    ),
                ),
            ],
            options={"ordering": ["distribution_id", "id"]},
        ),
    ]
