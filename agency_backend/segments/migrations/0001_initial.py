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
            name="SegmentPeriod",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("from_date", models.DateField()),
                ("to_date", models.DateField()),
                ("entry_date", models.DateField()),
                ("currency", models.CharField(max_length=3)),
                ("has_partner", models.BooleanField(default=False)),
                (
                    "firm_retention_percentage",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("100")),
                        ],
                    ),
                ),
                ("grand_total", models.DecimalField(decimal_places=2, max_digits=16)),
                ("firm_total", models.DecimalField(decimal_places=2, max_digits=16)),
                ("partner_pool_total", models.DecimalField(decimal_places=2, max_digits=16)),
                ("distributed_total", models.DecimalField(decimal_places=2, max_digits=16)),
                ("status", models.CharField(choices=[("SAVED", "Saved")], default="SAVED", max_length=10)),
                ("created_by", models.CharField(blank=True, default="", max_length=64)),
                ("created_by_name", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-to_date", "-id"],
                "indexes": [
                    models.Index(fields=["from_date", "to_date"], name="seg_period_dates_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PeriodPartner",
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
                (
                    "partner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="segment_partnerships",
                        to="relations.relation",
                    ),
                ),
                (
                    "period",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="partners",
                        to="segments.segmentperiod",
                    ),
                ),
            ],
            options={"ordering": ["id"]},
        ),
        migrations.CreateModel(
            name="SegmentEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("invoice_number", models.CharField(max_length=50, unique=True)),
                ("client_name", models.CharField(max_length=255)),
                ("tickets", models.PositiveIntegerField(default=0)),
                ("visas", models.PositiveIntegerField(default=0)),
                ("hotels", models.PositiveIntegerField(default=0)),
                ("groups", models.PositiveIntegerField(default=0)),
                ("rates", models.JSONField(blank=True, default=dict)),
                ("total", models.DecimalField(decimal_places=2, max_digits=16)),
                ("firm_share", models.DecimalField(decimal_places=2, max_digits=16)),
                ("partner_share", models.DecimalField(decimal_places=2, max_digits=16)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_by_name", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="segment_entries",
                        to="relations.relation",
                    ),
                ),
                (
                    "period",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="entries",
                        to="segments.segmentperiod",
                    ),
                ),
            ],
            options={
                "ordering": ["period_id", "id"],
                "verbose_name_plural": "Segment entries",
            },
        ),
        migrations.CreateModel(
            name="SegmentPartnerShare",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("partner_name", models.CharField(max_length=255)),
                (
                    "share",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="partner_shares",
                        to="segments.segmententry",
                    ),
                ),
                (
                    "partner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="segment_partner_shares",
                        to="relations.relation",
                    ),
                ),
            ],
            options={"ordering": ["entry_id", "id"]},
        ),
    ]
