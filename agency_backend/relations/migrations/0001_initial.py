import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Relation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("code", models.CharField(blank=True, default="", max_length=50)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                (
                    "type",
                    models.CharField(
                        choices=[("company", "Company"), ("individual", "Individual")],
                        default="individual",
                        max_length=20,
                    ),
                ),
                (
                    "relation_type",
                    models.CharField(
                        choices=[("client", "Client"), ("supplier", "Supplier"), ("both", "Client & Supplier")],
                        default="client",
                        max_length=20,
                    ),
                ),
                (
                    "payment_type",
                    models.CharField(
                        choices=[("cash", "Cash"), ("credit", "Credit")],
                        default="cash",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("country", models.CharField(blank=True, default="", max_length=100)),
                ("province", models.CharField(blank=True, default="", max_length=100)),
                ("use_count", models.PositiveIntegerField(default=0)),
                ("segment_settings", models.JSONField(blank=True, default=dict)),
                ("created_by", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["relation_type", "status"], name="rel_type_status_idx"),
                    models.Index(fields=["use_count"], name="rel_use_count_idx"),
                ],
            },
        ),
    ]
