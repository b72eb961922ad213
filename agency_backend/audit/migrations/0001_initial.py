from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id", models.CharField(max_length=64)),
                ("user_name", models.CharField(max_length=255)),
                (
                    "action",
                    models.CharField(
                        choices=[("CREATE", "Create"), ("UPDATE", "Update"), ("DELETE", "Delete")],
                        max_length=10,
                    ),
                ),
                (
                    "target_type",
                    models.CharField(help_text="CLIENT, SEGMENT, PROFIT_SHARE, VOUCHER, ...", max_length=50),
                ),
                ("target_id", models.CharField(blank=True, default="", max_length=100)),
                ("description", models.TextField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["created_at"], name="audit_audit_created_8f1c2a_idx"),
                    models.Index(fields=["target_type", "target_id"], name="audit_audit_target__3b7e91_idx"),
                    models.Index(fields=["user_id"], name="audit_audit_user_id_c4d2e0_idx"),
                ],
            },
        ),
    ]
