# accounting/api/serializers/expenses.py

from django.conf import settings
from rest_framework import serializers

from accounting.models.expense import ExpenseVoucher


class ExpenseVoucherSerializer(serializers.ModelSerializer):
    """
    Output serializer (DB truth).
    """

    voucher_id = serializers.CharField(source="journal_entry_id", read_only=True)
    expense_account_code = serializers.CharField(read_only=True)

    class Meta:
        model = ExpenseVoucher
        fields = [
            "id",
            "voucher_id",
            "expense_date",
            "expense_type",
            "expense_account_code",
            "amount",
            "currency",
            "exchange_rate",
            "box_account_code",
            "payee",
            "notes",
            "created_by",
            "created_by_name",
            "created_at",
        ]
        read_only_fields = fields


class ExpenseVoucherCreateSerializer(serializers.Serializer):
    """
    Input serializer (Swagger-visible).
    """

    date = serializers.DateField(required=False)
    expense_type = serializers.CharField(max_length=40)
    amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    currency = serializers.CharField(max_length=3)
    box_id = serializers.CharField(required=False, allow_blank=True)
    payee = serializers.CharField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    exchange_rate = serializers.DecimalField(
        max_digits=16, decimal_places=6, required=False, allow_null=True
    )

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("amount must be > 0")
        return value

    def validate_currency(self, value):
        code = (value or "").strip().upper()
        if code not in settings.SUPPORTED_CURRENCIES:
            raise serializers.ValidationError(
                f"currency must be one of {', '.join(settings.SUPPORTED_CURRENCIES)}"
            )
        return code
