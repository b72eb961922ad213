# accounting/api/serializers/accounts.py

from rest_framework import serializers

from accounting.models.account import Account


class AccountListSerializer(serializers.ModelSerializer):
    """
    Read-only listing of active-chart accounts.
    `code` is the account id used by posting requests.
    """

    class Meta:
        model = Account
        fields = ("id", "code", "name", "account_type", "is_cash_box", "is_active")
        read_only_fields = fields
