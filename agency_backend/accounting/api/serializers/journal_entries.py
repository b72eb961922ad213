# accounting/api/serializers/journal_entries.py

from rest_framework import serializers

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry


class JournalLineSerializer(serializers.ModelSerializer):
    account_code = serializers.CharField(source="account.code", read_only=True)
    account_name = serializers.CharField(source="account.name", read_only=True)

    class Meta:
        model = LedgerEntry
        fields = ("id", "account_code", "account_name", "entry_type", "amount")
        read_only_fields = fields


class JournalEntrySerializer(serializers.ModelSerializer):
    lines = JournalLineSerializer(source="ledger_entries", many=True, read_only=True)

    class Meta:
        model = JournalEntry
        fields = (
            "id",
            "reference",
            "source_type",
            "description",
            "currency",
            "created_by",
            "posted_at",
            "created_at",
            "lines",
        )
        read_only_fields = fields
