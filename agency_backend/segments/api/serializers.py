# segments/api/serializers.py

from django.conf import settings
from rest_framework import serializers

from segments.domain import RATE_FIXED, RATE_PERCENTAGE, SERVICES
from segments.models import SegmentPeriod


class RateSpecSerializer(serializers.Serializer):
    kind = serializers.ChoiceField(choices=[RATE_FIXED, RATE_PERCENTAGE])
    value = serializers.DecimalField(max_digits=14, decimal_places=4, min_value=0)


class CompanyEntryInputSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True)
    client_id = serializers.UUIDField(required=False, allow_null=True)
    tickets = serializers.IntegerField(required=False, default=0, min_value=0)
    visas = serializers.IntegerField(required=False, default=0, min_value=0)
    hotels = serializers.IntegerField(required=False, default=0, min_value=0)
    groups = serializers.IntegerField(required=False, default=0, min_value=0)
    rates = serializers.DictField(child=RateSpecSerializer(), required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_rates(self, value):
        unknown = set(value) - set(SERVICES)
        if unknown:
            raise serializers.ValidationError(f"Unknown services: {', '.join(sorted(unknown))}")
        return value


class PartnerInputSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True)
    partner_id = serializers.UUIDField()
    partner_name = serializers.CharField(required=False, allow_blank=True)
    percentage = serializers.DecimalField(max_digits=9, decimal_places=4)


class PeriodInputSerializer(serializers.Serializer):
    from_date = serializers.DateField(required=False, allow_null=True)
    to_date = serializers.DateField(required=False, allow_null=True)
    entry_date = serializers.DateField(required=False, allow_null=True)
    currency = serializers.CharField(required=False, max_length=3)
    has_partner = serializers.BooleanField(required=False, default=False)
    firm_retention_percentage = serializers.DecimalField(
        max_digits=9,
        decimal_places=4,
        required=False,
        allow_null=True,
    )
    partners = PartnerInputSerializer(many=True, required=False)
    entries = CompanyEntryInputSerializer(many=True, required=False)

    def validate_currency(self, value):
        return (value or settings.DEFAULT_CURRENCY).strip().upper()

    def to_internal_value(self, data):
        values = super().to_internal_value(data)
        values.setdefault("currency", settings.DEFAULT_CURRENCY)
        return values


class SegmentPeriodSerializer(serializers.ModelSerializer):
    entry_count = serializers.IntegerField(source="entries.count", read_only=True)

    class Meta:
        model = SegmentPeriod
        fields = [
            "id",
            "from_date",
            "to_date",
            "entry_date",
            "currency",
            "has_partner",
            "firm_retention_percentage",
            "grand_total",
            "firm_total",
            "partner_pool_total",
            "distributed_total",
            "status",
            "entry_count",
            "created_by_name",
            "created_at",
        ]
        read_only_fields = fields
