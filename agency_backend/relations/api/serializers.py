# relations/api/serializers.py

from rest_framework import serializers

from common.exceptions import DomainValidationError
from relations.models import Relation
from segments.converters import rate_to_payload, rates_from_settings
from segments.domain import SERVICES


def validate_segment_settings(value):
    """Per-service default rates, checked with the same converter the segment engine reads them with."""
    if value in (None, ""):
        return {}
    if not isinstance(value, dict):
        raise serializers.ValidationError("segment_settings must be an object")

    for service, spec in value.items():
        if service not in SERVICES:
            raise serializers.ValidationError(f"Unknown segment service: {service}")
        if not isinstance(spec, dict):
            raise serializers.ValidationError(
                f"{service}: expected {{'kind': 'fixed'|'percentage', 'value': n}}"
            )

    try:
        rates = rates_from_settings(value)
    except DomainValidationError as exc:
        raise serializers.ValidationError(str(exc)) from exc

    # stored normalized: lower-case kind, decimal string value
    return {service: rate_to_payload(rate) for service, rate in rates.items()}


class RelationSerializer(serializers.ModelSerializer):
    label = serializers.CharField(read_only=True)

    class Meta:
        model = Relation
        fields = [
            "id",
            "name",
            "code",
            "phone",
            "type",
            "relation_type",
            "payment_type",
            "status",
            "country",
            "province",
            "use_count",
            "segment_settings",
            "label",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "use_count", "label", "created_by", "created_at", "updated_at"]

    def validate_segment_settings(self, value):
        return validate_segment_settings(value)


class RelationListQuerySerializer(serializers.Serializer):
    relation_type = serializers.CharField(required=False, allow_blank=True)
    payment_type = serializers.CharField(required=False, allow_blank=True)
    status = serializers.CharField(required=False, allow_blank=True)
    include_inactive = serializers.BooleanField(required=False, default=False)
    country = serializers.CharField(required=False, allow_blank=True)
    province = serializers.CharField(required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True)
    sort_by = serializers.CharField(required=False, default="use_count_desc")
    page = serializers.IntegerField(required=False, default=1, min_value=1)
    limit = serializers.IntegerField(required=False, default=15, min_value=1, max_value=500)
    all = serializers.BooleanField(required=False, default=False)


class RelationBulkCreateSerializer(serializers.Serializer):
    relations = RelationSerializer(many=True)


class RelationBulkDeleteSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
