# audit/api/serializers.py

from rest_framework import serializers

from audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = AuditLog
        fields = [
            "id",
            "user_id",
            "user_name",
            "action",
            "target_type",
            "target_id",
            "description",
            "created_at",
        ]
        read_only_fields = fields
