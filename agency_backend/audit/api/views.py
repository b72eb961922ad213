# audit/api/views.py

"""
PATH: audit/api/views.py

AUDIT LOG API (READ-ONLY)

GET /api/audit/logs/
    ?action=CREATE|UPDATE|DELETE
    ?target_type=CLIENT
    ?target_id=<id>
    ?user_id=<uuid>

Requires capability audit.view. Append-only model, so no write methods.
"""

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.viewsets import ReadOnlyModelViewSet

from audit.api.serializers import AuditLogSerializer
from audit.models import AuditLog
from permissions.roles import CAP_AUDIT_VIEW, HasCapability


@extend_schema(tags=["audit"])
class AuditLogViewSet(ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_AUDIT_VIEW
    serializer_class = AuditLogSerializer
    http_method_names = ["get", "head", "options"]

    queryset = AuditLog.objects.all().order_by("-created_at", "-id")
    filterset_fields = ["action", "target_type", "target_id", "user_id"]
