# accounting/api/views/accounts.py

"""
PATH: accounting/api/views/accounts.py

ACTIVE CHART ACCOUNTS API (READ-ONLY)

GET /api/accounting/accounts/
GET /api/accounting/accounts/?cash_boxes=1   (cash boxes only)
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.serializers.accounts import AccountListSerializer
from accounting.models.account import Account
from accounting.services.account_resolver import get_active_chart
from accounting.services.exceptions import AccountResolutionError
from common.api import service_error_response


class ActiveChartAccountsView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = AccountListSerializer

    @extend_schema(
        tags=["accounting"],
        parameters=[OpenApiParameter(name="cash_boxes", type=bool, required=False)],
        responses=AccountListSerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        try:
            chart = get_active_chart()
        except AccountResolutionError as exc:
            return service_error_response(exc)

        if (request.query_params.get("cash_boxes") or "").lower() in ("1", "true", "yes"):
            qs = Account.objects.cash_boxes(chart)
        else:
            qs = Account.objects.usable(chart)

        return Response(AccountListSerializer(qs, many=True).data, status=status.HTTP_200_OK)
