"""
PATH: accounting/api/views/trial_balance.py

TRIAL BALANCE API VIEW (READ-ONLY)

GET /api/accounting/trial-balance/?currency=USD&as_of_date=2026-01-31

- One currency per report (defaults to DEFAULT_CURRENCY)
- Requires capability reports.view_accounting
"""

from __future__ import annotations

from datetime import datetime, time

from django.conf import settings
from django.utils.dateparse import parse_date
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.services.exceptions import AccountResolutionError
from accounting.services.trial_balance_service import TrialBalanceService
from common.api import service_error_response
from permissions.roles import CAP_REPORTS_VIEW_ACCOUNTING, HasCapability


@extend_schema(
    tags=["accounting"],
    parameters=[
        OpenApiParameter(name="currency", type=str, required=False),
        OpenApiParameter(
            name="as_of_date",
            type=str,
            required=False,
            description="End-of-day snapshot (YYYY-MM-DD).",
        ),
    ],
    responses={200: dict},
)
class TrialBalanceView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_REPORTS_VIEW_ACCOUNTING

    def get(self, request):
        currency = (request.query_params.get("currency") or settings.DEFAULT_CURRENCY).strip().upper()
        if currency not in settings.SUPPORTED_CURRENCIES:
            return Response(
                {"success": False, "error": f"Unsupported currency: {currency}"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        as_of = None
        as_of_date_param = request.query_params.get("as_of_date")
        if as_of_date_param:
            d = parse_date(str(as_of_date_param).strip())
            if d is None:
                return Response(
                    {"success": False, "error": "Invalid as_of_date (expected YYYY-MM-DD)"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            as_of = datetime.combine(d, time.max.replace(microsecond=0))

        try:
            data = TrialBalanceService().generate(currency=currency, as_of=as_of)
        except AccountResolutionError as exc:
            return service_error_response(exc)

        return Response(data, status=status.HTTP_200_OK)
