# segments/api/views.py

"""
PATH: segments/api/views.py

SEGMENT PERIODS API

POST /api/segments/periods/preview/   compute a draft (no writes)
GET  /api/segments/periods/           saved periods (?from_date, ?to_date, ?currency)
POST /api/segments/periods/           validate + save (+ ledger postings)
GET  /api/segments/periods/<id>/      one saved period with its entries
"""

from django.utils.dateparse import parse_date
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.api import service_error_response
from common.exceptions import BackofficeError
from permissions.roles import CAP_SEGMENTS_SAVE, CAP_SEGMENTS_VIEW, HasCapability
from segments.api.serializers import PeriodInputSerializer, SegmentPeriodSerializer
from segments.converters import period_to_payload, summary_to_payload, totals_to_payload
from segments.models import SegmentPeriod
from segments.services.apportionment import aggregate_period
from segments.services.period_service import (
    PeriodValidationError,
    build_draft,
    get_period_draft,
    list_periods,
    preview_period,
    save_period,
)


def _validation_response(exc: PeriodValidationError) -> Response:
    return Response(
        {"success": False, "error": str(exc), "errors": exc.messages},
        status=status.HTTP_400_BAD_REQUEST,
    )


class SegmentPeriodPreviewView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_SEGMENTS_VIEW
    serializer_class = PeriodInputSerializer

    @extend_schema(tags=["segments"], responses={200: dict})
    def post(self, request):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            preview = preview_period(build_draft(s.validated_data))
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response(
            {
                "success": True,
                "period": period_to_payload(preview["draft"]),
                "totals": totals_to_payload(preview["totals"]),
                "summary": summary_to_payload(preview["summary"]),
                "errors": preview["errors"],
                "is_valid": not preview["errors"],
            }
        )


class SegmentPeriodListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {
        "GET": CAP_SEGMENTS_VIEW,
        "POST": CAP_SEGMENTS_SAVE,
    }
    serializer_class = PeriodInputSerializer

    @extend_schema(
        tags=["segments"],
        parameters=[
            OpenApiParameter(name="from_date", type=str, required=False),
            OpenApiParameter(name="to_date", type=str, required=False),
            OpenApiParameter(name="currency", type=str, required=False),
        ],
        responses=SegmentPeriodSerializer(many=True),
    )
    def get(self, request):
        qs = list_periods(
            from_date=parse_date(request.query_params.get("from_date") or ""),
            to_date=parse_date(request.query_params.get("to_date") or ""),
            currency=request.query_params.get("currency"),
        )
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(SegmentPeriodSerializer(page, many=True).data)
        return Response(SegmentPeriodSerializer(qs, many=True).data)

    @extend_schema(tags=["segments"], responses={201: dict, 400: dict, 401: dict, 503: dict})
    def post(self, request):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            saved = save_period(user=request.user, draft=build_draft(s.validated_data))
        except PeriodValidationError as exc:
            return _validation_response(exc)
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response(
            {
                "success": True,
                "period_id": saved.period.pk,
                "invoice_numbers": list(saved.period.entries.values_list("invoice_number", flat=True)),
                "voucher_ids": list(saved.voucher_ids),
                "totals": totals_to_payload(saved.totals),
                "period": period_to_payload(saved.draft),
            },
            status=status.HTTP_201_CREATED,
        )


class SegmentPeriodDetailView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_SEGMENTS_VIEW
    queryset = SegmentPeriod.objects.all()

    @extend_schema(tags=["segments"], responses={200: dict})
    def get(self, request, period_id):
        try:
            draft = get_period_draft(period_id)
        except BackofficeError as exc:
            return service_error_response(exc)

        if draft is None:
            return Response(
                {"success": False, "error": "Segment period not found"},
                status=status.HTTP_404_NOT_FOUND,
            )

        return Response(
            {
                "id": period_id,
                "period": period_to_payload(draft),
                "totals": totals_to_payload(aggregate_period(draft.entries)),
            }
        )
