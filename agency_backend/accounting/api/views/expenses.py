# PATH: accounting/api/views/expenses.py

"""
PATH: accounting/api/views/expenses.py

EXPENSE VOUCHERS API

GET  /api/accounting/expense-vouchers/
    - Requires capability reports.view_accounting

POST /api/accounting/expense-vouchers/
    - Requires capability accounting.post
    - Posts Dr expense_<type> / Cr cash box and stores the voucher (atomic)
    - Returns {"success": true, "voucherId": "...", "voucher": {...}}
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.serializers.expenses import (
    ExpenseVoucherCreateSerializer,
    ExpenseVoucherSerializer,
)
from accounting.models.expense import ExpenseVoucher
from accounting.services.expense_service import create_expense_voucher
from common.api import service_error_response
from common.exceptions import BackofficeError
from permissions.roles import CAP_ACCOUNTING_POST, CAP_REPORTS_VIEW_ACCOUNTING, HasCapability


class ExpenseVoucherListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {
        "GET": CAP_REPORTS_VIEW_ACCOUNTING,
        "POST": CAP_ACCOUNTING_POST,
    }
    serializer_class = ExpenseVoucherCreateSerializer
    queryset = ExpenseVoucher.objects.all()

    @extend_schema(
        tags=["accounting"],
        responses=ExpenseVoucherSerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        qs = ExpenseVoucher.objects.order_by("-expense_date", "-created_at")
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(ExpenseVoucherSerializer(page, many=True).data)
        return Response(ExpenseVoucherSerializer(qs, many=True).data)

    @extend_schema(
        tags=["accounting"],
        request=ExpenseVoucherCreateSerializer,
        responses={201: dict, 400: dict, 401: dict, 403: dict, 503: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            voucher = create_expense_voucher(
                user=request.user,
                expense_date=data.get("date"),
                expense_type=data["expense_type"],
                amount=data["amount"],
                currency=data["currency"],
                box_account_code=data.get("box_id"),
                payee=data.get("payee", ""),
                notes=data.get("notes", ""),
                exchange_rate=data.get("exchange_rate"),
            )
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response(
            {
                "success": True,
                "voucherId": str(voucher.journal_entry_id),
                "voucher": ExpenseVoucherSerializer(voucher).data,
            },
            status=status.HTTP_201_CREATED,
        )
