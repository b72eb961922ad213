# profit_sharing/api/views.py

"""
PATH: profit_sharing/api/views.py

PROFIT SHARING API (capability profit_sharing.manage)

GET    /api/profit-sharing/months/                      system months + manual distributions
GET    /api/profit-sharing/months/<id>/shares/          shares of a month (or distribution lines)
POST   /api/profit-sharing/shares/                      create share
PATCH  /api/profit-sharing/shares/<uuid>/               update share
DELETE /api/profit-sharing/shares/<uuid>/               delete share
POST   /api/profit-sharing/distributions/               create manual distribution (posts)
GET    /api/profit-sharing/distributions/<uuid>/        detail
PUT    /api/profit-sharing/distributions/<uuid>/        replace (posts the difference)
DELETE /api/profit-sharing/distributions/<uuid>/        delete (posts a reversal)
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.api import service_error_response
from common.exceptions import BackofficeError
from permissions.roles import CAP_PROFIT_SHARING_MANAGE, HasCapability
from profit_sharing.api.serializers import (
    ManualDistributionInputSerializer,
    ManualDistributionSerializer,
    MonthlyProfitRowSerializer,
    ProfitShareCreateSerializer,
    ProfitShareSerializer,
    ProfitShareUpdateSerializer,
    ShareRowSerializer,
)
from profit_sharing.models import ManualProfitDistribution
from profit_sharing.services.manual_distributions import (
    delete_manual_distribution,
    save_manual_distribution,
    update_manual_distribution,
)
from profit_sharing.services.monthly_profits import get_profit_shares_for_month, list_monthly_profits
from profit_sharing.services.profit_shares import (
    delete_profit_share,
    save_profit_share,
    update_profit_share,
)


class ProfitSharingView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_PROFIT_SHARING_MANAGE


class MonthlyProfitListView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_PROFIT_SHARING_MANAGE

    @extend_schema(tags=["profit-sharing"], responses=MonthlyProfitRowSerializer(many=True))
    def get(self, request):
        return Response(MonthlyProfitRowSerializer(list_monthly_profits(), many=True).data)


class MonthSharesView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_PROFIT_SHARING_MANAGE

    @extend_schema(tags=["profit-sharing"], responses=ShareRowSerializer(many=True))
    def get(self, request, profit_id):
        return Response(ShareRowSerializer(get_profit_shares_for_month(profit_id), many=True).data)


class ProfitShareCreateView(ProfitSharingView):
    serializer_class = ProfitShareCreateSerializer

    @extend_schema(tags=["profit-sharing"], responses={201: ProfitShareSerializer})
    def post(self, request):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            share = save_profit_share(user=request.user, **s.validated_data)
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response(
            {"success": True, "share": ProfitShareSerializer(share).data},
            status=status.HTTP_201_CREATED,
        )


class ProfitShareDetailView(ProfitSharingView):
    serializer_class = ProfitShareUpdateSerializer

    @extend_schema(tags=["profit-sharing"])
    def patch(self, request, share_id):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            share = update_profit_share(user=request.user, share_id=share_id, **s.validated_data)
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response({"success": True, "share": ProfitShareSerializer(share).data})

    @extend_schema(tags=["profit-sharing"])
    def delete(self, request, share_id):
        try:
            delete_profit_share(user=request.user, share_id=share_id)
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response({"success": True})


class ManualDistributionCreateView(ProfitSharingView):
    serializer_class = ManualDistributionInputSerializer

    @extend_schema(tags=["profit-sharing"], responses={201: ManualDistributionSerializer})
    def post(self, request):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            distribution = save_manual_distribution(user=request.user, **s.validated_data)
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response(
            {"success": True, "distribution": ManualDistributionSerializer(distribution).data},
            status=status.HTTP_201_CREATED,
        )


class ManualDistributionDetailView(ProfitSharingView):
    serializer_class = ManualDistributionInputSerializer

    @extend_schema(tags=["profit-sharing"], responses=ManualDistributionSerializer)
    def get(self, request, distribution_id):
        distribution = ManualProfitDistribution.objects.filter(pk=distribution_id).first()
        if distribution is None:
            return Response(
                {"success": False, "error": "Manual distribution not found"},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(ManualDistributionSerializer(distribution).data)

    @extend_schema(tags=["profit-sharing"])
    def put(self, request, distribution_id):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            distribution = update_manual_distribution(
                user=request.user,
                distribution_id=distribution_id,
                **s.validated_data,
            )
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response({"success": True, "distribution": ManualDistributionSerializer(distribution).data})

    @extend_schema(tags=["profit-sharing"])
    def delete(self, request, distribution_id):
        try:
            delete_manual_distribution(user=request.user, distribution_id=distribution_id)
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response({"success": True})
