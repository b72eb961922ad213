# profit_sharing/api/urls.py

from django.urls import path

from profit_sharing.api.views import (
    ManualDistributionCreateView,
    ManualDistributionDetailView,
    MonthlyProfitListView,
    MonthSharesView,
    ProfitShareCreateView,
    ProfitShareDetailView,
)

urlpatterns = [
    path("months/", MonthlyProfitListView.as_view(), name="monthly-profits"),
    path("months/<str:profit_id>/shares/", MonthSharesView.as_view(), name="month-shares"),
    path("shares/", ProfitShareCreateView.as_view(), name="profit-shares"),
    path("shares/<uuid:share_id>/", ProfitShareDetailView.as_view(), name="profit-share-detail"),
    path("distributions/", ManualDistributionCreateView.as_view(), name="manual-distributions"),
    path(
        "distributions/<uuid:distribution_id>/",
        ManualDistributionDetailView.as_view(),
        name="manual-distribution-detail",
    ),
]
