# segments/api/urls.py

from django.urls import path

from segments.api.views import (
    SegmentPeriodDetailView,
    SegmentPeriodListCreateView,
    SegmentPeriodPreviewView,
)

urlpatterns = [
    path("periods/", SegmentPeriodListCreateView.as_view(), name="segment-periods"),
    path("periods/preview/", SegmentPeriodPreviewView.as_view(), name="segment-period-preview"),
    path("periods/<int:period_id>/", SegmentPeriodDetailView.as_view(), name="segment-period-detail"),
]
