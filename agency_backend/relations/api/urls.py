# relations/api/urls.py

from django.urls import path

from relations.api.views import (
    LookupsView,
    RelationBulkCreateView,
    RelationBulkDeleteView,
    RelationDetailView,
    RelationListCreateView,
    RelationSearchView,
)

urlpatterns = [
    path("", RelationListCreateView.as_view(), name="relations"),
    path("bulk/", RelationBulkCreateView.as_view(), name="relations-bulk"),
    path("bulk-delete/", RelationBulkDeleteView.as_view(), name="relations-bulk-delete"),
    path("search/", RelationSearchView.as_view(), name="relations-search"),
    path("lookups/", LookupsView.as_view(), name="lookups"),
    path("<uuid:relation_id>/", RelationDetailView.as_view(), name="relation-detail"),
]
