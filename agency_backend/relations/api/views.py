# relations/api/views.py

"""
PATH: relations/api/views.py

RELATIONS API

GET    /api/relations/                 list (filters + search + sort + pagination)
POST   /api/relations/                 create
GET    /api/relations/<id>/            detail
PATCH  /api/relations/<id>/            update
DELETE /api/relations/<id>/            delete (refused while in use)
POST   /api/relations/bulk/            import many
POST   /api/relations/bulk-delete/     delete many
GET    /api/relations/search/?q=       picker options
GET    /api/relations/lookups/         clients, suppliers, users, boxes, settings

Service errors come back as {"success": false, "error": "..."}.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.api import service_error_response
from common.exceptions import BackofficeError
from permissions.roles import (
    CAP_RELATIONS_DELETE,
    CAP_RELATIONS_EDIT,
    CAP_RELATIONS_VIEW,
    HasCapability,
)
from relations.api.serializers import (
    RelationBulkCreateSerializer,
    RelationBulkDeleteSerializer,
    RelationListQuerySerializer,
    RelationSerializer,
)
from relations.services.directory import get_relation, list_relations, search_relations
from relations.services.lookup_cache import LookupCache
from relations.services.management import (
    create_relation,
    create_relations_bulk,
    delete_relation,
    delete_relations_bulk,
    update_relation,
)


class RelationListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {
        "GET": CAP_RELATIONS_VIEW,
        "POST": CAP_RELATIONS_EDIT,
    }
    serializer_class = RelationSerializer

    @extend_schema(tags=["relations"], parameters=[RelationListQuerySerializer])
    def get(self, request):
        q = RelationListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)

        items, total = list_relations(**q.validated_data)
        return Response(
            {
                "results": RelationSerializer(items, many=True).data,
                "total": total,
                "page": q.validated_data["page"],
                "limit": q.validated_data["limit"],
            }
        )

    @extend_schema(tags=["relations"], request=RelationSerializer, responses={201: RelationSerializer})
    def post(self, request):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            relation = create_relation(user=request.user, data=s.validated_data)
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response(
            {"success": True, "relation": RelationSerializer(relation).data},
            status=status.HTTP_201_CREATED,
        )


class RelationDetailView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {
        "GET": CAP_RELATIONS_VIEW,
        "PATCH": CAP_RELATIONS_EDIT,
        "DELETE": CAP_RELATIONS_DELETE,
    }
    serializer_class = RelationSerializer

    @extend_schema(tags=["relations"])
    def get(self, request, relation_id):
        relation = get_relation(relation_id)
        if relation is None:
            return Response(
                {"success": False, "error": "Relation not found"},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(RelationSerializer(relation).data)

    @extend_schema(tags=["relations"], request=RelationSerializer)
    def patch(self, request, relation_id):
        s = self.get_serializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        try:
            relation = update_relation(user=request.user, relation_id=relation_id, data=s.validated_data)
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response({"success": True, "relation": RelationSerializer(relation).data})

    @extend_schema(tags=["relations"])
    def delete(self, request, relation_id):
        try:
            delete_relation(user=request.user, relation_id=relation_id)
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response({"success": True})


class RelationBulkCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_RELATIONS_EDIT
    serializer_class = RelationBulkCreateSerializer

    @extend_schema(tags=["relations"])
    def post(self, request):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            count = create_relations_bulk(user=request.user, rows=s.validated_data["relations"])
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response({"success": True, "count": count}, status=status.HTTP_201_CREATED)


class RelationBulkDeleteView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_RELATIONS_DELETE
    serializer_class = RelationBulkDeleteSerializer

    @extend_schema(tags=["relations"])
    def post(self, request):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            count = delete_relations_bulk(user=request.user, relation_ids=s.validated_data["ids"])
        except BackofficeError as exc:
            return service_error_response(exc)

        return Response({"success": True, "count": count})


class RelationSearchView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_RELATIONS_VIEW

    @extend_schema(tags=["relations"], responses={200: dict})
    def get(self, request):
        include_inactive = (request.query_params.get("include_inactive") or "").lower() in ("1", "true")
        options = search_relations(
            search=request.query_params.get("q"),
            include_inactive=include_inactive,
            relation_type=request.query_params.get("relation_type"),
        )
        return Response(options)


class LookupsView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_RELATIONS_VIEW

    @extend_schema(tags=["relations"], responses={200: dict})
    def get(self, request):
        cache = LookupCache()
        try:
            data = cache.get()
        except BackofficeError as exc:
            return service_error_response(exc)
        return Response(data.as_dict())
