# backend/urls.py

"""
BACK OFFICE URLS

Everything is served under /api/. The index at /api/ is built from
APP_MODULES, so a module listed there is both routed and advertised.

/api/health/ is public and reports:
- db:      a round trip to the default database
- posting: whether vouchers can be posted (switch on, one active chart)
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connections
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from accounting.services.account_resolver import get_active_chart
from accounting.services.exceptions import AccountResolutionError
from accounting.services.posting import posting_enabled

logger = logging.getLogger(__name__)

# (url prefix, urlconf, index key)
APP_MODULES = (
    ("relations/", "relations.api.urls", "relations"),
    ("segments/", "segments.api.urls", "segments"),
    ("profit-sharing/", "profit_sharing.api.urls", "profit_sharing"),
    ("accounting/", "accounting.api.urls", "accounting"),
    ("audit/", "audit.api.urls", "audit"),
)

INDEX_SCHEMA = {
    "type": "object",
    "properties": {
        "message": {"type": "string"},
        "auth": {"type": "object"},
        "docs": {"type": "object"},
        "modules": {"type": "object"},
    },
}

HEALTH_SCHEMA = {
    "type": "object",
    "properties": {
        "status": {"type": "string"},
        "db": {"type": "string"},
        "posting": {"type": "string"},
    },
}


@extend_schema(responses={200: INDEX_SCHEMA})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_index(request):
    return Response(
        {
            "message": "Travel agency back office",
            "auth": {
                "register": "/api/auth/register/",
                "login": "/api/auth/login/",
                "me": "/api/auth/me/",
                "jwt_create": "/api/auth/jwt/create/",
                "jwt_refresh": "/api/auth/jwt/refresh/",
            },
            "docs": {"swagger": "/api/docs/", "schema": "/api/schema/"},
            "modules": {key: f"/api/{prefix}" for prefix, _, key in APP_MODULES},
        }
    )


def _posting_state() -> str:
    if not posting_enabled():
        return "disabled"
    try:
        get_active_chart()
    except AccountResolutionError as exc:
        logger.warning("Posting not ready", extra={"error": str(exc)})
        return "no_active_chart"
    return "ok"


@extend_schema(responses={200: HEALTH_SCHEMA, 503: HEALTH_SCHEMA})
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except DatabaseError as e:
        logger.warning("Health check failed", extra={"error": str(e)})
        return Response({"status": "degraded", "db": "down", "posting": "unknown"}, status=503)

    posting = _posting_state()
    return Response(
        {
            "status": "ok" if posting in ("ok", "disabled") else "degraded",
            "db": "ok",
            "posting": posting,
        }
    )


ADMIN_PATH = settings.ADMIN_PATH.rstrip("/") + "/"

api_urlpatterns = [
    path("", api_index, name="api-root"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("auth/", include("users.urls")),
    *(path(prefix, include(urlconf)) for prefix, urlconf, _ in APP_MODULES),
]

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
