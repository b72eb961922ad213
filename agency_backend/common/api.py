# common/api.py

"""
ACTION BOUNDARY HELPERS

Views call services inside try/except BackofficeError and turn the failure
into {"success": false, "error": "..."} with a matching status code.
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response

from common.exceptions import (
    AuthorizationError,
    BackofficeError,
    DomainValidationError,
    PersistenceUnavailable,
)

logger = logging.getLogger(__name__)


def error_status_for(exc: BackofficeError) -> int:
    if isinstance(exc, AuthorizationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, PersistenceUnavailable):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(exc, DomainValidationError):
        return status.HTTP_400_BAD_REQUEST
    # posting and other service failures are reported as bad requests
    return status.HTTP_400_BAD_REQUEST


def service_error_response(exc: BackofficeError) -> Response:
    code = error_status_for(exc)
    logger.info(
        "Action failed",
        extra={"error_type": type(exc).__name__, "status_code": code},
    )
    return Response({"success": False, "error": str(exc)}, status=code)
