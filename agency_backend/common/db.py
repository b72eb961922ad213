# common/db.py

"""
PERSISTENCE GUARD

Translate low-level database connectivity failures into PersistenceUnavailable
so the action boundary can report them without leaking driver exceptions.

Integrity errors are NOT translated here; callers own those semantics.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from django.db import InterfaceError, OperationalError

from common.exceptions import PersistenceUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def persistence_guard(operation: str):
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        logger.exception(
            "Database unavailable",
            extra={"operation": operation},
        )
        raise PersistenceUnavailable(
            f"Database not available while trying to {operation}."
        ) from exc
