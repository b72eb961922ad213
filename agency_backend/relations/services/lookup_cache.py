# relations/services/lookup_cache.py

"""
LOOKUP CACHE

Reference data the back office pickers need on every screen:
- relations (split into clients and suppliers; "both" appears in each)
- users
- cash boxes (cash-box accounts of the active chart)
- app settings (currencies, firm retention default)

A LookupCache is built per request/session and handed to whoever needs it.
get() loads once; refresh() reloads everything explicitly. Nothing is shared
between instances.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from django.conf import settings
from django.contrib.auth import get_user_model

from accounting.services.account_resolver import list_cash_boxes
from relations.models import Relation
from relations.services.directory import search_relations

logger = logging.getLogger(__name__)

Loader = Callable[[], Any]

LOADER_KEYS = ("relations", "users", "boxes", "settings")


@dataclass(frozen=True)
class LookupData:
    clients: list = field(default_factory=list)
    suppliers: list = field(default_factory=list)
    users: list = field(default_factory=list)
    boxes: list = field(default_factory=list)
    settings: dict = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "clients": self.clients,
            "suppliers": self.suppliers,
            "users": self.users,
            "boxes": self.boxes,
            "settings": self.settings,
        }


def load_relations() -> dict:
    return {
        "clients": search_relations(relation_type=Relation.RelationType.CLIENT),
        "suppliers": search_relations(relation_type=Relation.RelationType.SUPPLIER),
    }


def load_users() -> list[dict]:
    User = get_user_model()
    return [
        {
            "value": str(u.pk),
            "label": u.display_name,
            "role": u.role,
            "box_account_code": u.box_account_code,
        }
        for u in User.objects.filter(is_active=True).order_by("first_name", "username")
    ]


def load_boxes() -> list[dict]:
    return [{"value": a.code, "label": a.name} for a in list_cash_boxes()]


def load_settings() -> dict:
    return {
        "default_currency": settings.DEFAULT_CURRENCY,
        "supported_currencies": list(settings.SUPPORTED_CURRENCIES),
        "firm_retention_default": str(settings.SEGMENT_FIRM_RETENTION_DEFAULT),
    }


def default_loaders() -> dict[str, Loader]:
    return {
        "relations": load_relations,
        "users": load_users,
        "boxes": load_boxes,
        "settings": load_settings,
    }


class LookupCache:
    def __init__(self, loaders: Mapping[str, Loader] | None = None):
        merged = default_loaders()
        merged.update(loaders or {})

        unknown = set(merged) - set(LOADER_KEYS)
        if unknown:
            raise ValueError(f"Unknown lookup loaders: {', '.join(sorted(unknown))}")

        self._loaders = merged
        self._data: LookupData | None = None

    @property
    def loaded(self) -> bool:
        return self._data is not None

    def get(self) -> LookupData:
        if self._data is None:
            self._data = self._load()
        return self._data

    def refresh(self) -> LookupData:
        self._data = self._load()
        return self._data

    def _load(self) -> LookupData:
        relations = self._loaders["relations"]() or {}
        data = LookupData(
            clients=list(relations.get("clients", [])),
            suppliers=list(relations.get("suppliers", [])),
            users=list(self._loaders["users"]() or []),
            boxes=list(self._loaders["boxes"]() or []),
            settings=dict(self._loaders["settings"]() or {}),
        )
        logger.debug(
            "Lookup data loaded",
            extra={"clients": len(data.clients), "suppliers": len(data.suppliers)},
        )
        return data
