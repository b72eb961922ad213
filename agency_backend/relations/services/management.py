# relations/services/management.py

"""
RELATIONS MANAGEMENT (WRITE SIDE)

Every mutation:
- requires an authenticated actor (AuthorizationError otherwise)
- validates through the model (DomainValidationError on bad input)
- runs in one transaction
- emits an audit event (target_type CLIENT) once committed

A relation that is referenced by saved business records (use_count > 0)
cannot be deleted.
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F, ProtectedError

from audit.events import ACTION_CREATE, ACTION_DELETE, ACTION_UPDATE, emit_audit_event
from common.db import persistence_guard
from common.exceptions import DomainValidationError
from relations.models import Relation
from relations.services.directory import get_relation
from users.services.identity import resolve_actor

logger = logging.getLogger(__name__)

AUDIT_TARGET = "CLIENT"

EDITABLE_FIELDS = (
    "name",
    "code",
    "phone",
    "type",
    "relation_type",
    "payment_type",
    "status",
    "country",
    "province",
    "segment_settings",
)


class RelationInUseError(DomainValidationError):
    pass


def _clean_payload(data: dict) -> dict:
    # server-owned fields (use_count, created_by, timestamps) are never taken from input
    return {k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS and v is not None}


def _validate(relation: Relation) -> None:
    try:
        relation.full_clean()
    except ValidationError as exc:
        raise DomainValidationError(_format_validation_error(exc)) from exc


def _format_validation_error(exc: ValidationError) -> str:
    if hasattr(exc, "message_dict"):
        return "; ".join(f"{field}: {' '.join(msgs)}" for field, msgs in exc.message_dict.items())
    return " ".join(exc.messages)


def _require_relation(relation_id) -> Relation:
    relation = get_relation(relation_id)
    if relation is None:
        raise DomainValidationError(f"Relation {relation_id} not found")
    return relation


def create_relation(*, user, data: dict) -> Relation:
    actor = resolve_actor(user)

    relation = Relation(**_clean_payload(data), created_by=actor.name)
    _validate(relation)

    with persistence_guard("create relation"), transaction.atomic():
        relation.save()
        emit_audit_event(
            actor,
            action=ACTION_CREATE,
            target_type=AUDIT_TARGET,
            description=f"Created relation {relation.name} (ID: {relation.id})",
            target_id=relation.id,
        )

    logger.info("Relation created", extra={"relation_id": str(relation.id)})
    return relation


def create_relations_bulk(*, user, rows: list[dict]) -> int:
    """Import many relations at once. All rows are validated before anything is written."""
    actor = resolve_actor(user)

    relations = []
    for index, row in enumerate(rows or [], start=1):
        payload = _clean_payload(row)
        payload.setdefault("type", Relation.Type.INDIVIDUAL)
        payload.setdefault("relation_type", Relation.RelationType.CLIENT)
        payload.setdefault("status", Relation.Status.ACTIVE)

        relation = Relation(**payload, created_by=f"Imported by {actor.name}")
        try:
            relation.full_clean()
        except ValidationError as exc:
            raise DomainValidationError(f"Row {index}: {_format_validation_error(exc)}") from exc
        relations.append(relation)

    if not relations:
        raise DomainValidationError("No relations to import")

    with persistence_guard("import relations"), transaction.atomic():
        Relation.objects.bulk_create(relations)
        emit_audit_event(
            actor,
            action=ACTION_CREATE,
            target_type=AUDIT_TARGET,
            description=f"Imported {len(relations)} relations.",
        )

    logger.info("Relations imported", extra={"count": len(relations)})
    return len(relations)


def update_relation(*, user, relation_id, data: dict) -> Relation:
    actor = resolve_actor(user)

    with persistence_guard("update relation"), transaction.atomic():
        relation = _require_relation(relation_id)
        for field, value in _clean_payload(data).items():
            setattr(relation, field, value)

        _validate(relation)
        relation.save()

        emit_audit_event(
            actor,
            action=ACTION_UPDATE,
            target_type=AUDIT_TARGET,
            description=f"Updated relation (ID: {relation.id})",
            target_id=relation.id,
        )

    return relation


def delete_relation(*, user, relation_id) -> None:
    actor = resolve_actor(user)

    with persistence_guard("delete relation"), transaction.atomic():
        relation = _require_relation(relation_id)
        if relation.use_count > 0:
            raise RelationInUseError(
                "This relation cannot be deleted because financial records reference it."
            )

        name = relation.name
        relation_pk = relation.pk
        try:
            relation.delete()
        except ProtectedError as exc:
            raise RelationInUseError(
                "This relation cannot be deleted because financial records reference it."
            ) from exc

        emit_audit_event(
            actor,
            action=ACTION_DELETE,
            target_type=AUDIT_TARGET,
            description=f"Deleted relation {name} (ID: {relation_pk})",
            target_id=relation_pk,
        )


def delete_relations_bulk(*, user, relation_ids: list) -> int:
    """
    Delete several relations in one go.
    The whole batch is refused if any of them is in use.
    """
    actor = resolve_actor(user)
    ids = [str(i) for i in (relation_ids or []) if i]
    if not ids:
        raise DomainValidationError("No relations selected")

    with persistence_guard("delete relations"), transaction.atomic():
        try:
            qs = Relation.objects.filter(pk__in=ids)
            in_use = list(qs.filter(use_count__gt=0).values_list("name", flat=True))
        except ValidationError as exc:
            raise DomainValidationError("Invalid relation id in selection") from exc

        if in_use:
            raise RelationInUseError(
                f"Relations in use cannot be deleted: {', '.join(sorted(in_use))}"
            )

        try:
            deleted, _ = qs.delete()
        except ProtectedError as exc:
            raise RelationInUseError(
                "Some of the selected relations are referenced by financial records and cannot be deleted."
            ) from exc

        emit_audit_event(
            actor,
            action=ACTION_DELETE,
            target_type=AUDIT_TARGET,
            description=f"Deleted {deleted} relations in bulk.",
        )

    return deleted


def increment_use_count(relation_ids) -> None:
    """Called by services that save records referencing relations."""
    ids = {str(i) for i in relation_ids if i}
    if ids:
        Relation.objects.filter(pk__in=ids).update(use_count=F("use_count") + 1)
