# audit/events.py

"""
AUDIT EVENTS

Services announce a completed state transition by calling emit_audit_event().
The event is dispatched on transaction commit through the `audit_event`
signal, so a rolled-back mutation never leaves an audit trail.

Receivers (audit/receivers.py) turn events into AuditLog rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction
from django.dispatch import Signal

logger = logging.getLogger(__name__)

audit_event = Signal()

ACTION_CREATE = "CREATE"
ACTION_UPDATE = "UPDATE"
ACTION_DELETE = "DELETE"


@dataclass(frozen=True)
class AuditEvent:
    user_id: str
    user_name: str
    action: str
    target_type: str
    description: str
    target_id: str = ""


def emit_audit_event(
    actor,
    *,
    action: str,
    target_type: str,
    description: str,
    target_id="",
) -> AuditEvent:
    event = AuditEvent(
        user_id=actor.uid,
        user_name=actor.name,
        action=action,
        target_type=target_type,
        description=description,
        target_id=str(target_id or ""),
    )

    def _dispatch():
        audit_event.send(sender=AuditEvent, event=event)

    transaction.on_commit(_dispatch)

    logger.debug(
        "Audit event queued",
        extra={"action": action, "target_type": target_type, "target_id": event.target_id},
    )
    return event
