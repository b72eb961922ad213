# audit/receivers.py

from __future__ import annotations

import logging

from django.dispatch import receiver

from audit.events import AuditEvent, audit_event
from audit.models import AuditLog

logger = logging.getLogger(__name__)


@receiver(audit_event, sender=AuditEvent, dispatch_uid="audit.write_audit_log")
def write_audit_log(sender, event: AuditEvent, **kwargs):
    """
    Persist the event. The originating transaction has already committed, so
    a failure here is logged and does not undo the business change.
    """
    try:
        AuditLog.objects.create(
            user_id=event.user_id,
            user_name=event.user_name,
            action=event.action,
            target_type=event.target_type,
            target_id=event.target_id,
            description=event.description,
        )
    except Exception:
        logger.exception(
            "Failed to write audit log",
            extra={"target_type": event.target_type, "target_id": event.target_id},
        )
