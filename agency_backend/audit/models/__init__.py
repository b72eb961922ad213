from audit.models.audit_log import AuditLog

__all__ = ["AuditLog"]
