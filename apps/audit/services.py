import logging

from django.db import DatabaseError, transaction

from .middleware import current_request_meta
from .models import AdminAuditLog

logger = logging.getLogger(__name__)


def log_admin_action(admin, action, resource_type, resource_id=None, details=None):
    """Write an audit entry. Failures are logged, never raised."""
    meta = current_request_meta()
    if admin is not None and not getattr(admin, 'is_authenticated', False):
        admin = None
    try:
        with transaction.atomic():
            return AdminAuditLog.objects.create(
                admin=admin,
                action=action,
                resource_type=resource_type,
                resource_id=str(resource_id) if resource_id is not None else None,
                details=details or {},
                ip_address=meta['ip_address'],
                user_agent=meta['user_agent'],
            )
    except (DatabaseError, TypeError, ValueError) as e:
        logger.error(f"Error logging admin action {action} on {resource_type}:{resource_id}: {e}")
        return None


def recent_activity(limit=10, resource_type=None):
    entries = AdminAuditLog.objects.select_related('admin')
    if resource_type:
        entries = entries.filter(resource_type=resource_type)
    if limit:
        entries = entries[:limit]
    return list(entries)
