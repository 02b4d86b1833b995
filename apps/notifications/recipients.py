from django.contrib.auth import get_user_model

from .system_settings import ADMIN_NOTIFICATION_EMAILS, get_setting


def admin_recipients():
    """(email, name) pairs for admin notifications.

    The ``admin_notification_emails`` setting wins when it is non-empty.
    """
    configured = get_setting(ADMIN_NOTIFICATION_EMAILS, []) or []
    if configured:
        return [(email, '') for email in configured]

    User = get_user_model()
    admins = User.objects.filter(role=User.Role.ADMIN, is_active=True).order_by('pk')
    return [(admin.email, admin.full_name) for admin in admins]


def dedupe(recipients):
    seen = set()
    unique = []
    for email, name in recipients:
        key = email.strip().lower()
        if key and key not in seen:
            seen.add(key)
            unique.append((email, name))
    return unique
