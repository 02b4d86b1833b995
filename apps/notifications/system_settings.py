import logging

from apps.audit.services import log_admin_action
from .exceptions import SettingError
from .models import SystemSetting

logger = logging.getLogger(__name__)

DAILY_DIGEST_ENABLED = 'daily_pending_review_email_enabled'
DAILY_DIGEST_TIME = 'daily_pending_review_email_time'
ADMIN_NOTIFICATION_EMAILS = 'admin_notification_emails'

NOTIFICATION_SETTINGS = {
    DAILY_DIGEST_ENABLED: True,
    DAILY_DIGEST_TIME: '09:00',
    ADMIN_NOTIFICATION_EMAILS: [],
}


def list_settings(category=None, public_only=False):
    rows = SystemSetting.objects.all()
    if category:
        rows = rows.filter(category=category)
    if public_only:
        rows = rows.filter(is_public=True)
    return list(rows)


def get_setting(key, default=None):
    row = SystemSetting.objects.filter(key=key).first()
    if row is None or row.value is None:
        return default
    return row.value


def get_bool_setting(key, default=False):
    value = get_setting(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def set_setting(key, value, actor=None, category='general', description=None):
    defaults = {'value': value, 'category': category}
    if description is not None:
        defaults['description'] = description
    if actor is not None and getattr(actor, 'is_authenticated', False):
        defaults['updated_by'] = actor

    row, created = SystemSetting.objects.update_or_create(key=key, defaults=defaults)
    log_admin_action(actor, 'update_system_setting', 'system_settings', key, {
        'value': value,
        'created': created,
    })
    return row


def update_existing_setting(key, value, actor=None):
    row = SystemSetting.objects.filter(key=key).first()
    if row is None:
        raise SettingError(f"Unknown setting '{key}'")
    return set_setting(key, value, actor=actor, category=row.category)


def notification_settings():
    return {key: get_setting(key, default) for key, default in NOTIFICATION_SETTINGS.items()}


def update_notification_settings(values, actor=None):
    from apps.scheduler.services import validate_time

    unknown = set(values) - set(NOTIFICATION_SETTINGS)
    if unknown:
        raise SettingError(f"Unknown notification setting(s): {', '.join(sorted(unknown))}")

    if DAILY_DIGEST_TIME in values:
        values[DAILY_DIGEST_TIME] = validate_time(values[DAILY_DIGEST_TIME])
    if ADMIN_NOTIFICATION_EMAILS in values:
        emails = values[ADMIN_NOTIFICATION_EMAILS]
        if isinstance(emails, str):
            emails = emails.replace(';', ',').split(',')
        values[ADMIN_NOTIFICATION_EMAILS] = [e.strip() for e in emails if e and e.strip()]
    if DAILY_DIGEST_ENABLED in values:
        values[DAILY_DIGEST_ENABLED] = bool(values[DAILY_DIGEST_ENABLED])

    for key, value in values.items():
        set_setting(key, value, actor=actor, category='notifications')
    logger.info(f"Notification settings updated: {sorted(values)}")
    return notification_settings()
