import csv
import io
import logging

from django.db import IntegrityError, transaction

from apps.audit.services import log_admin_action
from .exceptions import PreferenceError, UserManagementError
from .models import User, UserPreference

logger = logging.getLogger(__name__)

USER_EXPORT_HEADERS = ['ID', 'Email', 'Full Name', 'Role', 'Company', 'Subscription Tier', 'Created At']
USER_IMPORT_COLUMNS = ['email', 'full_name', 'role', 'company_name', 'subscription_tier']

DEFAULT_PREFERENCES = {
    UserPreference.QUICK_ACTIONS: [],
    UserPreference.ACTIVITY_SETTINGS: {'limit': 10, 'show_all': False, 'cleared': False},
}


def register_user(validated_data):
    from apps.notifications.mailchimp import subscribe_to_newsletter
    from apps.notifications.admin_notifications import notify_new_signup

    password = validated_data.pop('password')
    validated_data.setdefault('username', validated_data['email'])
    user = User.objects.create_user(password=password, **validated_data)

    if user.newsletter_opt_in:
        subscribed = subscribe_to_newsletter(user.email, user.full_name, tags=[user.role])
        logger.info(f"Newsletter opt-in for {user.email}: subscribed={subscribed}")
    notify_new_signup(user)
    return user


# Preferences

def _validate_quick_actions(value):
    if not isinstance(value, list):
        raise PreferenceError("quick_actions must be a list")
    for position, action in enumerate(value, start=1):
        if not isinstance(action, dict):
            raise PreferenceError(f"Quick action {position} must be an object")
        for field in ('label', 'path'):
            if not str(action.get(field) or '').strip():
                raise PreferenceError(f"Quick action {position} is missing '{field}'")
    return [
        {'label': a['label'].strip(), 'path': a['path'].strip(), 'icon': a.get('icon') or ''}
        for a in value
    ]


def _validate_activity_settings(value):
    if not isinstance(value, dict):
        raise PreferenceError("activity_settings must be an object")
    settings = dict(DEFAULT_PREFERENCES[UserPreference.ACTIVITY_SETTINGS])
    settings.update({k: v for k, v in value.items() if k in settings})

    limit = settings['limit']
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0):
        raise PreferenceError("activity_settings.limit must be null or a positive integer")
    settings['show_all'] = bool(settings['show_all'])
    settings['cleared'] = bool(settings['cleared'])
    return settings


PREFERENCE_VALIDATORS = {
    UserPreference.QUICK_ACTIONS: _validate_quick_actions,
    UserPreference.ACTIVITY_SETTINGS: _validate_activity_settings,
}


def get_preference(user, key):
    if key not in PREFERENCE_VALIDATORS:
        raise PreferenceError(f"Unknown preference '{key}'")
    pref = UserPreference.objects.filter(user=user, key=key).first()
    return pref.value if pref else DEFAULT_PREFERENCES[key]


def set_preference(user, key, value):
    if key not in PREFERENCE_VALIDATORS:
        raise PreferenceError(f"Unknown preference '{key}'")
    cleaned = PREFERENCE_VALIDATORS[key](value)
    UserPreference.objects.update_or_create(user=user, key=key, defaults={'value': cleaned})
    return cleaned


# Admin user management

def change_role(user, role, actor):
    if role not in User.Role.values:
        raise UserManagementError(f"Invalid role '{role}'")
    previous = user.role
    user.role = role
    user.save(update_fields=['role'])
    log_admin_action(actor, 'change_user_role', 'profiles', user.pk, {'from': previous, 'to': role})
    return user


def delete_user(user, actor):
    if user.pk == actor.pk:
        raise UserManagementError("You cannot delete your own account")
    if user.role == User.Role.ADMIN:
        raise UserManagementError("Cannot delete admin users")

    user_id, role = user.pk, user.role
    user.delete()
    log_admin_action(actor, 'delete_user', 'profiles', user_id, {'user_role': role})


def export_users_csv():
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(USER_EXPORT_HEADERS)
    for user in User.objects.order_by('-date_joined'):
        writer.writerow([
            user.pk,
            user.email,
            user.full_name,
            user.role,
            user.company_name or '',
            user.subscription_tier,
            user.date_joined.isoformat(),
        ])
    return buffer.getvalue()


def _import_row(values):
    email, full_name, role, company_name, tier = (v.strip() for v in values)
    role = role or User.Role.CLIENT
    tier = tier or User.SubscriptionTier.FREE

    if not email:
        raise UserManagementError("Email is required")
    if role not in User.Role.values:
        raise UserManagementError(f"Invalid role '{role}'")
    if tier not in User.SubscriptionTier.values:
        raise UserManagementError(f"Invalid subscription tier '{tier}'")
    if User.objects.filter(email__iexact=email).exists():
        raise UserManagementError(f"User with email {email} already exists")

    with transaction.atomic():
        User.objects.create_user(
            username=email,
            email=email,
            password=None,
            full_name=full_name,
            role=role,
            company_name=company_name or None,
            subscription_tier=tier,
        )


def import_users_csv(text, actor):
    """Create users from CSV text; returns {'success': n, 'errors': [...]}.

    Row numbers are 1-based line numbers with the header on row 1.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return {'success': 0, 'errors': []}

    rows = list(csv.reader(lines))
    column_count = len(rows[0])
    success = 0
    errors = []

    for index, values in enumerate(rows[1:], start=2):
        if len(values) != column_count or len(values) != len(USER_IMPORT_COLUMNS):
            errors.append(f"Row {index}: Invalid number of columns")
            continue
        try:
            _import_row(values)
            success += 1
        except UserManagementError as e:
            errors.append(f"Row {index}: {e.message}")
        except IntegrityError as e:
            errors.append(f"Row {index}: {e}")

    log_admin_action(actor, 'import_users', 'profiles', None, {
        'success_count': success,
        'error_count': len(errors),
    })
    return {'success': success, 'errors': errors}
