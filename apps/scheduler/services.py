"""Control panel for the background jobs.

Each job is a Celery task. Its enabled flag and run time live in
``SystemSetting`` rows so admins can change them without a deploy; the
per-minute dispatcher in ``tasks.schedulers`` reads them on every tick.
"""
import logging
import re
from collections import namedtuple
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string

from apps.audit.models import AdminAuditLog
from apps.audit.services import log_admin_action, recent_activity as audit_activity
from apps.notifications import system_settings
from .exceptions import SchedulerError, UnknownScheduler

logger = logging.getLogger(__name__)

CRON_RESOURCE = 'cron_job'
SCHEDULER_TIME = 'campaign_scheduler_time'

_TIME_RE = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')

Job = namedtuple('Job', ['name', 'label', 'task', 'enabled_key', 'time_key'])

JOBS = {
    job.name: job for job in (
        Job(
            'campaign_status', 'Campaign status scheduler',
            'tasks.schedulers.campaign_status_scheduler',
            'campaign_status_scheduler_enabled', SCHEDULER_TIME,
        ),
        Job(
            'asset_folder', 'Asset folder scheduler',
            'tasks.schedulers.asset_folder_scheduler',
            'asset_folder_scheduler_enabled', SCHEDULER_TIME,
        ),
        Job(
            'daily_pending_review', 'Daily pending review email',
            'tasks.notifications.daily_pending_review_email',
            system_settings.DAILY_DIGEST_ENABLED, system_settings.DAILY_DIGEST_TIME,
        ),
    )
}


def validate_time(value):
    """Return ``value`` if it is a 24h ``HH:MM`` time, else raise SchedulerError."""
    value = (value or '').strip() if isinstance(value, str) else value
    if not isinstance(value, str) or not _TIME_RE.match(value):
        raise SchedulerError(f"Invalid time '{value}'. Use 24-hour HH:MM format")
    return value


def get_job(name):
    try:
        return JOBS[name]
    except KeyError:
        raise UnknownScheduler(name)


def job_task(job):
    return import_string(job.task)


def _default_time(job):
    if job.time_key == system_settings.DAILY_DIGEST_TIME:
        return system_settings.NOTIFICATION_SETTINGS[job.time_key]
    return settings.SCHEDULER_DEFAULT_TIME


def is_enabled(name):
    return system_settings.get_bool_setting(get_job(name).enabled_key, True)


def run_time(name):
    job = get_job(name)
    return system_settings.get_setting(job.time_key, _default_time(job))


def last_run(name):
    return AdminAuditLog.objects.filter(resource_type=CRON_RESOURCE, resource_id=name).first()


def scheduler_info(name):
    job = get_job(name)
    latest = last_run(name)
    return {
        'name': job.name,
        'label': job.label,
        'enabled': is_enabled(name),
        'time': run_time(name),
        'timezone': settings.SCHEDULER_TIMEZONE,
        'last_run': latest.created_at if latest else None,
        'last_result': latest.details if latest else None,
    }


def all_schedulers():
    return [scheduler_info(name) for name in JOBS]


def trigger(name, actor=None):
    """Queue a run of ``name`` on the workers and return the Celery task id."""
    job = get_job(name)
    result = job_task(job).delay(force=True)
    log_admin_action(actor, 'trigger_scheduler', 'scheduler', name, {'task_id': result.id})
    logger.info(f"Triggered {job.label} as task {result.id}")
    return result.id


def run_test(name, actor=None):
    """Run ``name`` in-process and return its result."""
    job = get_job(name)
    result = job_task(job)(force=True)
    log_admin_action(actor, 'test_scheduler', 'scheduler', name, {'result': result})
    return result


def set_enabled(name, enabled, actor=None):
    job = get_job(name)
    system_settings.set_setting(job.enabled_key, bool(enabled), actor=actor, category='scheduler')
    logger.info(f"{job.label} {'enabled' if enabled else 'disabled'}")
    return scheduler_info(name)


def update_time(name, value, actor=None):
    """Change the run time of ``name``. Jobs sharing a time setting move together."""
    job = get_job(name)
    value = validate_time(value)
    system_settings.set_setting(job.time_key, value, actor=actor, category='scheduler')
    return scheduler_info(name)


def recent_activity(limit=20):
    return audit_activity(limit=limit, resource_type=CRON_RESOURCE)


def local_now(now=None):
    return timezone.localtime(now or timezone.now(), ZoneInfo(settings.SCHEDULER_TIMEZONE))


def due_jobs(now=None):
    """Names of the enabled jobs whose run time is the current minute."""
    current = local_now(now).strftime('%H:%M')
    return [name for name in JOBS if is_enabled(name) and run_time(name) == current]


def record_run(name, result):
    log_admin_action(None, f'run_{name}', CRON_RESOURCE, name, result)
    return result
