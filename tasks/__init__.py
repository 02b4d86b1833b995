from core.celery import app as celery_app

__all__ = ('celery_app',)

# Register tasks explicitly
from .schedulers import campaign_status_scheduler, asset_folder_scheduler, dispatch_scheduled_jobs
from .notifications import process_email_queue, daily_pending_review_email

# Register periodic tasks
from celery.schedules import crontab
from django.conf import settings

if hasattr(settings, 'CELERY_BEAT_SCHEDULE'):
    celery_app.conf.beat_schedule = {
        # Job run times are admin-editable settings, checked on every tick
        'dispatch-scheduled-jobs': {
            'task': 'tasks.schedulers.dispatch_scheduled_jobs',
            'schedule': crontab(minute='*'),
        },
        'process-email-queue': {
            'task': 'tasks.notifications.process_email_queue',
            'schedule': crontab(minute='*'),
        },
    }
