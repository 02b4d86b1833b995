from celery import shared_task
from django.conf import settings
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential
from django.db import OperationalError
import logging

from apps.notifications import queue
from apps.notifications.admin_notifications import send_daily_pending_review_digest
from apps.scheduler import services as scheduler

logger = logging.getLogger(__name__)


@shared_task
@retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    reraise=True,
)
def process_email_queue(batch_size=None):
    """Send the oldest pending emails"""
    result = queue.process_email_queue(batch_size or settings.EMAIL_QUEUE_BATCH_SIZE)
    if result['processed']:
        logger.info(f"Email queue processed: {result}")
    return result


@shared_task
def daily_pending_review_email(force=False):
    if not force and not scheduler.is_enabled('daily_pending_review'):
        logger.info("Daily pending review email disabled; skipping run")
        return {'skipped': True}

    result = send_daily_pending_review_digest()
    return scheduler.record_run('daily_pending_review', result)
