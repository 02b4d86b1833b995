import logging
import smtplib

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.db import DatabaseError
from django.db.models import F
from django.utils import timezone

from .models import EmailQueueItem, EmailTemplate
from .rendering import render

logger = logging.getLogger(__name__)


def get_active_template(template_type):
    return (
        EmailTemplate.objects
        .filter(type=template_type, is_active=True)
        .order_by('-updated_at', '-pk')
        .first()
    )


def queue_email(recipient_email, subject, body_html, body_text='', recipient_name='', template=None):
    return EmailQueueItem.objects.create(
        template=template,
        recipient_email=recipient_email,
        recipient_name=recipient_name or '',
        subject=subject,
        body_html=body_html,
        body_text=body_text or '',
        max_retries=settings.EMAIL_QUEUE_MAX_RETRIES,
    )


def queue_templated_email(template_type, recipient_email, variables, recipient_name=''):
    """Render the newest active template of ``template_type`` into the queue.

    Returns the queued item, or None when no active template exists.
    """
    template = get_active_template(template_type)
    if template is None:
        logger.warning(f"No active email template '{template_type}'; email to {recipient_email} not queued")
        return None

    item = queue_email(
        recipient_email,
        subject=render(template.subject, variables),
        body_html=render(template.body_html, variables),
        body_text=render(template.body_text, variables),
        recipient_name=recipient_name,
        template=template,
    )
    logger.info(f"Queued '{template_type}' email #{item.pk} for {recipient_email}")
    return item


def safe_queue_templated_email(template_type, recipient_email, variables, recipient_name=''):
    """Like queue_templated_email, but a database failure is logged and ignored."""
    try:
        return queue_templated_email(template_type, recipient_email, variables, recipient_name)
    except DatabaseError as e:
        logger.error(f"Error queuing '{template_type}' email for {recipient_email}: {e}")
        return None


def _deliver(item):
    message = EmailMultiAlternatives(
        subject=item.subject,
        body=item.body_text or item.body_html,
        from_email=settings.KIOSKADS_FROM_EMAIL,
        to=[f"{item.recipient_name} <{item.recipient_email}>" if item.recipient_name else item.recipient_email],
    )
    if item.body_html:
        message.attach_alternative(item.body_html, 'text/html')
    message.send(fail_silently=False)


def process_email_queue(batch_size=None):
    batch_size = batch_size or settings.EMAIL_QUEUE_BATCH_SIZE
    items = list(
        EmailQueueItem.objects
        .filter(status=EmailQueueItem.Status.PENDING, retry_count__lt=F('max_retries'))
        .order_by('created_at', 'pk')[:batch_size]
    )

    result = {'processed': 0, 'sent': 0, 'failed': 0, 'retrying': 0}
    for item in items:
        result['processed'] += 1
        try:
            _deliver(item)
        except (smtplib.SMTPException, OSError) as e:
            item.retry_count += 1
            item.error_message = str(e)[:1000]
            if item.retry_count >= item.max_retries:
                item.status = EmailQueueItem.Status.FAILED
                result['failed'] += 1
                logger.error(f"Email #{item.pk} to {item.recipient_email} failed permanently: {e}")
            else:
                result['retrying'] += 1
                logger.warning(f"Email #{item.pk} attempt {item.retry_count} failed: {e}")
        else:
            item.status = EmailQueueItem.Status.SENT
            item.sent_at = timezone.now()
            item.error_message = ''
            result['sent'] += 1
        item.save(update_fields=['status', 'retry_count', 'error_message', 'sent_at', 'updated_at'])

    if items:
        logger.info(f"Email queue processed: {result}")
    return result


def cancel_email(item):
    if item.status != EmailQueueItem.Status.PENDING:
        return False
    item.status = EmailQueueItem.Status.CANCELLED
    item.save(update_fields=['status', 'updated_at'])
    return True


def requeue_email(item):
    if item.status != EmailQueueItem.Status.FAILED:
        return False
    item.status = EmailQueueItem.Status.PENDING
    item.retry_count = 0
    item.error_message = ''
    item.save(update_fields=['status', 'retry_count', 'error_message', 'updated_at'])
    return True
