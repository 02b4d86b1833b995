import logging
from datetime import timedelta

from django.db import DatabaseError
from django.utils import timezone

from .queue import get_active_template, queue_email
from .recipients import admin_recipients, dedupe
from .rendering import render

logger = logging.getLogger(__name__)

CAMPAIGN_EMAIL_STATUSES = (
    'purchased', 'submitted', 'approved', 'rejected', 'active',
    'expiring', 'expired', 'paused', 'resumed', 'cancelled',
)


def campaign_recipients(campaign, status):
    owner = campaign.user
    recipients = [(owner.email, owner.full_name)]

    if status in ('rejected', 'expired'):
        recipients.extend(admin_recipients())

    if owner.role == 'client' and status in ('approved', 'active'):
        for kiosk in campaign.kiosks.select_related('host').exclude(host=None):
            recipients.append((kiosk.host.email, kiosk.host.full_name))

    return dedupe(recipients)


def campaign_variables(campaign, status, today=None):
    today = today or timezone.localdate()
    variables = {
        'client_name': campaign.user.display_name,
        'campaign_name': campaign.name,
        'budget': campaign.budget if campaign.budget is not None else 0,
        'start_date': campaign.start_date.isoformat() if campaign.start_date else '',
        'end_date': campaign.end_date.isoformat() if campaign.end_date else '',
        'target_locations': campaign.target_locations or 'All Locations',
        'rejection_reason': campaign.rejection_reason or 'N/A',
    }
    if status in ('purchased', 'submitted', 'approved', 'active'):
        variables['start_date'] = variables['start_date'] or today.isoformat()
    elif status == 'expiring':
        variables['days_remaining'] = (campaign.end_date - today).days if campaign.end_date else 0
    elif status == 'expired':
        variables['end_date'] = variables['end_date'] or today.isoformat()
    return variables


def notify_campaign_status(campaign, status, today=None):
    """Queue the ``campaign_<status>`` email for everyone concerned.

    Returns the number of queued emails; failures are logged, not raised.
    """
    if status not in CAMPAIGN_EMAIL_STATUSES:
        logger.warning(f"Unknown campaign email status '{status}' for campaign {campaign.pk}")
        return 0

    try:
        template = get_active_template(f'campaign_{status}')
        if template is None:
            logger.warning(f"No active email template 'campaign_{status}'")
            return 0

        variables = campaign_variables(campaign, status, today)
        queued = 0
        for email, name in campaign_recipients(campaign, status):
            queue_email(
                email,
                subject=render(template.subject, variables),
                body_html=render(template.body_html, variables),
                body_text=render(template.body_text, variables),
                recipient_name=name,
                template=template,
            )
            queued += 1
    except DatabaseError as e:
        logger.error(f"Error sending campaign {status} notification for campaign {campaign.pk}: {e}")
        return 0

    logger.info(f"Queued {queued} campaign_{status} email(s) for campaign {campaign.pk}")
    return queued


def send_campaign_test_email(status, test_email):
    template = get_active_template(f'campaign_{status}')
    if template is None:
        return False

    today = timezone.localdate()
    variables = {
        'client_name': 'Test User',
        'campaign_name': 'Test Campaign',
        'budget': 1000,
        'start_date': today.isoformat(),
        'end_date': (today + timedelta(days=1)).isoformat(),
        'target_locations': 'Sample City',
        'rejection_reason': 'Not applicable',
        'days_remaining': 1,
    }
    queue_email(
        test_email,
        subject=render(template.subject, variables),
        body_html=render(template.body_html, variables),
        body_text=render(template.body_text, variables),
        recipient_name='Test User',
        template=template,
    )
    return True
