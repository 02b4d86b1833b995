import logging

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from .queue import safe_queue_templated_email
from .recipients import admin_recipients

logger = logging.getLogger(__name__)


def _notify_admins(template_type, variables):
    queued = 0
    try:
        recipients = admin_recipients()
    except DatabaseError as e:
        logger.error(f"Error loading admin recipients for '{template_type}': {e}")
        return 0

    for email, name in recipients:
        admin_variables = dict(variables, admin_name=name or 'Admin', recipient_name=name or 'Admin')
        if safe_queue_templated_email(template_type, email, admin_variables, recipient_name=name):
            queued += 1
    return queued


def notify_campaign_created(campaign):
    user = campaign.user
    return _notify_admins('campaign_purchased', {
        'user_name': user.display_name,
        'user_email': user.email,
        'user_role': user.role,
        'campaign_name': campaign.name,
        'campaign_id': campaign.pk,
        'budget': campaign.budget,
        'start_date': campaign.start_date.isoformat(),
        'end_date': campaign.end_date.isoformat(),
        'created_at': campaign.created_at.isoformat() if campaign.created_at else '',
    })


def notify_custom_ad_purchased(order):
    user = order.user
    return _notify_admins('custom_ad_purchased', {
        'user_name': user.display_name,
        'client_name': user.display_name,
        'user_email': user.email,
        'user_role': user.role,
        'order_id': order.pk,
        'service_name': order.service_key,
        'total_amount': f"{order.total_amount:.2f}",
        'created_at': order.created_at.isoformat() if order.created_at else '',
    })


def notify_new_signup(user):
    if user.role != 'client':
        return 0
    return _notify_admins('new_client_signup', {
        'user_name': user.display_name,
        'user_email': user.email,
        'user_role': user.role,
        'company_name': user.company_name or '',
        'created_at': user.date_joined.isoformat(),
    })


def send_daily_pending_review_digest():
    """Email admins how many ads, host ads and campaigns await review."""
    from apps.campaigns.review import pending_counts

    counts = pending_counts()
    total = sum(counts.values())
    if total == 0:
        logger.info("Daily pending review digest skipped: nothing pending")
        return {'sent': 0, 'total_pending': 0, **counts}

    sent = _notify_admins('daily_pending_review', {
        'pending_ads': counts['ad'],
        'pending_host_ads': counts['host_ad'],
        'pending_campaigns': counts['campaign'],
        'total_pending': total,
        'review_url': f"{settings.KIOSKADS_SITE_URL}/admin/review",
        'date': timezone.localdate().isoformat(),
    })
    return {'sent': sent, 'total_pending': total, **counts}
