from datetime import timedelta

from celery import shared_task
from django.conf import settings
import logging

from apps.campaigns.models import Campaign, MediaAsset
from apps.campaigns.services import archive_campaign_assets, complete_campaign
from apps.common.exceptions import InvalidTransition
from apps.notifications.campaign_notifications import notify_campaign_status
from apps.scheduler import services as scheduler

logger = logging.getLogger(__name__)


@shared_task
def campaign_status_scheduler(force=False):
    """Complete campaigns past their end date and warn owners of those about to end"""
    if not force and not scheduler.is_enabled('campaign_status'):
        logger.info("Campaign status scheduler disabled; skipping run")
        return {'skipped': True}

    today = scheduler.local_now().date()
    completed = 0
    failed = 0

    finished = Campaign.objects.filter(
        status__in=[Campaign.Status.ACTIVE, Campaign.Status.PAUSED],
        end_date__lt=today,
    )
    for campaign in finished:
        try:
            complete_campaign(campaign)
            completed += 1
        except InvalidTransition as e:
            logger.warning(f"Could not complete campaign {campaign.pk}: {e}")
            failed += 1

    horizon = today + timedelta(days=settings.CAMPAIGN_EXPIRING_DAYS)
    expiring = Campaign.objects.filter(
        status=Campaign.Status.ACTIVE,
        end_date__gte=today,
        end_date__lte=horizon,
    )
    expiring_emails = sum(notify_campaign_status(campaign, 'expiring', today) for campaign in expiring)

    result = {
        'completed': completed,
        'failed': failed,
        'expiring_emails': expiring_emails,
    }
    logger.info(f"Campaign status scheduler finished: {result}")
    return scheduler.record_run('campaign_status', result)


@shared_task
def asset_folder_scheduler(force=False):
    """Archive the approved assets of completed campaigns"""
    if not force and not scheduler.is_enabled('asset_folder'):
        logger.info("Asset folder scheduler disabled; skipping run")
        return {'skipped': True}

    campaigns = Campaign.objects.filter(
        status=Campaign.Status.COMPLETED,
        media_assets__status=MediaAsset.Status.APPROVED,
    ).distinct()

    archived = 0
    for campaign in campaigns:
        archived += archive_campaign_assets(campaign)

    result = {'campaigns': len(campaigns), 'archived_assets': archived}
    logger.info(f"Asset folder scheduler finished: {result}")
    return scheduler.record_run('asset_folder', result)


@shared_task
def dispatch_scheduled_jobs():
    """Runs every minute; queues each enabled job whose configured time has come"""
    dispatched = []
    for name in scheduler.due_jobs():
        scheduler.job_task(scheduler.get_job(name)).delay()
        dispatched.append(name)
    if dispatched:
        logger.info(f"Dispatched scheduled jobs: {', '.join(dispatched)}")
    return dispatched
