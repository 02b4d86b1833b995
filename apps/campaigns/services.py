import logging

from django.db import transaction
from django.utils import timezone

from apps.audit.services import log_admin_action
from apps.notifications.admin_notifications import notify_campaign_created
from apps.notifications.campaign_notifications import notify_campaign_status
from .models import AssetLifecycle, Campaign, MediaAsset

logger = logging.getLogger(__name__)


def create_campaign(user, validated_data):
    kiosks = validated_data.pop('kiosks', [])
    campaign = Campaign.objects.create(user=user, status=Campaign.Status.DRAFT, **validated_data)
    if kiosks:
        campaign.kiosks.set(kiosks)
    notify_campaign_created(campaign)
    logger.info(f"Campaign {campaign.pk} created by {user.email}")
    return campaign


def _change_status(campaign_id, new_status):
    with transaction.atomic():
        campaign = Campaign.objects.select_for_update().get(pk=campaign_id)
        campaign.transition_to(new_status)
        campaign.save()
    return campaign


def submit_campaign(campaign):
    campaign = _change_status(campaign.pk, Campaign.Status.PENDING)
    notify_campaign_status(campaign, 'submitted')
    return campaign


def pause_campaign(campaign):
    campaign = _change_status(campaign.pk, Campaign.Status.PAUSED)
    notify_campaign_status(campaign, 'paused')
    return campaign


def resume_campaign(campaign):
    campaign = _change_status(campaign.pk, Campaign.Status.ACTIVE)
    notify_campaign_status(campaign, 'resumed')
    return campaign


def complete_campaign(campaign):
    campaign = _change_status(campaign.pk, Campaign.Status.COMPLETED)
    notify_campaign_status(campaign, 'expired')
    return campaign


# Asset lifecycle

def asset_lifecycle(status=None):
    """Lifecycle rows whose media asset still exists, newest first."""
    rows = AssetLifecycle.objects.select_related('media_asset', 'campaign').order_by('-created_at')
    if status:
        rows = rows.filter(status=status)
    total = rows.count()
    valid = [row for row in rows if row.media_asset_id is not None]
    if len(valid) != total:
        logger.warning(f"Filtered out {total - len(valid)} asset lifecycle records with missing media assets")
    return valid


def archive_campaign_assets(campaign):
    """Move the approved assets of a finished campaign into the archive."""
    archived = 0
    now = timezone.now()
    with transaction.atomic():
        assets = MediaAsset.objects.select_for_update().filter(
            campaign=campaign, status=MediaAsset.Status.APPROVED
        )
        for asset in assets:
            asset.transition_to(MediaAsset.Status.ARCHIVED)
            asset.save()
            AssetLifecycle.objects.update_or_create(
                media_asset=asset,
                campaign=campaign,
                defaults={
                    'status': AssetLifecycle.Status.ARCHIVED,
                    'storage_folder': 'archive',
                    'archived_at': now,
                },
            )
            archived += 1
    return archived


def restore_asset(lifecycle, actor=None):
    with transaction.atomic():
        lifecycle = AssetLifecycle.objects.select_for_update().get(pk=lifecycle.pk)
        lifecycle.status = AssetLifecycle.Status.ACTIVE
        lifecycle.storage_folder = 'active'
        lifecycle.restored_at = timezone.now()
        lifecycle.save()

        asset = lifecycle.media_asset
        if asset is not None and asset.status == MediaAsset.Status.ARCHIVED:
            asset.transition_to(MediaAsset.Status.APPROVED)
            asset.save()

    log_admin_action(actor, 'restore_asset', 'asset_lifecycle', lifecycle.pk)
    return lifecycle
