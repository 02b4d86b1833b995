"""Admin review queues for client ads, host ads and campaigns.

Every queue entry carries an explicit ``kind`` so callers never have to
guess the item type from which fields are populated.
"""
import logging
from collections import namedtuple

from django.db import models, transaction

from apps.audit.services import log_admin_action
from apps.notifications.campaign_notifications import notify_campaign_status
from apps.notifications.queue import safe_queue_templated_email
from .exceptions import RejectionReasonRequired, ReviewError, ReviewItemNotFound
from .models import Campaign, HostAd, MediaAsset

logger = logging.getLogger(__name__)


class ReviewKind(models.TextChoices):
    AD = 'ad', 'Client ad'
    HOST_AD = 'host_ad', 'Host ad'
    CAMPAIGN = 'campaign', 'Campaign'


APPROVE = 'approve'
REJECT = 'reject'

ReviewTarget = namedtuple('ReviewTarget', 'model approved rejected audit_action resource_type')

REVIEW_TARGETS = {
    ReviewKind.AD: ReviewTarget(
        MediaAsset, MediaAsset.Status.APPROVED, MediaAsset.Status.REJECTED, 'review_ad', 'media_asset'
    ),
    ReviewKind.HOST_AD: ReviewTarget(
        HostAd, HostAd.Status.APPROVED, HostAd.Status.REJECTED, 'review_host_ad', 'host_ad'
    ),
    ReviewKind.CAMPAIGN: ReviewTarget(
        Campaign, Campaign.Status.ACTIVE, Campaign.Status.REJECTED, 'review_campaign', 'campaign'
    ),
}


def pending_ads():
    return (
        MediaAsset.objects
        .filter(status__in=MediaAsset.PENDING_STATUSES)
        .select_related('user', 'campaign')
        .order_by('created_at', 'pk')
    )


def pending_host_ads():
    return (
        HostAd.objects
        .filter(status=HostAd.Status.PENDING_REVIEW)
        .select_related('host')
        .order_by('created_at', 'pk')
    )


def pending_campaigns():
    return (
        Campaign.objects
        .filter(status=Campaign.Status.PENDING)
        .select_related('user')
        .order_by('created_at', 'pk')
    )


def pending_counts():
    return {
        ReviewKind.AD.value: pending_ads().count(),
        ReviewKind.HOST_AD.value: pending_host_ads().count(),
        ReviewKind.CAMPAIGN.value: pending_campaigns().count(),
    }


def _queue_entry(kind, obj, title, owner, detail):
    return {
        'kind': kind,
        'id': obj.pk,
        'title': title,
        'status': obj.status,
        'owner_id': owner.pk,
        'owner_email': owner.email,
        'owner_name': owner.display_name,
        'detail': detail,
        'created_at': obj.created_at,
    }


def all_pending(kind=None):
    """Every item awaiting review, oldest first, tagged with its ``kind``."""
    entries = []
    if kind in (None, ReviewKind.AD):
        entries += [
            _queue_entry(ReviewKind.AD.value, ad, ad.file_name, ad.user, {
                'campaign_id': ad.campaign_id,
                'campaign_name': ad.campaign.name if ad.campaign else None,
                'file_type': ad.file_type,
                'file_url': ad.file_url,
            })
            for ad in pending_ads()
        ]
    if kind in (None, ReviewKind.HOST_AD):
        entries += [
            _queue_entry(ReviewKind.HOST_AD.value, ad, ad.name, ad.host, {
                'media_type': ad.media_type,
                'media_url': ad.media_url,
                'duration': ad.duration,
            })
            for ad in pending_host_ads()
        ]
    if kind in (None, ReviewKind.CAMPAIGN):
        entries += [
            _queue_entry(ReviewKind.CAMPAIGN.value, campaign, campaign.name, campaign.user, {
                'budget': str(campaign.budget),
                'start_date': campaign.start_date.isoformat(),
                'end_date': campaign.end_date.isoformat(),
            })
            for campaign in pending_campaigns()
        ]
    return sorted(entries, key=lambda entry: (entry['created_at'], entry['kind'], entry['id']))


def _record_reason(kind, obj, reason):
    if kind == ReviewKind.AD:
        obj.validation_errors = [reason] if reason else []
    else:
        obj.rejection_reason = reason


def review(kind, object_id, action, reason=None, actor=None):
    """Approve or reject one pending item and return it.

    The row is locked for the duration of the status change, so a second
    review of the same item fails with InvalidTransition.
    """
    if kind not in REVIEW_TARGETS:
        raise ReviewError(f"Unknown review kind '{kind}'")
    if action not in (APPROVE, REJECT):
        raise ReviewError(f"Unknown review action '{action}'")

    reason = (reason or '').strip()
    if action == REJECT and not reason:
        raise RejectionReasonRequired()

    target = REVIEW_TARGETS[kind]
    new_status = target.approved if action == APPROVE else target.rejected

    with transaction.atomic():
        try:
            obj = target.model.objects.select_for_update().get(pk=object_id)
        except target.model.DoesNotExist:
            raise ReviewItemNotFound(f"{ReviewKind(kind).label} {object_id} not found")

        obj.transition_to(new_status)
        _record_reason(kind, obj, reason if action == REJECT else '')
        obj.save()

    logger.info(f"{actor} {action}d {kind} {object_id} -> {new_status}")
    log_admin_action(actor, target.audit_action, target.resource_type, object_id, {
        'action': action,
        'rejection_reason': reason or None,
    })
    _send_review_email(kind, obj, action, reason)
    return obj


def _send_review_email(kind, obj, action, reason):
    if kind == ReviewKind.CAMPAIGN:
        notify_campaign_status(obj, 'approved' if action == APPROVE else 'rejected')
        return

    if kind == ReviewKind.AD:
        campaign = obj.campaign
        variables = {
            'client_name': obj.user.display_name,
            'campaign_name': campaign.name if campaign else obj.file_name,
            'start_date': campaign.start_date.isoformat() if campaign else '',
            'end_date': campaign.end_date.isoformat() if campaign else '',
            'budget': campaign.budget if campaign else '',
            'file_name': obj.file_name,
            'rejection_reason': reason or 'No reason provided',
        }
        template_type = 'ad_approval' if action == APPROVE else 'ad_rejection'
        safe_queue_templated_email(template_type, obj.user.email, variables, obj.user.full_name)
        return

    variables = {
        'host_name': obj.host.display_name,
        'ad_name': obj.name,
        'rejection_reason': reason or 'No reason provided',
    }
    template_type = 'host_ad_approved' if action == APPROVE else 'host_ad_rejected'
    safe_queue_templated_email(template_type, obj.host.email, variables, obj.host.full_name)
