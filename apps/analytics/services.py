import logging
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Sum
from django.utils import timezone

from apps.billing.models import Invoice
from apps.campaigns.models import Campaign, HostAd, MediaAsset
from apps.common.cache import cache_heavy_query
from apps.kiosks.models import Kiosk

logger = logging.getLogger(__name__)

User = get_user_model()


def growth_rate(current, previous):
    """Percentage change from ``previous`` to ``current``, 0 without a baseline."""
    if not previous:
        return 0
    return round((current - previous) / previous * 100, 2)


@cache_heavy_query(timeout=settings.DASHBOARD_CACHE_TIMEOUT, prefix='analytics')
def dashboard_metrics():
    now = timezone.now()
    last_30 = now - timedelta(days=30)
    prior_30 = now - timedelta(days=60)

    recent_signups = User.objects.filter(date_joined__gte=last_30).count()
    previous_signups = User.objects.filter(date_joined__gte=prior_30, date_joined__lt=last_30).count()
    revenue = Invoice.objects.filter(status=Invoice.Status.PAID).aggregate(total=Sum('amount'))['total']

    metrics = {
        'total_users': User.objects.count(),
        'active_kiosks': Kiosk.objects.filter(status=Kiosk.Status.ACTIVE).count(),
        'pending_reviews': MediaAsset.objects.filter(status__in=MediaAsset.PENDING_STATUSES).count(),
        'revenue': float(revenue or Decimal('0')),
        'total_campaigns': Campaign.objects.count(),
        'total_ads': MediaAsset.objects.count(),
        'recent_signups': recent_signups,
        'monthly_growth': growth_rate(recent_signups, previous_signups),
        'pending_host_ads': HostAd.objects.filter(status=HostAd.Status.PENDING_REVIEW).count(),
        'total_host_ads': HostAd.objects.count(),
    }
    logger.info(f"Dashboard metrics computed: {metrics['total_users']} users, {metrics['pending_reviews']} pending")
    return metrics
