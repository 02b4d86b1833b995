from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.audit.services import log_admin_action
from .exceptions import MarketingError
from .models import MarketingTool, PartnerLogo, Testimonial


def active_marketing_tools(tool_type=None, now=None):
    """Live tools for the public site, highest priority first."""
    now = now or timezone.now()
    tools = MarketingTool.objects.filter(is_active=True).filter(
        Q(start_date__isnull=True) | Q(start_date__lte=now),
        Q(end_date__isnull=True) | Q(end_date__gte=now),
    )
    if tool_type:
        tools = tools.filter(type=tool_type)
    return tools.order_by('-priority', '-created_at')


def featured_testimonials(limit=None):
    testimonials = Testimonial.objects.filter(is_active=True, is_featured=True).order_by('display_order')
    return testimonials[:limit] if limit else testimonials


def toggle_partner_logo(logo, is_active, actor=None):
    logo.is_active = is_active
    logo.save(update_fields=['is_active', 'updated_at'])
    log_admin_action(actor, 'toggle_partner_logo', 'partner_logo', logo.pk, {'is_active': is_active})
    return logo


def reorder_partner_logos(logo_ids, actor=None):
    """Each logo's display order becomes its index in ``logo_ids``."""
    logos = PartnerLogo.objects.in_bulk(logo_ids)
    missing = [pk for pk in logo_ids if pk not in logos]
    if missing:
        raise MarketingError(f"Unknown partner logo id(s): {missing}")

    with transaction.atomic():
        for position, pk in enumerate(logo_ids):
            PartnerLogo.objects.filter(pk=pk).update(display_order=position, updated_at=timezone.now())
    log_admin_action(actor, 'reorder_partner_logos', 'partner_logo', None, {'order': list(logo_ids)})
    return list(PartnerLogo.objects.order_by('display_order', 'name'))
