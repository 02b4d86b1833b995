import logging
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction
from django.db.models import F, Q, Sum
from django.utils import timezone

from apps.audit.services import log_admin_action
from .exceptions import CouponError
from .models import Coupon, CouponScope, CouponUsage

logger = logging.getLogger(__name__)

INACTIVE = 'Inactive'
EXPIRED = 'Expired'
FULLY_USED = 'Fully Used'
ACTIVE = 'Active'

CENT = Decimal('0.01')

SCOPE_ERRORS = {
    CouponScope.ScopeType.ROLE: 'This coupon is not valid for your account type',
    CouponScope.ScopeType.KIOSK: 'This coupon is not valid for the selected kiosk(s)',
    CouponScope.ScopeType.PRODUCT: 'This coupon is not valid for this product type',
    CouponScope.ScopeType.SUBSCRIPTION_TIER: 'This coupon is not valid for your subscription tier',
}


def normalize_code(code):
    return (code or '').strip().upper()


def status_label(coupon, now=None):
    """Inactive beats Expired beats Fully Used beats Active."""
    now = now or timezone.now()
    if not coupon.is_active:
        return INACTIVE
    if coupon.valid_until < now:
        return EXPIRED
    if coupon.current_uses >= coupon.max_uses:
        return FULLY_USED
    return ACTIVE


def filter_by_status(coupons, status, now=None):
    now = now or timezone.now()
    status = (status or 'all').strip().lower().replace('_', ' ')
    live = Q(is_active=True, valid_until__gte=now)
    if status == 'inactive':
        return coupons.filter(is_active=False)
    if status == 'expired':
        return coupons.filter(is_active=True, valid_until__lt=now)
    if status == 'fully used':
        return coupons.filter(live, current_uses__gte=F('max_uses'))
    if status == 'active':
        return coupons.filter(live, current_uses__lt=F('max_uses'))
    return coupons


def list_coupons(status=None, search=None):
    coupons = Coupon.objects.prefetch_related('scopes').order_by('-created_at')
    if search:
        coupons = coupons.filter(code__icontains=search.strip())
    return filter_by_status(coupons, status)


def coupon_stats(now=None):
    now = now or timezone.now()
    coupons = Coupon.objects.all()
    return {
        'total': coupons.count(),
        'active': filter_by_status(coupons, 'active', now).count(),
        'expired': filter_by_status(coupons, 'expired', now).count(),
        'used': coupons.aggregate(total=Sum('current_uses'))['total'] or 0,
    }


def _replace_scopes(coupon, scopes):
    coupon.scopes.all().delete()
    CouponScope.objects.bulk_create([
        CouponScope(coupon=coupon, scope_type=scope['scope_type'], scope_value=str(scope['scope_value']).strip())
        for scope in scopes
        if str(scope.get('scope_value', '')).strip()
    ])


def create_coupon(data, actor):
    scopes = data.pop('scopes', [])
    data['code'] = normalize_code(data['code'])
    with transaction.atomic():
        coupon = Coupon.objects.create(created_by=actor, **data)
        _replace_scopes(coupon, scopes)
    log_admin_action(actor, 'create_coupon', 'coupon', coupon.pk, {'code': coupon.code})
    return coupon


def update_coupon(coupon, data, actor):
    scopes = data.pop('scopes', None)
    if 'code' in data:
        data['code'] = normalize_code(data['code'])
    with transaction.atomic():
        for field, value in data.items():
            setattr(coupon, field, value)
        coupon.save()
        if scopes is not None:
            _replace_scopes(coupon, scopes)
    log_admin_action(actor, 'update_coupon', 'coupon', coupon.pk, {'fields': sorted(data)})
    return coupon


def _check_scopes(coupon, context):
    for scope in coupon.scopes.all():
        value = scope.scope_value
        if scope.scope_type == CouponScope.ScopeType.ROLE:
            mismatch = context.get('user_role') and context['user_role'] != value
        elif scope.scope_type == CouponScope.ScopeType.KIOSK:
            kiosk_ids = context.get('kiosk_ids')
            mismatch = kiosk_ids is not None and value not in [str(k) for k in kiosk_ids]
        elif scope.scope_type == CouponScope.ScopeType.PRODUCT:
            mismatch = context.get('campaign_type') and context['campaign_type'] != value
        elif scope.scope_type == CouponScope.ScopeType.SUBSCRIPTION_TIER:
            mismatch = context.get('subscription_tier') and context['subscription_tier'] != value
        else:
            mismatch = False
        if mismatch:
            raise CouponError(SCOPE_ERRORS[scope.scope_type])


def calculate_discount(coupon, amount):
    """(discount, final amount) for ``amount``, both rounded to cents."""
    amount = Decimal(amount)
    if coupon.type == Coupon.Type.PERCENTAGE:
        discount = amount * coupon.value / Decimal(100)
    elif coupon.type == Coupon.Type.FIXED:
        discount = min(coupon.value, amount)
    else:
        discount = amount
    final = max(Decimal(0), amount - discount)
    return discount.quantize(CENT, ROUND_HALF_UP), final.quantize(CENT, ROUND_HALF_UP)


def validate_coupon(code, context, now=None):
    """Check ``code`` against a purchase context and price the discount.

    ``context`` holds ``user`` and ``amount`` plus the optional scope keys
    ``user_role``, ``kiosk_ids``, ``campaign_type`` and ``subscription_tier``.
    Raises CouponError with a user-facing message when the coupon can't be used.
    """
    now = now or timezone.now()
    coupon = (
        Coupon.objects.prefetch_related('scopes')
        .filter(code=normalize_code(code), is_active=True)
        .first()
    )
    if coupon is None:
        raise CouponError('Invalid or inactive coupon code')
    if coupon.current_uses >= coupon.max_uses:
        raise CouponError('This coupon has reached its maximum usage limit')
    if now < coupon.valid_from:
        raise CouponError('This coupon is not yet valid')
    if now > coupon.valid_until:
        raise CouponError('This coupon has expired')

    amount = Decimal(str(context['amount']))
    if coupon.min_amount and amount < coupon.min_amount:
        raise CouponError(f'Minimum purchase amount of ${coupon.min_amount:.2f} required')

    _check_scopes(coupon, context)

    user = context.get('user')
    if user is not None and CouponUsage.objects.filter(coupon=coupon, user=user).exists():
        raise CouponError('You have already used this coupon code')

    discount, final = calculate_discount(coupon, amount)
    return {
        'id': coupon.pk,
        'code': coupon.code,
        'type': coupon.type,
        'value': coupon.value,
        'discount_amount': discount,
        'final_amount': final,
    }


def apply_coupon(coupon, user, discount_amount, campaign=None):
    """Record a redemption and bump ``current_uses`` in the database."""
    with transaction.atomic():
        updated = (
            Coupon.objects
            .filter(pk=coupon.pk, current_uses__lt=F('max_uses'))
            .update(current_uses=F('current_uses') + 1)
        )
        if not updated:
            raise CouponError('This coupon has reached its maximum usage limit')
        usage = CouponUsage.objects.create(
            coupon=coupon, user=user, campaign=campaign, discount_amount=discount_amount
        )
    coupon.refresh_from_db(fields=['current_uses'])
    logger.info(f"Coupon {coupon.code} applied by {user.email} ({coupon.current_uses}/{coupon.max_uses})")
    return usage
