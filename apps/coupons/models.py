from django.conf import settings
from django.db import models
from django.utils import timezone


class Coupon(models.Model):
    class Meta:
        ordering = ['-created_at']

    class Type(models.TextChoices):
        PERCENTAGE = 'percentage', 'Percentage'
        FIXED = 'fixed', 'Fixed amount'
        FREE = 'free', 'Free'

    code = models.CharField(max_length=50, unique=True)
    description = models.TextField(blank=True, default='')
    type = models.CharField(max_length=20, choices=Type.choices, default=Type.PERCENTAGE)
    value = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    max_uses = models.PositiveIntegerField(default=1)
    current_uses = models.PositiveIntegerField(default=0)
    min_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    valid_from = models.DateTimeField(default=timezone.now)
    valid_until = models.DateTimeField()
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        self.code = self.code.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self):
        return self.code


class CouponScope(models.Model):
    class ScopeType(models.TextChoices):
        ROLE = 'role', 'Role'
        KIOSK = 'kiosk', 'Kiosk'
        PRODUCT = 'product', 'Product'
        SUBSCRIPTION_TIER = 'subscription_tier', 'Subscription tier'

    coupon = models.ForeignKey(Coupon, on_delete=models.CASCADE, related_name='scopes')
    scope_type = models.CharField(max_length=30, choices=ScopeType.choices)
    scope_value = models.CharField(max_length=100)


class CouponUsage(models.Model):
    class Meta:
        indexes = [
            models.Index(fields=['coupon', 'user']),
        ]

    coupon = models.ForeignKey(Coupon, on_delete=models.CASCADE, related_name='usages')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='coupon_usages')
    campaign = models.ForeignKey(
        'campaigns.Campaign', null=True, blank=True, on_delete=models.SET_NULL, related_name='coupon_usages'
    )
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2)
    used_at = models.DateTimeField(auto_now_add=True)
