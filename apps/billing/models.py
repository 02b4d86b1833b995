from django.conf import settings
from django.db import models


class Invoice(models.Model):
    class Meta:
        ordering = ['-created_at']

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        PAID = 'paid', 'Paid'
        VOID = 'void', 'Void'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='invoices')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    period_start = models.DateField()
    period_end = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)


class PaymentRecord(models.Model):
    class Meta:
        ordering = ['-payment_date']

    class PaymentType(models.TextChoices):
        CAMPAIGN = 'campaign', 'Campaign'
        CUSTOM_AD = 'custom_ad', 'Custom Ad'
        SUBSCRIPTION = 'subscription', 'Subscription'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='payments')
    custom_ad_order = models.ForeignKey(
        'custom_ads.CustomAdOrder', null=True, blank=True, on_delete=models.SET_NULL, related_name='payments'
    )
    campaign = models.ForeignKey(
        'campaigns.Campaign', null=True, blank=True, on_delete=models.SET_NULL, related_name='payments'
    )
    payment_type = models.CharField(max_length=20, choices=PaymentType.choices)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, default='succeeded')
    description = models.CharField(max_length=255, blank=True, default='')
    payment_date = models.DateTimeField(auto_now_add=True)
