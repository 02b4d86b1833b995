from django.db import models


class MarketingTool(models.Model):
    class Meta:
        ordering = ['-priority', '-created_at']

    class Type(models.TextChoices):
        ANNOUNCEMENT_BAR = 'announcement_bar', 'Announcement bar'
        POPUP = 'popup', 'Popup'
        TESTIMONIAL = 'testimonial', 'Testimonial'
        SALES_NOTIFICATION = 'sales_notification', 'Sales notification'

    type = models.CharField(max_length=30, choices=Type.choices)
    title = models.CharField(max_length=200)
    content = models.TextField(blank=True, default='')
    settings = models.JSONField(default=dict, blank=True)
    is_active = models.BooleanField(default=True)
    priority = models.IntegerField(default=0)
    target_audience = models.JSONField(default=dict, blank=True)
    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)


class Testimonial(models.Model):
    class Meta:
        ordering = ['display_order', '-created_at']

    client_name = models.CharField(max_length=150)
    client_company = models.CharField(max_length=150, blank=True, default='')
    client_avatar_url = models.URLField(max_length=500, blank=True, default='')
    content = models.TextField()
    rating = models.PositiveSmallIntegerField(null=True, blank=True)
    is_featured = models.BooleanField(default=False)
    display_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)


class PartnerLogo(models.Model):
    class Meta:
        ordering = ['display_order', 'name']

    name = models.CharField(max_length=150)
    logo_url = models.URLField(max_length=500)
    website_url = models.URLField(max_length=500, blank=True, default='')
    display_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
