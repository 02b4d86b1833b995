from django.conf import settings
from django.db import models
from django.core.exceptions import ValidationError

from apps.common.transitions import StatusTransitionMixin


class Campaign(StatusTransitionMixin, models.Model):
    class Meta:
        app_label = 'campaigns'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status']),
            models.Index(fields=['status', 'end_date']),
        ]

    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        PENDING = 'pending', 'Pending'
        ACTIVE = 'active', 'Active'
        PAUSED = 'paused', 'Paused'
        COMPLETED = 'completed', 'Completed'
        REJECTED = 'rejected', 'Rejected'

    TRANSITIONS = {
        Status.DRAFT: (Status.PENDING,),
        Status.PENDING: (Status.ACTIVE, Status.REJECTED),
        Status.ACTIVE: (Status.PAUSED, Status.COMPLETED),
        Status.PAUSED: (Status.ACTIVE, Status.COMPLETED),
        Status.REJECTED: (Status.PENDING,),
        Status.COMPLETED: (),  # Terminal state
    }

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='campaigns')
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    budget = models.DecimalField(max_digits=12, decimal_places=2)
    total_spent = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    start_date = models.DateField()
    end_date = models.DateField()
    target_locations = models.CharField(max_length=255, blank=True)
    kiosks = models.ManyToManyField('kiosks.Kiosk', blank=True, related_name='campaigns')
    rejection_reason = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def clean(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError("start_date must not be after end_date")

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class MediaAsset(StatusTransitionMixin, models.Model):
    """An ad file uploaded by a client for one of their campaigns."""

    class Meta:
        app_label = 'campaigns'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at']),
        ]

    class Status(models.TextChoices):
        UPLOADING = 'uploading', 'Uploading'
        PROCESSING = 'processing', 'Processing'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'
        ARCHIVED = 'archived', 'Archived'
        SWAPPED = 'swapped', 'Swapped'

    PENDING_STATUSES = (Status.PROCESSING, Status.UPLOADING)

    TRANSITIONS = {
        Status.UPLOADING: (Status.APPROVED, Status.REJECTED),
        Status.PROCESSING: (Status.APPROVED, Status.REJECTED),
        Status.APPROVED: (Status.ARCHIVED, Status.SWAPPED),
        Status.ARCHIVED: (Status.APPROVED,),
    }

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='media_assets')
    campaign = models.ForeignKey(
        Campaign, null=True, blank=True, on_delete=models.SET_NULL, related_name='media_assets'
    )
    file_name = models.CharField(max_length=255)
    file_type = models.CharField(max_length=20, default='image')
    file_url = models.URLField(max_length=500, blank=True)
    file_size = models.BigIntegerField(default=0)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PROCESSING)
    validation_errors = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.file_name


class HostAd(StatusTransitionMixin, models.Model):
    """An ad a host uploads to run on their own kiosks."""

    class Meta:
        app_label = 'campaigns'
        ordering = ['-created_at']

    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        PENDING_REVIEW = 'pending_review', 'Pending Review'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'
        ACTIVE = 'active', 'Active'
        PAUSED = 'paused', 'Paused'
        COMPLETED = 'completed', 'Completed'

    TRANSITIONS = {
        Status.DRAFT: (Status.PENDING_REVIEW,),
        Status.PENDING_REVIEW: (Status.APPROVED, Status.REJECTED),
        Status.APPROVED: (Status.ACTIVE,),
        Status.ACTIVE: (Status.PAUSED, Status.COMPLETED),
        Status.REJECTED: (Status.PENDING_REVIEW,),
    }

    host = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='host_ads')
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    media_url = models.URLField(max_length=500, blank=True)
    media_type = models.CharField(max_length=20, default='image')
    duration = models.PositiveIntegerField(default=15)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    rejection_reason = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name


class AssetLifecycle(models.Model):
    class Meta:
        app_label = 'campaigns'
        ordering = ['-created_at']

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        ARCHIVED = 'archived', 'Archived'
        DELETED = 'deleted', 'Deleted'

    media_asset = models.ForeignKey(
        MediaAsset, null=True, blank=True, on_delete=models.SET_NULL, related_name='lifecycle'
    )
    campaign = models.ForeignKey(
        Campaign, null=True, blank=True, on_delete=models.SET_NULL, related_name='asset_lifecycle'
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    storage_folder = models.CharField(max_length=20, default='active')
    archived_at = models.DateTimeField(null=True, blank=True)
    restored_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
