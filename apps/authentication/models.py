from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    class Role(models.TextChoices):
        CLIENT = 'client', 'Client'
        HOST = 'host', 'Host'
        DESIGNER = 'designer', 'Designer'
        ADMIN = 'admin', 'Admin'

    class SubscriptionTier(models.TextChoices):
        FREE = 'free', 'Free'
        BASIC = 'basic', 'Basic'
        PREMIUM = 'premium', 'Premium'
        ENTERPRISE = 'enterprise', 'Enterprise'

    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.CLIENT, db_index=True)
    company_name = models.CharField(max_length=150, blank=True, null=True)
    subscription_tier = models.CharField(
        max_length=20, choices=SubscriptionTier.choices, default=SubscriptionTier.FREE
    )
    newsletter_opt_in = models.BooleanField(default=False)

    # Fix reverse accessor conflicts
    groups = models.ManyToManyField(
        'auth.Group',
        related_name='custom_user_set',
        blank=True
    )
    user_permissions = models.ManyToManyField(
        'auth.Permission',
        related_name='custom_user_set',
        blank=True
    )

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    @property
    def is_platform_admin(self):
        return self.role == self.Role.ADMIN or self.is_superuser

    @property
    def display_name(self):
        return self.full_name or self.email


class UserPreference(models.Model):
    """Admin UI preferences keyed per user (quick actions, activity list)."""

    QUICK_ACTIONS = 'quick_actions'
    ACTIVITY_SETTINGS = 'activity_settings'
    KEYS = (QUICK_ACTIONS, ACTIVITY_SETTINGS)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['user', 'key'], name='unique_preference_per_user')
        ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='preferences')
    key = models.CharField(max_length=50)
    value = models.JSONField(default=dict)
    updated_at = models.DateTimeField(auto_now=True)
