from django.conf import settings
from django.db import models

from apps.common.transitions import StatusTransitionMixin


class CustomAdOrder(StatusTransitionMixin, models.Model):
    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['workflow_status', 'created_at']),
        ]

    class WorkflowStatus(models.TextChoices):
        SUBMITTED = 'submitted', 'Submitted'
        IN_REVIEW = 'in_review', 'In Review'
        DESIGNER_ASSIGNED = 'designer_assigned', 'Designer Assigned'
        PROOFS_READY = 'proofs_ready', 'Proofs Ready'
        CLIENT_REVIEW = 'client_review', 'Client Review'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'

    class Priority(models.TextChoices):
        LOW = 'low', 'Low'
        NORMAL = 'normal', 'Normal'
        HIGH = 'high', 'High'
        URGENT = 'urgent', 'Urgent'

    TRANSITIONS = {
        WorkflowStatus.SUBMITTED: (
            WorkflowStatus.IN_REVIEW, WorkflowStatus.DESIGNER_ASSIGNED,
            WorkflowStatus.REJECTED, WorkflowStatus.CANCELLED,
        ),
        WorkflowStatus.IN_REVIEW: (
            WorkflowStatus.DESIGNER_ASSIGNED, WorkflowStatus.REJECTED, WorkflowStatus.CANCELLED,
        ),
        WorkflowStatus.DESIGNER_ASSIGNED: (WorkflowStatus.PROOFS_READY, WorkflowStatus.CANCELLED),
        WorkflowStatus.PROOFS_READY: (
            WorkflowStatus.CLIENT_REVIEW, WorkflowStatus.APPROVED, WorkflowStatus.DESIGNER_ASSIGNED,
        ),
        WorkflowStatus.CLIENT_REVIEW: (
            WorkflowStatus.DESIGNER_ASSIGNED, WorkflowStatus.PROOFS_READY, WorkflowStatus.APPROVED,
        ),
        WorkflowStatus.APPROVED: (WorkflowStatus.COMPLETED, WorkflowStatus.DESIGNER_ASSIGNED),
    }
    status_field = 'workflow_status'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='custom_ad_orders')
    service_key = models.CharField(max_length=100)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField()
    phone = models.CharField(max_length=30, blank=True, default='')
    address = models.CharField(max_length=255, blank=True, default='')
    details = models.TextField(blank=True, default='')
    files = models.JSONField(default=list)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    payment_status = models.CharField(max_length=20, default='succeeded')
    workflow_status = models.CharField(max_length=20, choices=WorkflowStatus.choices, default=WorkflowStatus.SUBMITTED)
    designer = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='design_orders'
    )
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.NORMAL)
    estimated_completion_date = models.DateField(null=True, blank=True)
    actual_completion_date = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True, default='')
    client_notes = models.TextField(blank=True, default='')
    designer_notes = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def client_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self):
        return f"Order #{self.pk} ({self.service_key})"


class OrderComment(models.Model):
    class Meta:
        ordering = ['created_at']

    order = models.ForeignKey(CustomAdOrder, on_delete=models.CASCADE, related_name='comments')
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='+')
    content = models.TextField()
    attachments = models.JSONField(default=list, blank=True)
    is_internal = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)


class Proof(StatusTransitionMixin, models.Model):
    class Meta:
        ordering = ['order', '-version']
        constraints = [
            models.UniqueConstraint(fields=['order', 'version'], name='unique_proof_version_per_order')
        ]

    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        SUBMITTED = 'submitted', 'Submitted'
        APPROVED = 'approved', 'Approved'
        REVISION_REQUESTED = 'revision_requested', 'Revision Requested'

    TRANSITIONS = {
        Status.DRAFT: (Status.SUBMITTED,),
        Status.SUBMITTED: (Status.APPROVED, Status.REVISION_REQUESTED),
    }

    order = models.ForeignKey(CustomAdOrder, on_delete=models.CASCADE, related_name='proofs')
    designer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='proofs')
    version = models.PositiveIntegerField()
    title = models.CharField(max_length=200, blank=True, default='')
    description = models.TextField(blank=True, default='')
    file_url = models.URLField(max_length=500)
    file_name = models.CharField(max_length=255, blank=True, default='')
    file_type = models.CharField(max_length=100, blank=True, default='')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    client_feedback = models.TextField(blank=True, default='')
    designer_notes = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)


class OrderNotification(models.Model):
    class Meta:
        ordering = ['-created_at']

    class Type(models.TextChoices):
        ORDER_SUBMITTED = 'order_submitted', 'Order submitted'
        DESIGNER_ASSIGNED = 'designer_assigned', 'Designer assigned'
        PROOFS_READY = 'proofs_ready', 'Proofs ready'
        PROOF_APPROVED = 'proof_approved', 'Proof approved'
        PROOF_REJECTED = 'proof_rejected', 'Proof rejected'
        REVISION_REQUESTED = 'revision_requested', 'Revision requested'
        ORDER_COMPLETED = 'order_completed', 'Order completed'
        ORDER_CANCELLED = 'order_cancelled', 'Order cancelled'

    order = models.ForeignKey(CustomAdOrder, on_delete=models.CASCADE, related_name='notifications')
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='order_notifications'
    )
    notification_type = models.CharField(max_length=30, choices=Type.choices)
    title = models.CharField(max_length=200)
    message = models.TextField()
    is_read = models.BooleanField(default=False)
    email_sent = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    read_at = models.DateTimeField(null=True, blank=True)
