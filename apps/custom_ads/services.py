import hashlib
import logging

from django.db import DatabaseError, transaction
from django.db.models import Max
from django.utils import timezone
from django.utils.crypto import get_random_string
from google.api_core.exceptions import GoogleAPIError

from apps.billing.models import PaymentRecord
from apps.common.exceptions import InvalidTransition
from apps.notifications.admin_notifications import notify_custom_ad_purchased
from apps.notifications.queue import safe_queue_templated_email
from .exceptions import FileValidationError, NoValidFilesError, OrderError, UploadError
from .models import CustomAdOrder, OrderComment, OrderNotification, Proof
from .storage import get_storage
from .validation import validate_files

logger = logging.getLogger(__name__)

Status = CustomAdOrder.WorkflowStatus

# Order statuses that trigger a client email when set by an admin or designer
STATUS_EMAILS = {
    Status.APPROVED: 'custom_ad_approved',
    Status.REJECTED: 'custom_ad_rejected',
    Status.COMPLETED: 'custom_ad_completed',
    Status.CANCELLED: 'custom_ad_cancelled',
}


# Uploads

def build_blob_name(user_id, file_name, content, now=None):
    now = now or timezone.now()
    ext = file_name.rsplit('.', 1)[-1].lower() if '.' in file_name else 'bin'
    random_id = get_random_string(7, allowed_chars='abcdefghijklmnopqrstuvwxyz0123456789')
    digest = hashlib.sha256(content).hexdigest()[:8]
    return f"{user_id}/{int(now.timestamp() * 1000)}-{random_id}-{digest}.{ext}"


def _read(upload):
    if hasattr(upload, 'seek'):
        upload.seek(0)
    return upload.read()


def _remove_blobs(storage, uploaded):
    for item in uploaded:
        try:
            storage.delete(item['path'])
        except GoogleAPIError as e:
            logger.error(f"Failed to clean up uploaded blob {item['path']}: {e}")


def upload_files(user, uploads, storage=None):
    """Upload already-validated files and return their summaries.

    If any upload fails, the blobs stored so far are removed before the
    error propagates.
    """
    storage = storage or get_storage()
    uploaded = []
    for upload in uploads:
        content = _read(upload)
        path = build_blob_name(user.pk, upload.name, content)
        try:
            url = storage.upload(path, content, upload.content_type)
        except GoogleAPIError as e:
            logger.error(f"Upload of {upload.name} failed: {e}")
            _remove_blobs(storage, uploaded)
            raise UploadError(f"Failed to upload {upload.name}: {e}")
        uploaded.append({
            'name': upload.name,
            'url': url,
            'size': upload.size,
            'type': upload.content_type,
            'path': path,
        })
    return uploaded


# Orders

def create_order(user, order_data, uploads, storage=None):
    """Validate and upload ``uploads`` then record the order.

    Returns ``(order, rejected)`` where ``rejected`` lists the
    ``(file name, reason)`` pairs that were left out of the order.
    """
    result = validate_files(uploads)
    if not result.valid:
        reasons = '; '.join(f"{name}: {reason}" for name, reason in result.rejected)
        raise NoValidFilesError(
            f"No valid files provided for upload. {reasons}".strip() if reasons else None
        )

    storage = storage or get_storage()
    uploaded = upload_files(user, result.valid, storage)
    if len(uploaded) != len(result.valid):
        _remove_blobs(storage, uploaded)
        raise UploadError(
            f"Only {len(uploaded)} out of {len(result.valid)} files were uploaded successfully"
        )

    try:
        with transaction.atomic():
            order = CustomAdOrder.objects.create(
                user=user,
                files=uploaded,
                workflow_status=Status.SUBMITTED,
                payment_status='succeeded',
                **order_data
            )
    except DatabaseError:
        logger.exception(f"Order insert failed for {user.email}; removing uploaded files")
        _remove_blobs(storage, uploaded)
        raise

    logger.info(f"Custom ad order {order.pk} created by {user.email} with {len(uploaded)} file(s)")
    _record_payment(order)
    _notify(order, order.user, OrderNotification.Type.ORDER_SUBMITTED,
            "Order submitted", f"Your {order.service_key} order has been received.")
    notify_custom_ad_purchased(order)
    return order, result.rejected


def _record_payment(order):
    try:
        return PaymentRecord.objects.create(
            user=order.user,
            custom_ad_order=order,
            payment_type=PaymentRecord.PaymentType.CUSTOM_AD,
            amount=order.total_amount,
            status=order.payment_status,
            description=f"Custom Ad Order: {order.service_key}",
        )
    except DatabaseError as e:
        logger.error(f"Could not record payment for order {order.pk}: {e}")
        return None


def _notify(order, recipient, notification_type, title, message):
    if recipient is None:
        return None
    try:
        return OrderNotification.objects.create(
            order=order,
            recipient=recipient,
            notification_type=notification_type,
            title=title,
            message=message,
        )
    except DatabaseError as e:
        logger.error(f"Could not store {notification_type} notification for order {order.pk}: {e}")
        return None


def order_variables(order, **extra):
    variables = {
        'order_id': order.pk,
        'client_name': order.client_name or order.user.display_name,
        'client_email': order.email,
        'designer_name': order.designer.display_name if order.designer else '',
        'service_name': order.service_key,
        'total_amount': f"{order.total_amount:.2f}",
        'rejection_reason': order.rejection_reason,
    }
    variables.update(extra)
    return variables


def _email_client(order, template_type, **extra):
    return safe_queue_templated_email(
        template_type, order.email, order_variables(order, **extra), recipient_name=order.client_name
    )


def _email_designer(order, template_type, **extra):
    if order.designer is None:
        return None
    return safe_queue_templated_email(
        template_type, order.designer.email, order_variables(order, **extra),
        recipient_name=order.designer.display_name,
    )


def _locked(order_id):
    return CustomAdOrder.objects.select_for_update().select_related('user').get(pk=order_id)


def _move(order, new_status):
    """Transition ``order`` unless it already sits in ``new_status``."""
    if order.workflow_status != new_status:
        order.transition_to(new_status)


def assign_designer(order, designer):
    if designer.role != 'designer':
        raise OrderError(f"{designer.email} is not a designer")

    with transaction.atomic():
        order = _locked(order.pk)
        _move(order, Status.DESIGNER_ASSIGNED)
        order.designer = designer
        order.save()

    _notify(order, order.user, OrderNotification.Type.DESIGNER_ASSIGNED,
            "Designer assigned", f"{designer.display_name} is working on your order.")
    _notify(order, designer, OrderNotification.Type.DESIGNER_ASSIGNED,
            "New design order", f"Order #{order.pk} ({order.service_key}) was assigned to you.")
    _email_client(order, 'custom_ad_designer_assigned')
    return order


def update_order_status(order, new_status, notes=None, rejection_reason=None):
    with transaction.atomic():
        order = _locked(order.pk)
        order.transition_to(new_status)
        if notes:
            order.designer_notes = notes
        if rejection_reason:
            order.rejection_reason = rejection_reason
        if new_status == Status.COMPLETED:
            order.actual_completion_date = timezone.now()
        order.save()

    if new_status == Status.COMPLETED:
        _notify(order, order.user, OrderNotification.Type.ORDER_COMPLETED,
                "Order completed", "Your custom ad is ready.")
    elif new_status == Status.CANCELLED:
        _notify(order, order.user, OrderNotification.Type.ORDER_CANCELLED,
                "Order cancelled", f"Order #{order.pk} was cancelled.")

    template_type = STATUS_EMAILS.get(new_status)
    if template_type == 'custom_ad_approved':
        _email_designer(order, template_type)
    elif template_type:
        _email_client(order, template_type)
    return order


def approve_order(order, feedback=''):
    with transaction.atomic():
        order = _locked(order.pk)
        order.transition_to(Status.APPROVED)
        order.client_notes = feedback or order.client_notes
        order.save()
        if feedback:
            OrderComment.objects.create(order=order, author=order.user, content=feedback)

    _notify(order, order.designer, OrderNotification.Type.PROOF_APPROVED,
            "Design approved", f"{order.client_name} approved order #{order.pk}.")
    _email_designer(order, 'custom_ad_approved')
    return order


def _upload_attachments(order, attachments, storage):
    """Validate and upload change-request attachments.

    Any rejected file fails the whole request before anything is stored.
    """
    result = validate_files(attachments)
    if result.rejected:
        reasons = '; '.join(f"{name}: {reason}" for name, reason in result.rejected)
        raise FileValidationError(f"Invalid attachment(s): {reasons}")
    return upload_files(order.user, result.valid, storage)


def request_changes(order, change_request, attachments=None, storage=None):
    """Send the order back to its designer with the client's change request.

    ``attachments`` are uploaded files stored next to the order's uploads.
    """
    if not change_request or not change_request.strip():
        raise OrderError("A description of the requested changes is required")

    order.refresh_from_db(fields=['workflow_status'])
    if not order.can_transition_to(Status.DESIGNER_ASSIGNED):
        raise InvalidTransition(order._meta.verbose_name, order.workflow_status, Status.DESIGNER_ASSIGNED)

    stored = []
    if attachments:
        storage = storage or get_storage()
        stored = _upload_attachments(order, attachments, storage)

    try:
        with transaction.atomic():
            order = _locked(order.pk)
            order.transition_to(Status.DESIGNER_ASSIGNED)
            order.client_notes = change_request
            order.save()

            content = change_request
            if stored:
                content = f"{change_request}\n\nAttached files: {', '.join(f['name'] for f in stored)}"
            OrderComment.objects.create(order=order, author=order.user, content=content, attachments=stored)
    except (InvalidTransition, DatabaseError):
        if stored:
            logger.warning(f"Change request on order {order.pk} failed; removing {len(stored)} attachment(s)")
            _remove_blobs(storage, stored)
        raise

    _notify(order, order.designer, OrderNotification.Type.REVISION_REQUESTED,
            "Changes requested", change_request)
    _email_designer(order, 'custom_ad_changes_requested', feedback=change_request)
    return order


def add_comment(order, author, content, attachments=None, is_internal=False):
    if not content or not content.strip():
        raise OrderError("Comment content is required")
    return OrderComment.objects.create(
        order=order,
        author=author,
        content=content.strip(),
        attachments=attachments or [],
        is_internal=is_internal,
    )


def visible_comments(order, user):
    comments = order.comments.select_related('author')
    if user.is_platform_admin or order.designer_id == user.pk:
        return comments
    return comments.filter(is_internal=False)


# Proofs

def create_proof(order, designer, file_url, title='', description='', file_name='', file_type=''):
    with transaction.atomic():
        order = _locked(order.pk)
        if order.designer_id != designer.pk and not designer.is_platform_admin:
            raise OrderError("Only the assigned designer can add proofs")
        latest = order.proofs.aggregate(latest=Max('version'))['latest'] or 0
        proof = Proof.objects.create(
            order=order,
            designer=designer,
            version=latest + 1,
            title=title,
            description=description,
            file_url=file_url,
            file_name=file_name,
            file_type=file_type,
        )
    logger.info(f"Proof v{proof.version} created for order {order.pk}")
    return proof


def _locked_proof(proof_id):
    return Proof.objects.select_for_update().select_related('order').get(pk=proof_id)


def submit_proof(proof, designer_notes=''):
    with transaction.atomic():
        proof = _locked_proof(proof.pk)
        proof.transition_to(Proof.Status.SUBMITTED)
        proof.designer_notes = designer_notes or proof.designer_notes
        proof.save()

        order = _locked(proof.order_id)
        _move(order, Status.PROOFS_READY)
        order.save()

    _notify(order, order.user, OrderNotification.Type.PROOFS_READY,
            "Proofs ready", f"Version {proof.version} of your design is ready for review.")
    _email_client(order, 'custom_ad_proofs_ready', proof_version=proof.version)
    return proof


def approve_proof(proof, feedback=''):
    with transaction.atomic():
        proof = _locked_proof(proof.pk)
        proof.transition_to(Proof.Status.APPROVED)
        proof.client_feedback = feedback or ''
        proof.save()

        order = _locked(proof.order_id)
        order.transition_to(Status.APPROVED)
        order.save()

    _notify(order, order.designer, OrderNotification.Type.PROOF_APPROVED,
            "Proof approved", f"Version {proof.version} of order #{order.pk} was approved.")
    _email_designer(order, 'custom_ad_approved', proof_version=proof.version)
    return proof


def reject_proof(proof, feedback):
    feedback = (feedback or '').strip()
    if not feedback:
        raise OrderError("Feedback is required when requesting a revision")

    with transaction.atomic():
        proof = _locked_proof(proof.pk)
        proof.transition_to(Proof.Status.REVISION_REQUESTED)
        proof.client_feedback = feedback
        proof.save()

        order = _locked(proof.order_id)
        _move(order, Status.CLIENT_REVIEW)
        order.rejection_reason = feedback
        order.save()

    _notify(order, order.designer, OrderNotification.Type.PROOF_REJECTED,
            "Revision requested", feedback)
    _email_designer(order, 'custom_ad_proof_rejected', proof_version=proof.version, feedback=feedback)
    return proof


# Notifications and media

def notifications_for(user, unread_only=False):
    notifications = OrderNotification.objects.filter(recipient=user)
    if unread_only:
        notifications = notifications.filter(is_read=False)
    return notifications


def mark_notification_read(notification):
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = timezone.now()
        notification.save(update_fields=['is_read', 'read_at'])
    return notification


def approved_media_for(user):
    """Files of the user's approved or completed orders, ready to schedule on kiosks."""
    orders = CustomAdOrder.objects.filter(
        user=user, workflow_status__in=(Status.APPROVED, Status.COMPLETED)
    ).prefetch_related('proofs')

    media = []
    for order in orders:
        approved = [p for p in order.proofs.all() if p.status == Proof.Status.APPROVED]
        if approved:
            proof = approved[0]
            media.append({
                'order_id': order.pk,
                'name': proof.file_name or proof.title or f"Order #{order.pk}",
                'url': proof.file_url,
                'type': proof.file_type,
                'source': 'proof',
                'created_at': proof.created_at,
            })
            continue
        for item in order.files:
            media.append({
                'order_id': order.pk,
                'name': item.get('name'),
                'url': item.get('url'),
                'type': item.get('type'),
                'source': 'upload',
                'created_at': order.created_at,
            })
    return media
