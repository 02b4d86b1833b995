from decimal import Decimal
from unittest.mock import MagicMock, patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.db import DatabaseError
from django.test import TestCase
from google.api_core.exceptions import GoogleAPIError
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import User
from apps.billing.models import PaymentRecord
from apps.common.exceptions import InvalidTransition
from apps.custom_ads import services
from apps.custom_ads.exceptions import FileValidationError, NoValidFilesError, OrderError, UploadError
from apps.custom_ads.models import CustomAdOrder, OrderComment, OrderNotification, Proof
from apps.notifications.models import EmailQueueItem

ORDER_DATA = {
    'service_key': 'video_ad',
    'first_name': 'Cora',
    'last_name': 'Client',
    'email': 'client@test.com',
    'details': '15 second promo for our spring sale',
    'total_amount': Decimal('149.00'),
}


def png(name='banner.png', size=2048):
    return SimpleUploadedFile(name, b'\x89PNG' + b'0' * size, content_type='image/png')


def fake_storage():
    storage = MagicMock()
    storage.upload.side_effect = lambda path, data, content_type: f"https://storage.test/{path}"
    return storage


class CreateOrderTest(TestCase):
    def setUp(self):
        call_command('seed_email_templates', verbosity=0)
        self.user = User.objects.create_user(
            username='client@test.com', email='client@test.com', password='testpass123', role='client'
        )
        User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )

    def test_no_valid_files_raises_before_insert(self):
        storage = fake_storage()
        tiny = SimpleUploadedFile('tiny.png', b'x', content_type='image/png')

        with self.assertRaises(NoValidFilesError):
            services.create_order(self.user, dict(ORDER_DATA), [tiny], storage=storage)

        storage.upload.assert_not_called()
        self.assertFalse(CustomAdOrder.objects.exists())
        self.assertFalse(PaymentRecord.objects.exists())

    def test_creates_order_with_valid_files_only(self):
        storage = fake_storage()
        script = SimpleUploadedFile('run.sh', b'0' * 2048, content_type='application/x-sh')

        order, rejected = services.create_order(self.user, dict(ORDER_DATA), [png(), script], storage=storage)

        self.assertEqual(order.workflow_status, CustomAdOrder.WorkflowStatus.SUBMITTED)
        self.assertEqual(len(order.files), 1)
        self.assertEqual(order.files[0]['name'], 'banner.png')
        self.assertTrue(order.files[0]['url'].startswith('https://storage.test/'))
        self.assertRegex(order.files[0]['path'], rf'^{self.user.pk}/\d+-[a-z0-9]{{7}}-[0-9a-f]{{8}}\.png$')
        self.assertEqual([name for name, _ in rejected], ['run.sh'])

        payment = PaymentRecord.objects.get(custom_ad_order=order)
        self.assertEqual(payment.description, 'Custom Ad Order: video_ad')
        self.assertEqual(payment.amount, Decimal('149.00'))
        self.assertTrue(OrderNotification.objects.filter(order=order, recipient=self.user).exists())
        self.assertTrue(EmailQueueItem.objects.filter(recipient_email='admin@test.com').exists())

    def test_upload_failure_cleans_up(self):
        storage = fake_storage()
        storage.upload.side_effect = ['https://storage.test/first', GoogleAPIError('bucket unavailable')]

        with self.assertRaises(UploadError):
            services.create_order(
                self.user, dict(ORDER_DATA), [png('a.png'), png('b.png', size=4096)], storage=storage
            )

        self.assertEqual(storage.delete.call_count, 1)
        self.assertFalse(CustomAdOrder.objects.exists())

    def test_insert_failure_removes_uploaded_blobs(self):
        storage = fake_storage()
        with patch.object(CustomAdOrder.objects, 'create', side_effect=DatabaseError('insert failed')):
            with self.assertRaises(DatabaseError):
                services.create_order(self.user, dict(ORDER_DATA), [png()], storage=storage)
        self.assertEqual(storage.delete.call_count, 1)


class OrderWorkflowTest(TestCase):
    def setUp(self):
        call_command('seed_email_templates', verbosity=0)
        self.client_user = User.objects.create_user(
            username='client@test.com', email='client@test.com', password='testpass123', role='client'
        )
        self.designer = User.objects.create_user(
            username='designer@test.com', email='designer@test.com', password='testpass123',
            role='designer', full_name='Dana Designer'
        )
        self.order = CustomAdOrder.objects.create(user=self.client_user, files=[], **ORDER_DATA)

    def test_assign_designer_requires_designer_role(self):
        with self.assertRaises(OrderError):
            services.assign_designer(self.order, self.client_user)

    def test_cannot_skip_to_completed(self):
        with self.assertRaises(InvalidTransition):
            services.update_order_status(self.order, CustomAdOrder.WorkflowStatus.COMPLETED)

    def test_proof_cycle(self):
        order = services.assign_designer(self.order, self.designer)
        self.assertEqual(order.workflow_status, CustomAdOrder.WorkflowStatus.DESIGNER_ASSIGNED)
        self.assertTrue(EmailQueueItem.objects.filter(recipient_email='client@test.com').exists())

        first = services.create_proof(order, self.designer, 'https://storage.test/v1.png', title='First pass')
        self.assertEqual(first.version, 1)
        services.submit_proof(first)
        order.refresh_from_db()
        self.assertEqual(order.workflow_status, CustomAdOrder.WorkflowStatus.PROOFS_READY)

        with self.assertRaises(OrderError):
            services.reject_proof(first, '  ')
        services.reject_proof(first, 'Make the logo bigger')
        first.refresh_from_db()
        order.refresh_from_db()
        self.assertEqual(first.status, Proof.Status.REVISION_REQUESTED)
        self.assertEqual(order.workflow_status, CustomAdOrder.WorkflowStatus.CLIENT_REVIEW)
        self.assertEqual(order.rejection_reason, 'Make the logo bigger')

        second = services.create_proof(order, self.designer, 'https://storage.test/v2.png')
        self.assertEqual(second.version, 2)
        services.submit_proof(second)
        services.approve_proof(second, 'Looks great')
        order.refresh_from_db()
        self.assertEqual(order.workflow_status, CustomAdOrder.WorkflowStatus.APPROVED)

        order = services.update_order_status(order, CustomAdOrder.WorkflowStatus.COMPLETED)
        self.assertIsNotNone(order.actual_completion_date)
        self.assertTrue(
            EmailQueueItem.objects.filter(subject__contains='is complete', recipient_email='client@test.com').exists()
        )
        media = services.approved_media_for(self.client_user)
        self.assertEqual([m['url'] for m in media], ['https://storage.test/v2.png'])

    def test_request_changes_returns_to_designer(self):
        services.assign_designer(self.order, self.designer)
        proof = services.create_proof(self.order, self.designer, 'https://storage.test/v1.png')
        services.submit_proof(proof)

        order = services.request_changes(self.order, 'Use our brand colours')
        self.assertEqual(order.workflow_status, CustomAdOrder.WorkflowStatus.DESIGNER_ASSIGNED)
        self.assertEqual(order.client_notes, 'Use our brand colours')
        self.assertTrue(OrderComment.objects.filter(order=order, content='Use our brand colours').exists())

    def _ready_for_review(self):
        services.assign_designer(self.order, self.designer)
        proof = services.create_proof(self.order, self.designer, 'https://storage.test/v1.png')
        services.submit_proof(proof)

    def test_invalid_attachment_is_never_uploaded(self):
        self._ready_for_review()
        storage = fake_storage()
        script = SimpleUploadedFile('tiny.sh', b'x', content_type='application/x-sh')

        with self.assertRaises(FileValidationError):
            services.request_changes(self.order, 'See attached', attachments=[script], storage=storage)

        storage.upload.assert_not_called()
        self.assertFalse(OrderComment.objects.filter(order=self.order).exists())
        self.order.refresh_from_db()
        self.assertEqual(self.order.workflow_status, CustomAdOrder.WorkflowStatus.PROOFS_READY)

    def test_change_request_on_closed_order_uploads_nothing(self):
        CustomAdOrder.objects.filter(pk=self.order.pk).update(workflow_status=CustomAdOrder.WorkflowStatus.CANCELLED)
        storage = fake_storage()

        with self.assertRaises(InvalidTransition):
            services.request_changes(self.order, 'One more thing', attachments=[png()], storage=storage)

        storage.upload.assert_not_called()

    def test_failed_change_request_removes_attachments(self):
        self._ready_for_review()
        storage = fake_storage()

        with patch.object(OrderComment.objects, 'create', side_effect=DatabaseError('insert failed')):
            with self.assertRaises(DatabaseError):
                services.request_changes(self.order, 'See attached', attachments=[png()], storage=storage)

        self.assertEqual(storage.upload.call_count, 1)
        self.assertEqual(storage.delete.call_count, 1)
        self.order.refresh_from_db()
        self.assertEqual(self.order.workflow_status, CustomAdOrder.WorkflowStatus.PROOFS_READY)

    def test_mark_notification_read(self):
        services.assign_designer(self.order, self.designer)
        notification = services.notifications_for(self.client_user).first()
        services.mark_notification_read(notification)
        self.assertTrue(notification.is_read)
        self.assertIsNotNone(notification.read_at)
        self.assertFalse(services.notifications_for(self.client_user, unread_only=True).exists())


class OrderApiTest(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='client@test.com', email='client@test.com', password='testpass123', role='client'
        )
        self.other = User.objects.create_user(
            username='other@test.com', email='other@test.com', password='testpass123', role='client'
        )

    @patch('apps.custom_ads.services.get_storage')
    def test_create_order(self, get_storage):
        get_storage.return_value = fake_storage()
        self.client.force_authenticate(self.user)
        payload = {key: str(value) for key, value in ORDER_DATA.items()}
        payload['files'] = [png()]

        response = self.client.post('/api/v1/custom-ads/orders/', payload, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['order']['workflow_status'], 'submitted')
        self.assertEqual(len(response.data['order']['workflow_steps']), 7)
        self.assertEqual(response.data['rejected_files'], [])

    @patch('apps.custom_ads.services.get_storage')
    def test_create_order_without_valid_files(self, get_storage):
        get_storage.return_value = fake_storage()
        self.client.force_authenticate(self.user)
        payload = {key: str(value) for key, value in ORDER_DATA.items()}
        payload['files'] = [SimpleUploadedFile('tiny.png', b'x', content_type='image/png')]

        response = self.client.post('/api/v1/custom-ads/orders/', payload, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('No valid files', response.data['error'])
        self.assertFalse(CustomAdOrder.objects.exists())

    def test_other_clients_cannot_see_order(self):
        order = CustomAdOrder.objects.create(user=self.user, files=[], **ORDER_DATA)
        self.client.force_authenticate(self.other)
        response = self.client.get(f'/api/v1/custom-ads/orders/{order.pk}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
