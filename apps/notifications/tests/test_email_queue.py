import smtplib
from unittest.mock import patch

from django.core import mail
from django.test import SimpleTestCase, TestCase

from apps.notifications import queue
from apps.notifications.models import EmailQueueItem, EmailTemplate
from apps.notifications.rendering import render


class RenderTest(SimpleTestCase):
    def test_substitutes_values(self):
        self.assertEqual(
            render('Hi {{ name }}, order #{{order_id}}', {'name': 'Cora', 'order_id': 7}),
            'Hi Cora, order #7',
        )

    def test_none_renders_empty(self):
        self.assertEqual(render('Reason: {{reason}}', {'reason': None}), 'Reason: ')

    def test_strips_unknown_placeholders(self):
        self.assertEqual(render('Hello {{name}}{{missing}}!', {'name': 'Dana'}), 'Hello Dana!')


class QueueTemplatedEmailTest(TestCase):
    def test_missing_template_returns_none(self):
        with self.assertLogs('apps.notifications.queue', level='WARNING'):
            item = queue.queue_templated_email('ad_approval', 'client@test.com', {})
        self.assertIsNone(item)
        self.assertFalse(EmailQueueItem.objects.exists())

    def test_uses_active_template(self):
        EmailTemplate.objects.create(type='ad_approval', subject='Old', body_html='old', is_active=False)
        EmailTemplate.objects.create(
            type='ad_approval', subject='Approved: {{campaign_name}}', body_html='<p>{{campaign_name}}</p>'
        )
        item = queue.queue_templated_email('ad_approval', 'client@test.com', {'campaign_name': 'Spring'})
        self.assertEqual(item.subject, 'Approved: Spring')
        self.assertEqual(item.body_html, '<p>Spring</p>')
        self.assertEqual(item.status, EmailQueueItem.Status.PENDING)


class ProcessEmailQueueTest(TestCase):
    def setUp(self):
        self.item = queue.queue_email('client@test.com', 'Hello', '<p>Hello</p>')

    def test_sends_pending(self):
        result = queue.process_email_queue()
        self.assertEqual(result, {'processed': 1, 'sent': 1, 'failed': 0, 'retrying': 0})
        self.assertEqual(len(mail.outbox), 1)
        self.item.refresh_from_db()
        self.assertEqual(self.item.status, EmailQueueItem.Status.SENT)
        self.assertIsNotNone(self.item.sent_at)

    @patch('apps.notifications.queue._deliver', side_effect=smtplib.SMTPException('relay down'))
    def test_failure_retries_then_fails(self, deliver):
        for attempt in range(1, 3):
            result = queue.process_email_queue()
            self.assertEqual(result['retrying'], 1)
            self.item.refresh_from_db()
            self.assertEqual(self.item.retry_count, attempt)
            self.assertEqual(self.item.status, EmailQueueItem.Status.PENDING)

        result = queue.process_email_queue()
        self.assertEqual(result['failed'], 1)
        self.item.refresh_from_db()
        self.assertEqual(self.item.status, EmailQueueItem.Status.FAILED)
        self.assertEqual(self.item.error_message, 'relay down')

        # Exhausted items are no longer picked up
        self.assertEqual(queue.process_email_queue()['processed'], 0)

    def test_requeue_failed(self):
        self.item.status = EmailQueueItem.Status.FAILED
        self.item.retry_count = 3
        self.item.save()
        self.assertTrue(queue.requeue_email(self.item))
        self.assertEqual(self.item.retry_count, 0)
        self.assertEqual(self.item.status, EmailQueueItem.Status.PENDING)
        self.assertTrue(queue.cancel_email(self.item))
