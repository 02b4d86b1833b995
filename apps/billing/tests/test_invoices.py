from datetime import date
from decimal import Decimal

from rest_framework import status
from rest_framework.test import APITestCase

from apps.audit.models import AdminAuditLog
from apps.authentication.models import User
from apps.billing.models import Invoice, PaymentRecord


class InvoiceApiTest(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )
        self.alice = User.objects.create_user(username='alice@test.com', email='alice@test.com', password='testpass123')
        self.bob = User.objects.create_user(username='bob@test.com', email='bob@test.com', password='testpass123')
        period = {'period_start': date(2026, 1, 1), 'period_end': date(2026, 1, 31)}
        self.alice_invoice = Invoice.objects.create(user=self.alice, amount=Decimal('10'), **period)
        Invoice.objects.create(user=self.bob, amount=Decimal('20'), **period)

    def test_clients_see_only_their_invoices(self):
        self.client.force_authenticate(self.alice)
        response = self.client.get('/api/v1/billing/invoices/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([i['id'] for i in response.data], [self.alice_invoice.pk])

    def test_admin_filters_by_user(self):
        self.client.force_authenticate(self.admin)
        self.assertEqual(len(self.client.get('/api/v1/billing/invoices/').data), 2)
        response = self.client.get('/api/v1/billing/invoices/', {'user': self.bob.pk})
        self.assertEqual(len(response.data), 1)

    def test_clients_cannot_create(self):
        self.client.force_authenticate(self.alice)
        response = self.client.post('/api/v1/billing/invoices/', {
            'amount': '5.00', 'period_start': '2026-02-01', 'period_end': '2026-02-28',
        })
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_create_is_audited(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/v1/billing/invoices/', {
            'user_id': self.bob.pk, 'amount': '5.00', 'period_start': '2026-02-01', 'period_end': '2026-02-28',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user'], self.bob.pk)
        self.assertTrue(AdminAuditLog.objects.filter(action='create_invoice').exists())

    def test_period_must_be_ordered(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/v1/billing/invoices/', {
            'amount': '5.00', 'period_start': '2026-03-01', 'period_end': '2026-02-01',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_payments_are_scoped(self):
        PaymentRecord.objects.create(user=self.alice, payment_type='subscription', amount=Decimal('9.99'))
        PaymentRecord.objects.create(user=self.bob, payment_type='subscription', amount=Decimal('9.99'))
        self.client.force_authenticate(self.alice)
        response = self.client.get('/api/v1/billing/payments/')
        self.assertEqual(len(response.data), 1)
