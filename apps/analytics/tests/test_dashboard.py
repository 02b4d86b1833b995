from datetime import date, timedelta
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.analytics.services import dashboard_metrics, growth_rate
from apps.authentication.models import User
from apps.billing.models import Invoice
from apps.campaigns.models import Campaign, MediaAsset
from apps.campaigns.review import pending_ads
from apps.kiosks.models import Kiosk


class GrowthRateTest(SimpleTestCase):
    def test_no_baseline(self):
        self.assertEqual(growth_rate(5, 0), 0)

    def test_rounds_to_two_places(self):
        self.assertEqual(growth_rate(4, 3), 33.33)
        self.assertEqual(growth_rate(1, 2), -50.0)


class DashboardMetricsTest(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )
        self.client_user = User.objects.create_user(
            username='client@test.com', email='client@test.com', password='testpass123'
        )
        old = User.objects.create_user(username='old@test.com', email='old@test.com', password='testpass123')
        User.objects.filter(pk=old.pk).update(date_joined=timezone.now() - timedelta(days=45))

        Kiosk.objects.create(name='Lobby', location='Main St')
        Kiosk.objects.create(name='Mall', location='Center', status=Kiosk.Status.MAINTENANCE)
        today = date.today()
        Invoice.objects.create(
            user=self.client_user, amount=Decimal('100.50'), period_start=today, period_end=today,
            status=Invoice.Status.PAID,
        )
        Invoice.objects.create(user=self.client_user, amount=Decimal('40'), period_start=today, period_end=today)
        Campaign.objects.create(
            user=self.client_user, name='Spring', budget=Decimal('500'),
            start_date=today, end_date=today + timedelta(days=10),
        )

    def test_counts(self):
        metrics = dashboard_metrics()
        self.assertEqual(metrics['total_users'], 3)
        self.assertEqual(metrics['active_kiosks'], 1)
        self.assertEqual(metrics['revenue'], 100.5)
        self.assertEqual(metrics['total_campaigns'], 1)
        self.assertEqual(metrics['recent_signups'], 2)
        self.assertEqual(metrics['monthly_growth'], 100.0)
        self.assertEqual(metrics['pending_host_ads'], 0)

    def test_pending_reviews_match_review_queue(self):
        for status_value in (MediaAsset.Status.PROCESSING, MediaAsset.Status.UPLOADING, MediaAsset.Status.APPROVED):
            MediaAsset.objects.create(user=self.client_user, file_name=f'{status_value}.png', status=status_value)

        metrics = dashboard_metrics()

        self.assertEqual(metrics['pending_reviews'], len(pending_ads()))
        self.assertEqual(metrics['pending_reviews'], 2)
        self.assertEqual(metrics['total_ads'], 3)


class DashboardApiTest(APITestCase):
    def test_admin_only(self):
        user = User.objects.create_user(username='client@test.com', email='client@test.com', password='testpass123')
        self.client.force_authenticate(user)
        response = self.client.get('/api/v1/analytics/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_circuit_breaker_status(self):
        admin = User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )
        self.client.force_authenticate(admin)
        response = self.client.get('/api/v1/analytics/circuit-breaker/status/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['overall_health'], 'OK')
