from datetime import date
from decimal import Decimal

from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.audit.models import AdminAuditLog
from apps.authentication.models import User
from apps.campaigns import review
from apps.campaigns.exceptions import RejectionReasonRequired, ReviewItemNotFound
from apps.campaigns.models import Campaign, HostAd, MediaAsset
from apps.common.exceptions import InvalidTransition
from apps.notifications.models import EmailQueueItem


class ReviewFixtureMixin:
    def setUp(self):
        call_command('seed_email_templates', verbosity=0)
        self.admin = User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )
        self.client_user = User.objects.create_user(
            username='client@test.com', email='client@test.com', password='testpass123',
            role='client', full_name='Cora Client'
        )
        self.host = User.objects.create_user(
            username='host@test.com', email='host@test.com', password='testpass123', role='host'
        )
        self.campaign = Campaign.objects.create(
            user=self.client_user,
            name='Spring Sale',
            budget=Decimal('500.00'),
            status=Campaign.Status.PENDING,
            start_date=date(2026, 3, 1),
            end_date=date(2026, 3, 31),
        )
        self.ad = MediaAsset.objects.create(
            user=self.client_user, campaign=self.campaign, file_name='spring.mp4', file_type='video'
        )
        self.host_ad = HostAd.objects.create(
            host=self.host, name='Lobby promo', status=HostAd.Status.PENDING_REVIEW
        )


class ReviewServiceTest(ReviewFixtureMixin, TestCase):
    def test_queue_entries_carry_kind(self):
        kinds = sorted(entry['kind'] for entry in review.all_pending())
        self.assertEqual(kinds, ['ad', 'campaign', 'host_ad'])
        self.assertEqual(review.pending_counts(), {'ad': 1, 'host_ad': 1, 'campaign': 1})

    def test_filter_by_kind(self):
        entries = review.all_pending('host_ad')
        self.assertEqual([(e['kind'], e['id']) for e in entries], [('host_ad', self.host_ad.pk)])

    def test_approve_ad_leaves_queue_and_emails_owner(self):
        review.review('ad', self.ad.pk, review.APPROVE, actor=self.admin)

        self.ad.refresh_from_db()
        self.assertEqual(self.ad.status, MediaAsset.Status.APPROVED)
        self.assertEqual(review.pending_counts()['ad'], 0)
        email = EmailQueueItem.objects.get(recipient_email='client@test.com')
        self.assertEqual(email.subject, 'Your ad for Spring Sale has been approved')
        self.assertTrue(AdminAuditLog.objects.filter(action='review_ad', resource_id=str(self.ad.pk)).exists())

    def test_reject_requires_reason(self):
        with self.assertRaises(RejectionReasonRequired):
            review.review('host_ad', self.host_ad.pk, review.REJECT, reason='   ', actor=self.admin)
        self.host_ad.refresh_from_db()
        self.assertEqual(self.host_ad.status, HostAd.Status.PENDING_REVIEW)

    def test_reject_stores_reason(self):
        review.review('host_ad', self.host_ad.pk, review.REJECT, reason=' Blurry video ', actor=self.admin)
        self.host_ad.refresh_from_db()
        self.assertEqual(self.host_ad.status, HostAd.Status.REJECTED)
        self.assertEqual(self.host_ad.rejection_reason, 'Blurry video')

    def test_second_review_conflicts(self):
        review.review('campaign', self.campaign.pk, review.APPROVE, actor=self.admin)
        with self.assertRaises(InvalidTransition):
            review.review('campaign', self.campaign.pk, review.REJECT, reason='Too late', actor=self.admin)
        self.campaign.refresh_from_db()
        self.assertEqual(self.campaign.status, Campaign.Status.ACTIVE)

    def test_rejected_campaign_notifies_owner_and_admins(self):
        review.review('campaign', self.campaign.pk, review.REJECT, reason='Missing artwork', actor=self.admin)
        recipients = set(EmailQueueItem.objects.values_list('recipient_email', flat=True))
        self.assertEqual(recipients, {'client@test.com', 'admin@test.com'})

    def test_missing_item(self):
        with self.assertRaises(ReviewItemNotFound):
            review.review('ad', 9999, review.APPROVE, actor=self.admin)


class ReviewApiTest(ReviewFixtureMixin, APITestCase):
    def test_queue_requires_admin(self):
        self.client.force_authenticate(self.client_user)
        response = self.client.get(reverse('review-queue'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_double_review_returns_409(self):
        self.client.force_authenticate(self.admin)
        url = reverse('review-item')
        payload = {'kind': 'ad', 'id': self.ad.pk, 'action': 'approve'}

        first = self.client.post(url, payload, format='json')
        self.assertEqual(first.status_code, status.HTTP_200_OK)
        second = self.client.post(url, payload, format='json')
        self.assertEqual(second.status_code, status.HTTP_409_CONFLICT)
        self.assertIn('error', second.data)

    def test_reject_without_reason_returns_400(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse('review-item'), {'kind': 'campaign', 'id': self.campaign.pk, 'action': 'reject'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
