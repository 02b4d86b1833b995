from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import patch
from zoneinfo import ZoneInfo

from django.core.management import call_command
from django.test import SimpleTestCase, TestCase, override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from apps.audit.models import AdminAuditLog
from apps.authentication.models import User
from apps.campaigns.models import AssetLifecycle, Campaign, MediaAsset
from apps.notifications.models import EmailQueueItem
from apps.scheduler import services
from apps.scheduler.exceptions import SchedulerError, UnknownScheduler
from tasks.schedulers import asset_folder_scheduler, campaign_status_scheduler


class ValidateTimeTest(SimpleTestCase):
    def test_accepts_24h_times(self):
        for value in ('00:00', '09:05', '23:59', ' 14:30 '):
            self.assertEqual(services.validate_time(value), value.strip())

    def test_rejects_bad_times(self):
        for value in ('24:00', '9:05', '12:60', 'noon', '', None, 930):
            with self.assertRaises(SchedulerError):
                services.validate_time(value)


class SchedulerControlTest(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )

    def test_unknown_scheduler(self):
        with self.assertRaises(UnknownScheduler):
            services.scheduler_info('nightly_backup')

    @override_settings(SCHEDULER_DEFAULT_TIME='02:00', SCHEDULER_TIMEZONE='America/Los_Angeles')
    def test_info_defaults(self):
        info = services.scheduler_info('campaign_status')
        self.assertTrue(info['enabled'])
        self.assertEqual(info['time'], '02:00')
        self.assertEqual(info['timezone'], 'America/Los_Angeles')
        self.assertIsNone(info['last_run'])

    def test_update_time_is_shared(self):
        services.update_time('campaign_status', '03:15', actor=self.admin)
        self.assertEqual(services.run_time('asset_folder'), '03:15')
        self.assertNotEqual(services.run_time('daily_pending_review'), '03:15')

    def test_disable(self):
        info = services.set_enabled('asset_folder', False, actor=self.admin)
        self.assertFalse(info['enabled'])
        self.assertEqual(asset_folder_scheduler(), {'skipped': True})

    def test_run_test_records_cron_activity(self):
        result = services.run_test('asset_folder', actor=self.admin)
        self.assertEqual(result, {'campaigns': 0, 'archived_assets': 0})
        activity = services.recent_activity()
        self.assertEqual([entry.resource_id for entry in activity], ['asset_folder'])
        self.assertIsNotNone(services.scheduler_info('asset_folder')['last_run'])

    def test_trigger_returns_task_id(self):
        """Tasks run eagerly under test settings, so the triggered run is recorded too"""
        task_id = services.trigger('asset_folder', actor=self.admin)
        self.assertTrue(task_id)
        self.assertTrue(services.last_run('asset_folder'))
        self.assertTrue(AdminAuditLog.objects.filter(action='trigger_scheduler').exists())

    @override_settings(SCHEDULER_TIMEZONE='America/Los_Angeles')
    def test_due_jobs_use_scheduler_timezone(self):
        services.update_time('campaign_status', '02:00', actor=self.admin)
        now = datetime(2026, 1, 15, 2, 0, tzinfo=ZoneInfo('America/Los_Angeles'))
        self.assertEqual(services.due_jobs(now), ['campaign_status', 'asset_folder'])
        services.set_enabled('asset_folder', False, actor=self.admin)
        self.assertEqual(services.due_jobs(now), ['campaign_status'])


class CampaignStatusSchedulerTest(TestCase):
    def setUp(self):
        call_command('seed_email_templates', verbosity=0)
        self.user = User.objects.create_user(
            username='client@test.com', email='client@test.com', password='testpass123', role='client'
        )
        today = services.local_now().date()
        self.finished = Campaign.objects.create(
            user=self.user, name='Winter', budget=Decimal('100'), status=Campaign.Status.ACTIVE,
            start_date=today - timedelta(days=30), end_date=today - timedelta(days=1),
        )
        self.ending = Campaign.objects.create(
            user=self.user, name='Spring', budget=Decimal('100'), status=Campaign.Status.ACTIVE,
            start_date=today - timedelta(days=10), end_date=today + timedelta(days=2),
        )
        self.running = Campaign.objects.create(
            user=self.user, name='Summer', budget=Decimal('100'), status=Campaign.Status.ACTIVE,
            start_date=today, end_date=today + timedelta(days=20),
        )

    def test_completes_and_warns(self):
        result = campaign_status_scheduler()

        self.finished.refresh_from_db()
        self.running.refresh_from_db()
        self.assertEqual(self.finished.status, Campaign.Status.COMPLETED)
        self.assertEqual(self.running.status, Campaign.Status.ACTIVE)
        self.assertEqual(result['completed'], 1)
        self.assertEqual(result['expiring_emails'], 1)
        self.assertTrue(EmailQueueItem.objects.filter(subject__icontains='Spring').exists())
        self.assertTrue(
            AdminAuditLog.objects.filter(resource_type='cron_job', resource_id='campaign_status').exists()
        )

    @override_settings(SCHEDULER_TIMEZONE='America/Los_Angeles')
    def test_last_day_uses_scheduler_timezone(self):
        # 18:30 in Los Angeles is already the next day in UTC
        evening = datetime(2026, 3, 31, 18, 30, tzinfo=ZoneInfo('America/Los_Angeles'))
        last_day = Campaign.objects.create(
            user=self.user, name='Easter', budget=Decimal('100'), status=Campaign.Status.ACTIVE,
            start_date=evening.date() - timedelta(days=7), end_date=evening.date(),
        )

        with patch('django.utils.timezone.now', return_value=evening.astimezone(ZoneInfo('UTC'))):
            campaign_status_scheduler()

        last_day.refresh_from_db()
        self.assertEqual(last_day.status, Campaign.Status.ACTIVE)
        item = EmailQueueItem.objects.get(subject__icontains='Easter')
        self.assertEqual(item.subject, 'Campaign Easter ends in 0 day(s)')

    def test_asset_folder_archives_completed_campaign_assets(self):
        asset = MediaAsset.objects.create(
            user=self.user, campaign=self.finished, file_name='winter.png', status=MediaAsset.Status.APPROVED
        )
        campaign_status_scheduler()
        result = asset_folder_scheduler()

        asset.refresh_from_db()
        self.assertEqual(asset.status, MediaAsset.Status.ARCHIVED)
        self.assertEqual(result['archived_assets'], 1)
        self.assertEqual(AssetLifecycle.objects.get(media_asset=asset).storage_folder, 'archive')


class SchedulerApiTest(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )
        self.client.force_authenticate(self.admin)

    def test_update_time_validates(self):
        response = self.client.put(
            '/api/v1/scheduler/schedulers/campaign_status/time/', {'time': '7pm'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('HH:MM', response.data['error'])

    def test_unknown_scheduler_404(self):
        response = self.client.get('/api/v1/scheduler/schedulers/unknown/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list(self):
        response = self.client.get('/api/v1/scheduler/schedulers/')
        self.assertEqual(
            [row['name'] for row in response.data], ['campaign_status', 'asset_folder', 'daily_pending_review']
        )
