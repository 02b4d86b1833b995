from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import User
from apps.marketing import services
from apps.marketing.exceptions import MarketingError
from apps.marketing.models import MarketingTool, PartnerLogo, Testimonial


class MarketingServiceTest(TestCase):
    def test_active_tools_respect_window_and_priority(self):
        now = timezone.now()
        MarketingTool.objects.create(type='popup', title='Low', priority=1)
        MarketingTool.objects.create(type='popup', title='High', priority=5)
        MarketingTool.objects.create(type='popup', title='Expired', end_date=now - timedelta(days=1))
        MarketingTool.objects.create(type='popup', title='Future', start_date=now + timedelta(days=1))
        MarketingTool.objects.create(type='popup', title='Off', is_active=False)
        MarketingTool.objects.create(type='announcement_bar', title='Bar')

        titles = [t.title for t in services.active_marketing_tools('popup', now=now)]
        self.assertEqual(titles, ['High', 'Low'])

    def test_reorder_partner_logos(self):
        a = PartnerLogo.objects.create(name='A', logo_url='https://cdn.test/a.png')
        b = PartnerLogo.objects.create(name='B', logo_url='https://cdn.test/b.png', display_order=1)

        logos = services.reorder_partner_logos([b.pk, a.pk])

        self.assertEqual([logo.name for logo in logos], ['B', 'A'])

    def test_reorder_unknown_id(self):
        with self.assertRaises(MarketingError):
            services.reorder_partner_logos([999])


class MarketingApiTest(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )

    def test_public_view_needs_no_auth(self):
        Testimonial.objects.create(client_name='Pat', content='Great kiosks', is_featured=True)
        Testimonial.objects.create(client_name='Sam', content='Fine')
        PartnerLogo.objects.create(name='Hidden', logo_url='https://cdn.test/h.png', is_active=False)

        response = self.client.get('/api/v1/marketing/public/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t['client_name'] for t in response.data['testimonials']], ['Pat'])
        self.assertEqual(response.data['partners'], [])

    def test_toggle_logo(self):
        logo = PartnerLogo.objects.create(name='A', logo_url='https://cdn.test/a.png')
        self.client.force_authenticate(self.admin)

        response = self.client.post(f'/api/v1/partner-logos/{logo.pk}/toggle/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['is_active'])

    def test_management_requires_admin(self):
        user = User.objects.create_user(username='c@test.com', email='c@test.com', password='testpass123')
        self.client.force_authenticate(user)
        response = self.client.get('/api/v1/testimonials/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
