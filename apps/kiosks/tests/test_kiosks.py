from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import User
from apps.kiosks.models import Kiosk
from apps.kiosks.services import KIOSK_EXPORT_HEADERS, export_kiosks_csv


class KioskApiTest(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )
        self.host = User.objects.create_user(
            username='host@test.com', email='host@test.com', password='testpass123', role='host'
        )
        self.client_user = User.objects.create_user(
            username='client@test.com', email='client@test.com', password='testpass123'
        )
        self.hosted = Kiosk.objects.create(name='Hosted', location='Airport', host=self.host,
                                           status=Kiosk.Status.MAINTENANCE)
        self.public = Kiosk.objects.create(name='Public', location='Mall')

    def test_clients_see_active_kiosks(self):
        self.client.force_authenticate(self.client_user)
        response = self.client.get('/api/v1/kiosks/')
        self.assertEqual([k['name'] for k in response.data], ['Public'])

    def test_hosts_see_their_own(self):
        self.client.force_authenticate(self.host)
        response = self.client.get('/api/v1/kiosks/')
        self.assertEqual([k['name'] for k in response.data], ['Hosted'])

    def test_admin_filters_by_status(self):
        self.client.force_authenticate(self.admin)
        response = self.client.get('/api/v1/kiosks/', {'status': 'maintenance'})
        self.assertEqual([k['name'] for k in response.data], ['Hosted'])

    def test_negative_rate_rejected(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/v1/kiosks/', {'name': 'New', 'location': 'Park', 'base_rate': '-1'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_clients_cannot_create(self):
        self.client.force_authenticate(self.client_user)
        response = self.client.post('/api/v1/kiosks/', {'name': 'New', 'location': 'Park'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_export(self):
        self.client.force_authenticate(self.admin)
        response = self.client.get('/api/v1/kiosks/export/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'text/csv')

    def test_export_rows(self):
        lines = export_kiosks_csv().splitlines()
        self.assertEqual(lines[0], ','.join(KIOSK_EXPORT_HEADERS))
        self.assertEqual(len(lines), 3)
