from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication import services
from apps.authentication.exceptions import PreferenceError
from apps.authentication.models import User, UserPreference


class PreferenceServiceTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )

    def test_defaults_when_unset(self):
        self.assertEqual(services.get_preference(self.user, UserPreference.QUICK_ACTIONS), [])
        self.assertEqual(
            services.get_preference(self.user, UserPreference.ACTIVITY_SETTINGS),
            {'limit': 10, 'show_all': False, 'cleared': False},
        )

    def test_unknown_key(self):
        with self.assertRaises(PreferenceError):
            services.get_preference(self.user, 'theme')
        with self.assertRaises(PreferenceError):
            services.set_preference(self.user, 'theme', 'dark')

    def test_quick_actions_are_trimmed(self):
        value = services.set_preference(
            self.user, UserPreference.QUICK_ACTIONS, [{'label': ' Kiosks ', 'path': '/admin/kiosks '}]
        )
        self.assertEqual(value, [{'label': 'Kiosks', 'path': '/admin/kiosks', 'icon': ''}])
        self.assertEqual(services.get_preference(self.user, UserPreference.QUICK_ACTIONS), value)

    def test_quick_action_missing_path(self):
        with self.assertRaisesMessage(PreferenceError, "Quick action 1 is missing 'path'"):
            services.set_preference(self.user, UserPreference.QUICK_ACTIONS, [{'label': 'Kiosks'}])

    def test_activity_limit_validation(self):
        for bad in (0, -5, 'ten', True):
            with self.assertRaises(PreferenceError):
                services.set_preference(self.user, UserPreference.ACTIVITY_SETTINGS, {'limit': bad})

        value = services.set_preference(
            self.user, UserPreference.ACTIVITY_SETTINGS, {'limit': None, 'show_all': 1, 'extra': 'ignored'}
        )
        self.assertEqual(value, {'limit': None, 'show_all': True, 'cleared': False})


class PreferenceApiTest(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='admin@test.com', email='admin@test.com', password='testpass123', role='admin'
        )
        self.client.force_authenticate(self.user)

    def test_put_then_get(self):
        url = reverse('preference', args=[UserPreference.ACTIVITY_SETTINGS])
        response = self.client.put(url, {'value': {'limit': 25}}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.get(url)
        self.assertEqual(response.data['value']['limit'], 25)

    def test_invalid_value_returns_error(self):
        url = reverse('preference', args=[UserPreference.QUICK_ACTIONS])
        response = self.client.put(url, {'value': 'not a list'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'quick_actions must be a list')
