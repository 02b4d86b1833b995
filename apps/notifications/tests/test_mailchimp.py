from unittest.mock import patch

import requests
from django.core.cache import cache
from django.test import TestCase, override_settings

from apps.common.circuit_breaker import CircuitState
from apps.notifications.mailchimp import mailchimp_circuit, subscribe_to_newsletter


@override_settings(MAILCHIMP_API_KEY='key-us1', MAILCHIMP_AUDIENCE_ID='aud123')
class MailchimpTest(TestCase):
    def setUp(self):
        cache.clear()

    def test_not_configured(self):
        with self.settings(MAILCHIMP_API_KEY=''):
            self.assertFalse(subscribe_to_newsletter('client@test.com'))

    @patch('apps.notifications.mailchimp.requests.request')
    def test_subscribe(self, request):
        request.return_value.raise_for_status.return_value = None
        self.assertTrue(subscribe_to_newsletter('Client@Test.com', 'Cora Client', tags=['client']))
        method, url = request.call_args_list[0][0]
        self.assertEqual(method, 'PUT')
        self.assertIn('/lists/aud123/members/', url)
        self.assertEqual(request.call_args_list[0][1]['json']['merge_fields'], {'FNAME': 'Cora', 'LNAME': 'Client'})

    @patch('apps.notifications.mailchimp._send.retry.sleep')
    @patch('apps.notifications.mailchimp.requests.request', side_effect=requests.ConnectionError('down'))
    def test_failures_open_circuit(self, request, sleep):
        for _ in range(mailchimp_circuit.failure_threshold):
            self.assertFalse(subscribe_to_newsletter('client@test.com'))
        self.assertEqual(mailchimp_circuit.state_for(subscribe_to_newsletter), CircuitState.OPEN.value)

        calls = request.call_count
        self.assertFalse(subscribe_to_newsletter('client@test.com'))
        self.assertEqual(request.call_count, calls)
