import hashlib
import logging

import requests
from django.conf import settings
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from apps.common.circuit_breaker import CircuitBreaker

logger = logging.getLogger(__name__)

mailchimp_circuit = CircuitBreaker(
    failure_threshold=3,
    recovery_timeout=120,
    expected_exception=requests.RequestException,
    fallback=False,
)


def _member_url(email):
    subscriber_hash = hashlib.md5(email.strip().lower().encode('utf-8')).hexdigest()
    return (
        f"https://{settings.MAILCHIMP_SERVER_PREFIX}.api.mailchimp.com/3.0/"
        f"lists/{settings.MAILCHIMP_AUDIENCE_ID}/members/{subscriber_hash}"
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    retry=retry_if_exception_type(requests.RequestException),
    reraise=True,
)
def _send(method, url, payload):
    response = requests.request(
        method,
        url,
        json=payload,
        auth=('kioskads', settings.MAILCHIMP_API_KEY),
        timeout=settings.MAILCHIMP_TIMEOUT,
    )
    response.raise_for_status()
    return response


@mailchimp_circuit
def subscribe_to_newsletter(email, full_name='', tags=None):
    """Upsert ``email`` into the Mailchimp audience. Returns True on success."""
    if not settings.MAILCHIMP_API_KEY or not settings.MAILCHIMP_AUDIENCE_ID:
        logger.info(f"Mailchimp not configured; skipping subscription for {email}")
        return False

    first_name, _, last_name = (full_name or '').strip().partition(' ')
    url = _member_url(email)
    _send('PUT', url, {
        'email_address': email,
        'status_if_new': 'subscribed',
        'merge_fields': {'FNAME': first_name, 'LNAME': last_name},
    })
    if tags:
        _send('POST', f"{url}/tags", {
            'tags': [{'name': tag, 'status': 'active'} for tag in tags],
        })

    logger.info(f"Subscribed {email} to Mailchimp audience {settings.MAILCHIMP_AUDIENCE_ID}")
    return True
