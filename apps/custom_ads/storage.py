import logging

from django.conf import settings
from google.api_core.exceptions import GoogleAPIError, NotFound
from google.cloud import storage
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

logger = logging.getLogger(__name__)


class CustomAdStorage:
    def __init__(self, bucket_name=None, client=None):
        self.client = client or storage.Client()
        self.bucket_name = bucket_name or settings.CUSTOM_AD_UPLOAD_BUCKET

    @retry(
        retry=retry_if_exception_type(GoogleAPIError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    def upload(self, blob_name, data, content_type):
        bucket = self.client.bucket(self.bucket_name)
        blob = bucket.blob(blob_name)
        blob.cache_control = 'public, max-age=3600'

        blob.upload_from_string(data, content_type=content_type)
        logger.info(f"Uploaded {blob_name} to gs://{self.bucket_name}")

        return blob.public_url

    def delete(self, blob_name):
        try:
            self.client.bucket(self.bucket_name).blob(blob_name).delete()
        except NotFound:
            logger.warning(f"Blob {blob_name} already missing from {self.bucket_name}")

    def public_url(self, blob_name):
        return f"https://storage.googleapis.com/{self.bucket_name}/{blob_name}"


def get_storage():
    return CustomAdStorage()
