import logging
from collections import namedtuple

from django.conf import settings

from .exceptions import FileValidationError

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = (
    'image/jpeg', 'image/jpg', 'image/png', 'image/gif', 'image/webp',
    'video/mp4', 'video/avi', 'video/mov', 'video/wmv',
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'text/plain',
)

ValidationResult = namedtuple('ValidationResult', ['valid', 'rejected'])


def _format_size(num_bytes):
    if num_bytes >= 1024 * 1024:
        return f"{num_bytes // (1024 * 1024)}MB"
    return f"{num_bytes // 1024}KB"


def file_error(upload):
    """Return the reason ``upload`` cannot be accepted, or None when it is fine."""
    name = (getattr(upload, 'name', '') or '').strip()
    size = getattr(upload, 'size', 0) or 0
    content_type = getattr(upload, 'content_type', '') or ''

    if not name:
        return "File name is required"
    if size < settings.CUSTOM_AD_MIN_FILE_SIZE:
        return f"File too small: {name} ({size} bytes)"
    if size > settings.CUSTOM_AD_MAX_FILE_SIZE:
        return f"File size must be under {_format_size(settings.CUSTOM_AD_MAX_FILE_SIZE)}"
    if content_type not in ALLOWED_CONTENT_TYPES:
        return f"File type {content_type or 'unknown'} is not supported"
    return None


def validate_files(uploads):
    """Split ``uploads`` into accepted files and ``(name, reason)`` rejections.

    Repeats of the same (name, size, content type) within one submission are
    dropped silently. Submitting more than CUSTOM_AD_MAX_FILES rejects the
    whole batch.
    """
    uploads = list(uploads or [])
    max_files = settings.CUSTOM_AD_MAX_FILES
    if len(uploads) > max_files:
        raise FileValidationError(
            f"Maximum {max_files} files allowed. You selected {len(uploads)} files."
        )

    valid, rejected, seen = [], [], set()
    for upload in uploads:
        key = (upload.name, upload.size, getattr(upload, 'content_type', ''))
        if key in seen:
            logger.info(f"Skipping duplicate file {upload.name} in submission")
            continue
        seen.add(key)

        error = file_error(upload)
        if error:
            logger.warning(f"Rejected custom ad file {upload.name!r}: {error}")
            rejected.append((upload.name, error))
        else:
            valid.append(upload)
    return ValidationResult(valid, rejected)
