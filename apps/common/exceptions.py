import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class KioskAdsError(Exception):
    """Base class for domain errors that map onto an HTTP status."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request could not be processed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidTransition(KioskAdsError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, entity, current, target):
        self.entity = entity
        self.current = current
        self.target = target
        super().__init__(f"Cannot transition {entity} from {current} to {target}")


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, KioskAdsError):
        logger.info(f"{exc.__class__.__name__}: {exc.message}")
        return Response({'error': exc.message}, status=exc.status_code)

    return None
