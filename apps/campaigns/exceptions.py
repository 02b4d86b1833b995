from rest_framework import status

from apps.common.exceptions import KioskAdsError


class ReviewError(KioskAdsError):
    default_message = "Invalid review request"


class RejectionReasonRequired(ReviewError):
    default_message = "A rejection reason is required"


class ReviewItemNotFound(ReviewError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Review item not found"
