from apps.common.exceptions import KioskAdsError


class MarketingError(KioskAdsError):
    default_message = "Invalid marketing content request"
