from apps.common.exceptions import KioskAdsError


class CouponError(KioskAdsError):
    default_message = "This coupon is not valid for your purchase"
