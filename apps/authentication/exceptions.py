from apps.common.exceptions import KioskAdsError


class PreferenceError(KioskAdsError):
    default_message = "Invalid preference"


class UserManagementError(KioskAdsError):
    default_message = "User operation not allowed"
