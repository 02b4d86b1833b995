from apps.common.exceptions import KioskAdsError


class SettingError(KioskAdsError):
    default_message = "Invalid setting"
