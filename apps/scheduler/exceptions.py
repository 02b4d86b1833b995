from apps.common.exceptions import KioskAdsError


class SchedulerError(KioskAdsError):
    default_message = "Invalid scheduler request"


class UnknownScheduler(SchedulerError):
    status_code = 404

    def __init__(self, name):
        super().__init__(f"Unknown scheduler '{name}'")
