from apps.common.exceptions import KioskAdsError


class FileValidationError(KioskAdsError):
    default_message = "Invalid file"


class NoValidFilesError(FileValidationError):
    default_message = "No valid files provided for upload"


class UploadError(KioskAdsError):
    status_code = 502
    default_message = "File upload failed"


class OrderError(KioskAdsError):
    default_message = "Invalid order request"
