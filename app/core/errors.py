"""Storage error types. Each carries the HTTP status the API layer responds with."""


class StorageError(Exception):
    """Base class for all asset storage errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StorageError):
    """Upload rejected before any network call (client error)."""

    status_code = 400


class InvalidFileTypeError(ValidationError):
    pass


class FileTooLargeError(ValidationError):
    pass


class NotFoundError(StorageError):
    status_code = 404


class BackendError(StorageError):
    """
    Failure reported by the storage backend or its transport.
    Message is "<operation prefix>: <backend message>".
    """

    prefix = "Storage operation failed"

    def __init__(self, detail: str) -> None:
        super().__init__(f"{self.prefix}: {detail}")
        self.detail = detail


class UploadFailedError(BackendError):
    prefix = "Upload failed"


class DeleteFailedError(BackendError):
    prefix = "Failed to delete file"


class SignedUrlFailedError(BackendError):
    prefix = "Failed to generate signed URL"


class MetadataFailedError(BackendError):
    prefix = "Failed to get file metadata"


class ListFailedError(BackendError):
    prefix = "Failed to list project files"


class ConfigurationError(StorageError):
    """Required startup configuration is missing. Fatal."""
