"""Shared exceptions for the transcoding worker."""


class ConfigurationError(Exception):
    """Raised when required configuration is missing or malformed."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid configuration for '{setting}': {reason}")


class MessageFormatError(Exception):
    """Raised when a queue message cannot be parsed into a transcode request."""

    def __init__(self, raw_body: str, detail: str):
        self.raw_body = raw_body
        self.detail = detail
        super().__init__(f"Malformed message: {detail}")


class UnsupportedSourceFormatError(MessageFormatError):
    """Raised when a filename does not carry the expected source extension."""

    def __init__(self, filename: str, expected_extension: str):
        self.filename = filename
        self.expected_extension = expected_extension
        super().__init__(
            filename,
            f"Expected '{filename}' to end with '{expected_extension}'",
        )


class UploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class QueueOperationError(Exception):
    """Raised when a receive, delete, send or attribute call on a queue fails."""

    def __init__(self, operation: str, queue_url: str, cause: Exception | None = None):
        self.operation = operation
        self.queue_url = queue_url
        self.cause = cause
        super().__init__(f"Queue {operation} failed for '{queue_url}'")
