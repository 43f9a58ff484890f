"""Custom exceptions for the audio-transcoder service."""


class TranscodeError(Exception):
    """Raised when the transcoding engine fails or cannot be started."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        detail = f": {cause}" if cause is not None and str(cause) else ""
        super().__init__(f"Failed to transcode audio file '{file_name}'{detail}")
