from transcoder_common.config import QueueConfig, StorageConfig
from transcoder_common.exceptions import (
    ConfigurationError,
    MessageFormatError,
    QueueOperationError,
    UnsupportedSourceFormatError,
    UploadError,
)
from transcoder_common.logging import setup_logging

__all__ = [
    "setup_logging",
    "ConfigurationError",
    "MessageFormatError",
    "QueueOperationError",
    "UnsupportedSourceFormatError",
    "UploadError",
    "QueueConfig",
    "StorageConfig",
]
