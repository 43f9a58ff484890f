"""Domain layer exports."""

from .artifact_naming import derive_output_name
from .audio_transcoder import AudioTranscoder
from .existence_checker import ExistenceChecker
from .message_validator import parse_request
from .models import (
    FailurePolicy,
    FailureRecord,
    PipelineOutcome,
    QueueMessage,
    TranscodeOptions,
    TranscodeRequest,
)
from .storage_uploader import StorageUploader

__all__ = [
    "AudioTranscoder",
    "ExistenceChecker",
    "FailurePolicy",
    "FailureRecord",
    "PipelineOutcome",
    "QueueMessage",
    "StorageUploader",
    "TranscodeOptions",
    "TranscodeRequest",
    "derive_output_name",
    "parse_request",
]
