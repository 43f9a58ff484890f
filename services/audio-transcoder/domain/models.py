"""Domain models for the audio transcoding service."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, field_validator


class FailurePolicy(str, Enum):
    """What happens to a message after its failure has been routed."""

    RETRY_IN_PLACE = "retry-in-place"
    DELETE = "delete"


class PipelineOutcome(str, Enum):
    """Terminal state of a single message's trip through the pipeline."""

    UPLOADED = "uploaded"
    DUPLICATE = "duplicate"
    FAILED_REPORTED = "failed-reported"
    FAILED_LEFT = "failed-left"


class QueueMessage(BaseModel, frozen=True):
    """A unit of work as received from the primary queue."""

    message_id: str
    receipt_handle: str
    body: str
    attributes: dict[str, str] = {}

    @property
    def receive_count(self) -> int:
        try:
            return int(self.attributes.get("ApproximateReceiveCount", 1))
        except ValueError:
            return 1


class TranscodeRequest(BaseModel, frozen=True):
    """Represents an incoming transcode request."""

    filename: str

    @field_validator("filename")
    @classmethod
    def filename_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("filename must not be empty")
        return value


class FailureRecord(BaseModel, frozen=True):
    """A failed unit of work paired with the reason it failed."""

    message: QueueMessage
    error: str

    def to_payload(self) -> dict[str, Any]:
        return {"message": self.message.model_dump(), "error": self.error}


class TranscodeOptions(BaseModel, frozen=True):
    """Encoder settings handed to the transcoding engine."""

    codec: str = "libopus"
    bitrate: int = 24000
    sample_rate: int = 48000
    vbr: str = "on"
    compression_level: int = 10

    def ffmpeg_params(self) -> list[str]:
        return ["-vbr", self.vbr, "-compression_level", str(self.compression_level)]
