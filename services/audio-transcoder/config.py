"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError
from transcoder_common import ConfigurationError, QueueConfig, StorageConfig

from domain.models import FailurePolicy, TranscodeOptions


class TranscodeConfig(BaseModel, frozen=True):
    """Source/target formats and engine settings."""

    source_extension: str = ".mp3"
    target_extension: str = ".opus"
    content_type: str = "audio/ogg"
    options: TranscodeOptions = TranscodeOptions()
    timeout_seconds: float = 600.0
    work_dir: Path | None = None


class WorkerConfig(BaseModel, frozen=True):
    """Poll loop and worker pool configuration."""

    max_in_flight: int = Field(default=4, ge=1)
    failure_policy: FailurePolicy = FailurePolicy.RETRY_IN_PLACE
    receive_error_backoff_seconds: float = 1.0


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    storage: StorageConfig
    queue: QueueConfig
    transcode: TranscodeConfig
    worker: WorkerConfig


def load_config() -> AppConfig:
    """
    Loads configuration from environment variables.

    Raises:
        ConfigurationError: If the primary queue URL is missing or a value
            cannot be parsed.
    """
    queue_url = os.getenv("SQS_QUEUE")
    if not queue_url:
        raise ConfigurationError("SQS_QUEUE", "primary queue address is not set")

    region = os.getenv("AWS_REGION", "us-east-1")
    endpoint = os.getenv("STORAGE_ENDPOINT", "s3.amazonaws.com")
    secure = os.getenv("STORAGE_SECURE", "true").lower() in ("1", "true", "yes")
    default_base_url = f"{'https' if secure else 'http'}://{endpoint}"

    try:
        return AppConfig(
            storage=StorageConfig(
                endpoint=endpoint,
                access_key=os.getenv("AWS_ACCESS_KEY_ID", ""),
                secret_key=os.getenv("AWS_SECRET_ACCESS_KEY", ""),
                region=region,
                secure=secure,
                bucket_name=os.getenv("POLLY_S3_BUCKET", ""),
                base_url=os.getenv("STORAGE_BASE_URL", default_base_url),
            ),
            queue=QueueConfig(
                url=queue_url,
                region=region,
                wait_time_seconds=os.getenv("SQS_WAIT_TIME_SECONDS", "5"),
                visibility_timeout=os.getenv("SQS_VISIBILITY_TIMEOUT", "20"),
                max_receive_count=os.getenv("SQS_MAX_RECEIVE_COUNT", "3"),
                dead_letter_arn=os.getenv("SQS_DLQ_ARN") or None,
                failure_queue_url=os.getenv("SQS_FAILURE_QUEUE") or None,
                failure_group_id=os.getenv("FAILURE_GROUP_ID", "transcode-failures"),
            ),
            transcode=TranscodeConfig(
                options=TranscodeOptions(bitrate=os.getenv("OPUS_BIT_RATE") or "24000"),
                timeout_seconds=os.getenv("TRANSCODE_TIMEOUT_SECONDS", "600"),
                work_dir=os.getenv("WORK_DIR") or None,
            ),
            worker=WorkerConfig(
                max_in_flight=os.getenv("MAX_IN_FLIGHT", "4"),
                failure_policy=os.getenv("FAILURE_POLICY", "retry-in-place"),
                receive_error_backoff_seconds=os.getenv(
                    "RECEIVE_ERROR_BACKOFF_SECONDS", "1"
                ),
            ),
        )
    except ValidationError as e:
        raise ConfigurationError("environment", str(e)) from e
