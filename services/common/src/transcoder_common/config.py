"""Shared configuration models for infrastructure components."""

from urllib.parse import quote

from pydantic import BaseModel


class StorageConfig(BaseModel, frozen=True):
    """S3-compatible object storage configuration."""

    endpoint: str = "s3.amazonaws.com"
    access_key: str = ""
    secret_key: str = ""
    region: str = "us-east-1"
    secure: bool = True
    bucket_name: str
    base_url: str

    def object_url(self, object_name: str) -> str:
        """Public URL of an object in the configured bucket."""
        return f"{self.base_url.rstrip('/')}/{self.bucket_name}/{quote(object_name)}"


class QueueConfig(BaseModel, frozen=True):
    """SQS queue configuration."""

    url: str
    region: str = "us-east-1"
    wait_time_seconds: int = 5
    visibility_timeout: int = 20
    max_receive_count: int = 3
    dead_letter_arn: str | None = None
    failure_queue_url: str | None = None
    failure_group_id: str = "transcode-failures"
