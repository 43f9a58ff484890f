"""Infrastructure layer exports."""

from .minio_storage import MinioStorageClient
from .moviepy_engine import MoviepyTranscodingEngine
from .sqs_queue import SqsMessageQueue

__all__ = ["MinioStorageClient", "MoviepyTranscodingEngine", "SqsMessageQueue"]
