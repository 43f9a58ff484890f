"""MinIO implementation of the StorageClient interface."""

from typing import BinaryIO

from minio import Minio
from minio.error import S3Error
from transcoder_common import UploadError, setup_logging
from transcoder_common.infrastructure import StorageClient

logger = setup_logging()

_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "NoSuchObject", "NotFound"})


class MinioStorageClient(StorageClient):
    """Handles object storage operations using the MinIO S3 client."""

    def __init__(self, client: Minio):
        self._client = client

    def exists(self, bucket_name: str, object_name: str) -> bool:
        try:
            self._client.stat_object(bucket_name=bucket_name, object_name=object_name)
        except S3Error as e:
            if e.code in _MISSING_OBJECT_CODES:
                logger.debug(
                    "Object does not exist",
                    extra={"bucket_name": bucket_name, "object_name": object_name},
                )
            else:
                logger.debug(
                    "Existence check failed, treating object as absent",
                    extra={
                        "bucket_name": bucket_name,
                        "object_name": object_name,
                        "error": str(e),
                    },
                )
            return False
        except Exception as e:
            logger.debug(
                "Existence check failed, treating object as absent",
                extra={
                    "bucket_name": bucket_name,
                    "object_name": object_name,
                    "error": str(e),
                },
            )
            return False

        logger.debug(
            "Verified existing object",
            extra={"bucket_name": bucket_name, "object_name": object_name},
        )
        return True

    def upload(
        self,
        bucket_name: str,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> None:
        try:
            self._client.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type,
            )
            logger.info(
                "File uploaded to storage",
                extra={
                    "bucket_name": bucket_name,
                    "object_name": object_name,
                },
            )
        except Exception as e:
            logger.exception(
                "Storage upload failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise UploadError(object_name, e) from e
