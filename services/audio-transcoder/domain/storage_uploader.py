"""Publishes transcoded artifacts to object storage."""

import os
from pathlib import Path

from transcoder_common import UploadError, setup_logging
from transcoder_common.infrastructure import StorageClient

logger = setup_logging()


class StorageUploader:
    """Uploads local artifacts and removes the local copy afterwards."""

    def __init__(
        self, storage: StorageClient, bucket_name: str, content_type: str = "audio/ogg"
    ):
        self._storage = storage
        self._bucket_name = bucket_name
        self._content_type = content_type

    def upload(self, local_path: Path, object_name: str | None = None) -> str:
        """
        Streams a local file to storage, then deletes it.

        Local deletion only happens once the store has acknowledged the write,
        and a failure to delete is logged without failing the upload.

        Args:
            local_path: Path of the artifact on disk.
            object_name: Destination key. Defaults to the file's base name.

        Returns:
            The key the artifact was stored under.

        Raises:
            UploadError: If the file cannot be read or the store rejects it.
        """
        object_name = object_name or os.path.basename(local_path)

        try:
            size = os.path.getsize(local_path)
            with open(local_path, "rb") as artifact:
                self._storage.upload(
                    bucket_name=self._bucket_name,
                    object_name=object_name,
                    data=artifact,
                    size=size,
                    content_type=self._content_type,
                )
        except OSError as e:
            logger.exception(
                "Artifact could not be read", extra={"file_path": str(local_path)}
            )
            raise UploadError(object_name, e) from e

        self._remove_local_copy(local_path)
        return object_name

    def _remove_local_copy(self, local_path: Path) -> None:
        try:
            os.remove(local_path)
            logger.debug("Local artifact deleted", extra={"file_path": str(local_path)})
        except OSError:
            logger.exception(
                "Failed to delete local artifact", extra={"file_path": str(local_path)}
            )
