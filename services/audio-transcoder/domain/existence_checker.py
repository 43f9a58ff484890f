"""Dedup guard that skips work whose artifact is already stored."""

from transcoder_common import setup_logging
from transcoder_common.infrastructure import StorageClient

from .artifact_naming import derive_output_name

logger = setup_logging()


class ExistenceChecker:
    """Reports whether the transcoded artifact for a filename already exists."""

    def __init__(
        self,
        storage: StorageClient,
        bucket_name: str,
        source_extension: str,
        target_extension: str,
    ):
        self._storage = storage
        self._bucket_name = bucket_name
        self._source_extension = source_extension
        self._target_extension = target_extension

    def exists(self, filename: str) -> bool:
        output_name = derive_output_name(
            filename, self._source_extension, self._target_extension
        )
        logger.debug(
            "Checking location",
            extra={"bucket_name": self._bucket_name, "object_name": output_name},
        )
        found = self._storage.exists(self._bucket_name, output_name)
        if found:
            logger.info(
                "Artifact already stored, skipping transcode",
                extra={"file_name": filename, "object_name": output_name},
            )
        return found
