"""Core business logic for audio transcoding."""

from concurrent.futures import Executor
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path

from transcoder_common import StorageConfig, setup_logging

from exceptions import TranscodeError
from infrastructure.interfaces import TranscodingEngine

from .models import TranscodeOptions

logger = setup_logging()


class AudioTranscoder:
    """Converts a stored source object into a local artifact in the target codec."""

    def __init__(
        self,
        engine: TranscodingEngine,
        executor: Executor,
        storage_config: StorageConfig,
        options: TranscodeOptions,
        timeout_seconds: float,
    ):
        self._engine = engine
        self._executor = executor
        self._storage_config = storage_config
        self._options = options
        self._timeout_seconds = timeout_seconds

    def transcode(self, filename: str, output_path: Path) -> Path:
        """
        Transcodes the object ``filename`` into ``output_path``.

        The engine runs on its own executor and is awaited for at most the
        configured timeout. A timed-out job that has not started yet is
        cancelled; one that is already running is abandoned.

        Args:
            filename: Source object key in the configured bucket.
            output_path: Local path the engine writes the artifact to.

        Returns:
            The output path, once the engine reports success.

        Raises:
            TranscodeError: If the job cannot be started, the engine reports an
                error, or the timeout elapses.
        """
        source_url = self._storage_config.object_url(filename)
        logger.debug(
            "Calling transcoder",
            extra={"source_url": source_url, "output_path": str(output_path)},
        )

        try:
            job = self._executor.submit(
                self._engine.convert, source_url, output_path, self._options
            )
        except Exception as e:
            logger.exception("Transcode job could not be started")
            raise TranscodeError(filename, e) from e

        try:
            job.result(timeout=self._timeout_seconds)
        except FutureTimeoutError as e:
            job.cancel()
            logger.error(
                "Transcode timed out",
                extra={"file_name": filename, "timeout": self._timeout_seconds},
            )
            raise TranscodeError(filename, e) from e
        except Exception as e:
            job.cancel()
            logger.exception("Cannot process audio", extra={"file_name": filename})
            raise TranscodeError(filename, e) from e

        logger.info(
            "Transcoding succeeded",
            extra={"file_name": filename, "output_path": str(output_path)},
        )
        return output_path
