"""Pipeline that takes one queue message from receipt to acknowledgement."""

import posixpath
import tempfile
from pathlib import Path

from transcoder_common import (
    MessageFormatError,
    QueueOperationError,
    UploadError,
    setup_logging,
)

from config import TranscodeConfig
from domain import (
    AudioTranscoder,
    ExistenceChecker,
    FailurePolicy,
    PipelineOutcome,
    QueueMessage,
    StorageUploader,
    derive_output_name,
    parse_request,
)
from exceptions import TranscodeError
from infrastructure.interfaces import MessageQueue

from .failure_router import FailureRouter

logger = setup_logging()


class TranscodeMessageHandler:
    """Validates, deduplicates, transcodes and uploads a single request."""

    def __init__(
        self,
        queue: MessageQueue,
        existence_checker: ExistenceChecker,
        transcoder: AudioTranscoder,
        uploader: StorageUploader,
        failure_router: FailureRouter,
        config: TranscodeConfig,
        failure_policy: FailurePolicy,
    ):
        self._queue = queue
        self._existence_checker = existence_checker
        self._transcoder = transcoder
        self._uploader = uploader
        self._failure_router = failure_router
        self._config = config
        self._failure_policy = failure_policy

    def handle(self, message: QueueMessage) -> PipelineOutcome:
        """
        Runs a message through the pipeline and settles it on the queue.

        Successful and duplicate requests are deleted from the queue. Failed
        requests are handed to the failure router first and are then either
        deleted or left for redelivery, depending on the failure policy.
        No exception escapes this method.

        Args:
            message: The received queue message.

        Returns:
            The terminal PipelineOutcome.
        """
        logger.info(
            "Message received",
            extra={"message_id": message.message_id, "attempt": message.receive_count},
        )

        try:
            outcome = self._process(message)
        except (MessageFormatError, TranscodeError, UploadError) as e:
            logger.error(
                "Message processing failed",
                extra={"message_id": message.message_id, "error": str(e)},
            )
            return self._fail(message, e)
        except Exception as e:
            logger.exception(
                "Unexpected error while processing message",
                extra={"message_id": message.message_id},
            )
            return self._fail(message, e)

        self._delete(message)
        logger.info(
            "Message processed",
            extra={"message_id": message.message_id, "outcome": outcome.value},
        )
        return outcome

    def _process(self, message: QueueMessage) -> PipelineOutcome:
        request = parse_request(message, self._config.source_extension)

        if self._existence_checker.exists(request.filename):
            return PipelineOutcome.DUPLICATE

        output_name = derive_output_name(
            request.filename,
            self._config.source_extension,
            self._config.target_extension,
        )

        # One directory per delivery so concurrent duplicates never share a path.
        with tempfile.TemporaryDirectory(
            prefix="transcode-",
            dir=self._config.work_dir,
            ignore_cleanup_errors=True,
        ) as workspace:
            output_path = Path(workspace) / posixpath.basename(output_name)
            self._transcoder.transcode(request.filename, output_path)
            self._uploader.upload(output_path, output_name)

        return PipelineOutcome.UPLOADED

    def _fail(self, message: QueueMessage, error: Exception) -> PipelineOutcome:
        self._failure_router.route(message, error)

        if self._failure_policy is FailurePolicy.DELETE:
            self._delete(message)
            return PipelineOutcome.FAILED_REPORTED

        logger.info(
            "Message left on queue for redelivery",
            extra={"message_id": message.message_id, "attempt": message.receive_count},
        )
        return PipelineOutcome.FAILED_LEFT

    def _delete(self, message: QueueMessage) -> None:
        try:
            self._queue.delete(message.receipt_handle)
        except QueueOperationError:
            logger.error(
                "Message could not be removed from queue and may be redelivered",
                extra={"message_id": message.message_id},
            )
