"""Routes failed units of work to the failure destination."""

import uuid

from transcoder_common import setup_logging
from transcoder_common.infrastructure import MessagePublisher

from domain import FailureRecord, QueueMessage

logger = setup_logging()


class FailureRouter:
    """Publishes failure records, or logs and drops them when no queue is set."""

    def __init__(self, publisher: MessagePublisher | None, group_id: str):
        self._publisher = publisher
        self._group_id = group_id

    def route(self, message: QueueMessage, error: Exception | str) -> None:
        """
        Forwards a failed message together with its error.

        Never raises: a failure to publish is logged and dropped.

        Args:
            message: The unit of work that failed.
            error: The error, or its description.
        """
        record = FailureRecord(message=message, error=describe_error(error))

        if self._publisher is None:
            logger.error(
                "Message failed and no failure queue is configured, dropping it",
                extra={"message_id": message.message_id, "error": record.error},
            )
            return

        try:
            self._publisher.publish(
                record.to_payload(),
                group_id=self._group_id,
                deduplication_id=str(uuid.uuid4()),
            )
            logger.info(
                "Failure record published",
                extra={"message_id": message.message_id, "error": record.error},
            )
        except Exception:
            logger.exception(
                "Failure record could not be published",
                extra={"message_id": message.message_id, "error": record.error},
            )


def describe_error(error: Exception | str) -> str:
    if isinstance(error, str):
        return error or "Unknown error"
    detail = str(error)
    return f"{type(error).__name__}: {detail}" if detail else type(error).__name__
