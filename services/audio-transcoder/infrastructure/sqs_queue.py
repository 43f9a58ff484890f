"""SQS implementation of the MessageQueue interface."""

import json

from botocore.exceptions import BotoCoreError, ClientError
from transcoder_common import QueueConfig, QueueOperationError, setup_logging

from domain.models import QueueMessage

from .interfaces import MessageQueue

logger = setup_logging()

_RECEIVE_ATTRIBUTES = ["SentTimestamp", "ApproximateReceiveCount"]


class SqsMessageQueue(MessageQueue):
    """Handles queue operations on a single SQS queue."""

    def __init__(self, client, queue_url: str, config: QueueConfig):
        self._client = client
        self._queue_url = queue_url
        self._config = config

    def receive(self) -> list[QueueMessage]:
        try:
            response = self._client.receive_message(
                QueueUrl=self._queue_url,
                AttributeNames=_RECEIVE_ATTRIBUTES,
                MessageAttributeNames=["All"],
                MaxNumberOfMessages=1,
                VisibilityTimeout=self._config.visibility_timeout,
                WaitTimeSeconds=self._config.wait_time_seconds,
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("SQS receive failed", extra={"queue_url": self._queue_url})
            raise QueueOperationError("receive", self._queue_url, e) from e

        return [
            QueueMessage(
                message_id=raw["MessageId"],
                receipt_handle=raw["ReceiptHandle"],
                body=raw.get("Body", ""),
                attributes=raw.get("Attributes", {}),
            )
            for raw in response.get("Messages", [])
        ]

    def delete(self, receipt_handle: str) -> None:
        logger.debug(
            "Removing message from queue", extra={"receipt_handle": receipt_handle}
        )
        try:
            self._client.delete_message(
                QueueUrl=self._queue_url, ReceiptHandle=receipt_handle
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("SQS delete failed", extra={"queue_url": self._queue_url})
            raise QueueOperationError("delete", self._queue_url, e) from e

    def publish(self, payload: dict, group_id: str, deduplication_id: str) -> None:
        try:
            self._client.send_message(
                QueueUrl=self._queue_url,
                MessageBody=json.dumps(payload),
                MessageGroupId=group_id,
                MessageDeduplicationId=deduplication_id,
            )
            logger.info(
                "Message published to SQS",
                extra={"queue_url": self._queue_url, "group_id": group_id},
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("SQS send failed", extra={"queue_url": self._queue_url})
            raise QueueOperationError("send", self._queue_url, e) from e

    def configure_dead_letter(self, dead_letter_arn: str, max_receive_count: int) -> None:
        redrive_policy = {
            "deadLetterTargetArn": dead_letter_arn,
            "maxReceiveCount": str(max_receive_count),
        }
        try:
            self._client.set_queue_attributes(
                QueueUrl=self._queue_url,
                Attributes={"RedrivePolicy": json.dumps(redrive_policy)},
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception(
                "DLQ setup failed",
                extra={"queue_url": self._queue_url, "dead_letter_arn": dead_letter_arn},
            )
            raise QueueOperationError("set_queue_attributes", self._queue_url, e) from e

        logger.info(
            "Dead-letter queue configured",
            extra={
                "queue_url": self._queue_url,
                "dead_letter_arn": dead_letter_arn,
                "max_receive_count": max_receive_count,
            },
        )
