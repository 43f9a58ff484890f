import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from transcoder_common import QueueConfig, QueueOperationError

from conftest import QUEUE_URL
from infrastructure import SqsMessageQueue


def _client_error(operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": "AWS.SimpleQueueService.NonExistentQueue", "Message": "gone"}},
        operation,
    )


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def sqs_queue(client):
    return SqsMessageQueue(client, QUEUE_URL, QueueConfig(url=QUEUE_URL))


def test_receive_uses_long_poll_and_visibility_timeout(client, sqs_queue):
    client.receive_message.return_value = {}

    assert sqs_queue.receive() == []

    kwargs = client.receive_message.call_args.kwargs
    assert kwargs["QueueUrl"] == QUEUE_URL
    assert kwargs["MaxNumberOfMessages"] == 1
    assert kwargs["WaitTimeSeconds"] == 5
    assert kwargs["VisibilityTimeout"] == 20
    assert "ApproximateReceiveCount" in kwargs["AttributeNames"]


def test_receive_maps_messages(client, sqs_queue):
    client.receive_message.return_value = {
        "Messages": [
            {
                "MessageId": "abc",
                "ReceiptHandle": "handle-abc",
                "Body": '{"filename": "episode1.mp3"}',
                "Attributes": {"ApproximateReceiveCount": "2", "SentTimestamp": "1"},
            }
        ]
    }

    [message] = sqs_queue.receive()

    assert message.message_id == "abc"
    assert message.receipt_handle == "handle-abc"
    assert message.body == '{"filename": "episode1.mp3"}'
    assert message.receive_count == 2


def test_receive_failure_raises_queue_error(client, sqs_queue):
    client.receive_message.side_effect = _client_error("ReceiveMessage")

    with pytest.raises(QueueOperationError) as exc_info:
        sqs_queue.receive()

    assert exc_info.value.operation == "receive"


def test_delete_by_receipt_handle(client, sqs_queue):
    sqs_queue.delete("handle-abc")

    client.delete_message.assert_called_once_with(
        QueueUrl=QUEUE_URL, ReceiptHandle="handle-abc"
    )


def test_delete_failure_raises_queue_error(client, sqs_queue):
    client.delete_message.side_effect = _client_error("DeleteMessage")

    with pytest.raises(QueueOperationError):
        sqs_queue.delete("handle-abc")


def test_publish_sends_fifo_message(client, sqs_queue):
    sqs_queue.publish({"error": "boom"}, group_id="failures", deduplication_id="d-1")

    client.send_message.assert_called_once_with(
        QueueUrl=QUEUE_URL,
        MessageBody='{"error": "boom"}',
        MessageGroupId="failures",
        MessageDeduplicationId="d-1",
    )


def test_configure_dead_letter_sets_redrive_policy(client, sqs_queue):
    sqs_queue.configure_dead_letter("arn:aws:sqs:us-east-1:1:dlq", 3)

    attributes = client.set_queue_attributes.call_args.kwargs["Attributes"]
    assert json.loads(attributes["RedrivePolicy"]) == {
        "deadLetterTargetArn": "arn:aws:sqs:us-east-1:1:dlq",
        "maxReceiveCount": "3",
    }


def test_configure_dead_letter_failure_raises_queue_error(client, sqs_queue):
    client.set_queue_attributes.side_effect = _client_error("SetQueueAttributes")

    with pytest.raises(QueueOperationError):
        sqs_queue.configure_dead_letter("arn:aws:sqs:us-east-1:1:dlq", 3)
