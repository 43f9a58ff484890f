"""Shared fixtures and in-memory doubles for the audio-transcoder tests."""

import itertools
import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from transcoder_common import QueueConfig, QueueOperationError, StorageConfig, UploadError
from transcoder_common.infrastructure import MessagePublisher, StorageClient

from config import TranscodeConfig
from domain import (
    AudioTranscoder,
    ExistenceChecker,
    FailurePolicy,
    QueueMessage,
    StorageUploader,
    TranscodeOptions,
)
from handlers import FailureRouter, TranscodeMessageHandler
from infrastructure.interfaces import MessageQueue, TranscodingEngine

BUCKET = "podcasts"
QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/transcode"


class FakeStorage(StorageClient):
    """Dictionary-backed object store."""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.uploads: list[str] = []
        self.fail_uploads = False

    def exists(self, bucket_name, object_name):
        return (bucket_name, object_name) in self.objects

    def upload(self, bucket_name, object_name, data, size, content_type):
        if self.fail_uploads:
            raise UploadError(object_name, ConnectionError("store unavailable"))
        self.objects[(bucket_name, object_name)] = data.read()
        self.uploads.append(object_name)


class FakeQueue(MessageQueue):
    """
    In-memory queue with a zero visibility timeout and SQS-style redrive.

    A message that has already been received ``maxReceiveCount`` times is
    moved to ``dead_letters`` instead of being delivered again.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self._handles = itertools.count(1)
        self.pending: list[dict] = []
        self.in_flight: dict[str, dict] = {}
        self.deleted: list[str] = []
        self.published: list[dict] = []
        self.dead_letters: list[dict] = []
        self.redrive_policy: dict | None = None
        self.receive_failures = 0
        self.fail_deletes = False
        self.fail_publish = False
        self.fail_redrive = False

    def send(self, body: str) -> str:
        message_id = f"msg-{next(self._ids)}"
        self.pending.append({"id": message_id, "body": body, "receive_count": 0})
        return message_id

    def receive(self):
        if self.receive_failures:
            self.receive_failures -= 1
            raise QueueOperationError("receive", QUEUE_URL, ConnectionError("down"))

        while self.pending:
            entry = self.pending.pop(0)
            limit = self.redrive_policy and self.redrive_policy["maxReceiveCount"]
            if limit and entry["receive_count"] >= limit:
                self.dead_letters.append(entry)
                continue

            entry["receive_count"] += 1
            self.pending.append(entry)
            handle = f"handle-{next(self._handles)}"
            self.in_flight[handle] = entry
            return [
                QueueMessage(
                    message_id=entry["id"],
                    receipt_handle=handle,
                    body=entry["body"],
                    attributes={"ApproximateReceiveCount": str(entry["receive_count"])},
                )
            ]
        return []

    def delete(self, receipt_handle):
        if self.fail_deletes:
            raise QueueOperationError("delete", QUEUE_URL, ConnectionError("down"))
        entry = self.in_flight.pop(receipt_handle)
        self.pending = [m for m in self.pending if m["id"] != entry["id"]]
        self.deleted.append(entry["id"])

    def publish(self, payload, group_id, deduplication_id):
        if self.fail_publish:
            raise QueueOperationError("send", QUEUE_URL, ConnectionError("down"))
        self.published.append(
            {
                "body": json.loads(json.dumps(payload)),
                "group_id": group_id,
                "deduplication_id": deduplication_id,
            }
        )

    def configure_dead_letter(self, dead_letter_arn, max_receive_count):
        if self.fail_redrive:
            raise QueueOperationError("set_queue_attributes", QUEUE_URL)
        self.redrive_policy = {
            "deadLetterTargetArn": dead_letter_arn,
            "maxReceiveCount": max_receive_count,
        }


class FakePublisher(MessagePublisher):
    def __init__(self, error: Exception | None = None):
        self.published: list[dict] = []
        self._error = error

    def publish(self, payload, group_id, deduplication_id):
        if self._error is not None:
            raise self._error
        self.published.append(
            {
                "payload": payload,
                "group_id": group_id,
                "deduplication_id": deduplication_id,
            }
        )


class FakeEngine(TranscodingEngine):
    """Writes a small file for every conversion, or raises ``error``."""

    def __init__(self, error: Exception | None = None):
        self.calls: list[tuple[str, Path]] = []
        self.error = error

    def convert(self, source_url, output_path, options):
        self.calls.append((source_url, output_path))
        output_path.write_bytes(b"OggS partial")
        if self.error is not None:
            raise self.error


@pytest.fixture
def storage_config() -> StorageConfig:
    return StorageConfig(bucket_name=BUCKET, base_url="https://s3.amazonaws.com")


@pytest.fixture
def queue_config() -> QueueConfig:
    return QueueConfig(url=QUEUE_URL)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def queue() -> FakeQueue:
    return FakeQueue()


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def failure_queue() -> FakeQueue:
    return FakeQueue()


@pytest.fixture
def engine_executor():
    executor = ThreadPoolExecutor(max_workers=2)
    yield executor
    executor.shutdown(wait=True)


@pytest.fixture
def transcode_config(tmp_path) -> TranscodeConfig:
    return TranscodeConfig(work_dir=tmp_path)


@pytest.fixture
def make_handler(
    queue, storage, engine, failure_queue, engine_executor, storage_config, transcode_config
):
    """Builds a handler wired to the in-memory doubles."""

    def _make(
        failure_policy: FailurePolicy = FailurePolicy.RETRY_IN_PLACE,
        publisher: MessagePublisher | None = failure_queue,
    ) -> TranscodeMessageHandler:
        return TranscodeMessageHandler(
            queue=queue,
            existence_checker=ExistenceChecker(storage, BUCKET, ".mp3", ".opus"),
            transcoder=AudioTranscoder(
                engine,
                engine_executor,
                storage_config,
                TranscodeOptions(),
                timeout_seconds=5,
            ),
            uploader=StorageUploader(storage, BUCKET),
            failure_router=FailureRouter(publisher, "transcode-failures"),
            config=transcode_config,
            failure_policy=failure_policy,
        )

    return _make
