"""Dependency injection configuration for the audio-transcoder service."""

from concurrent.futures import ThreadPoolExecutor

import boto3
from minio import Minio
from transcoder_common import setup_logging

from config import AppConfig
from domain import AudioTranscoder, ExistenceChecker, StorageUploader
from handlers import FailureRouter, TranscodeMessageHandler
from infrastructure import MinioStorageClient, MoviepyTranscodingEngine, SqsMessageQueue
from worker import Worker

logger = setup_logging()


def build_worker(config: AppConfig) -> Worker:
    """Wires the worker and its collaborators from configuration."""
    # Object storage
    minio_client = Minio(
        endpoint=config.storage.endpoint,
        access_key=config.storage.access_key or None,
        secret_key=config.storage.secret_key or None,
        region=config.storage.region,
        secure=config.storage.secure,
    )
    storage = MinioStorageClient(minio_client)

    # SQS
    sqs_client = boto3.client("sqs", region_name=config.queue.region)
    queue = SqsMessageQueue(sqs_client, config.queue.url, config.queue)
    failure_queue = None
    if config.queue.failure_queue_url:
        failure_queue = SqsMessageQueue(
            sqs_client, config.queue.failure_queue_url, config.queue
        )
    else:
        logger.info("No failure queue configured, failures are logged and dropped")

    # Transcoding
    if config.transcode.work_dir is not None:
        config.transcode.work_dir.mkdir(parents=True, exist_ok=True)
    engine_executor = ThreadPoolExecutor(
        max_workers=config.worker.max_in_flight,
        thread_name_prefix="engine",
    )
    transcoder = AudioTranscoder(
        MoviepyTranscodingEngine(),
        engine_executor,
        config.storage,
        config.transcode.options,
        config.transcode.timeout_seconds,
    )

    # Service composition
    handler = TranscodeMessageHandler(
        queue=queue,
        existence_checker=ExistenceChecker(
            storage,
            config.storage.bucket_name,
            config.transcode.source_extension,
            config.transcode.target_extension,
        ),
        transcoder=transcoder,
        uploader=StorageUploader(
            storage, config.storage.bucket_name, config.transcode.content_type
        ),
        failure_router=FailureRouter(failure_queue, config.queue.failure_group_id),
        config=config.transcode,
        failure_policy=config.worker.failure_policy,
    )

    logger.info(
        "Service initialized",
        extra={
            "bucket_name": config.storage.bucket_name,
            "failure_policy": config.worker.failure_policy.value,
        },
    )
    return Worker(queue, handler, config.queue, config.worker, engine_executor)
