"""Worker that polls the queue and dispatches messages to a bounded pool."""

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from transcoder_common import QueueConfig, QueueOperationError, setup_logging

from config import WorkerConfig
from domain import QueueMessage
from handlers import TranscodeMessageHandler
from infrastructure.interfaces import MessageQueue

logger = setup_logging()

_SLOT_WAIT_SECONDS = 1.0


class Worker:
    """Consumes messages from the queue and hands them to the pipeline."""

    def __init__(
        self,
        queue: MessageQueue,
        handler: TranscodeMessageHandler,
        queue_config: QueueConfig,
        worker_config: WorkerConfig,
        engine_executor: Executor | None = None,
    ):
        self._queue = queue
        self._handler = handler
        self._queue_config = queue_config
        self._worker_config = worker_config
        self._engine_executor = engine_executor
        self._executor = ThreadPoolExecutor(
            max_workers=worker_config.max_in_flight,
            thread_name_prefix="transcode",
        )
        self._slots = threading.BoundedSemaphore(worker_config.max_in_flight)
        self._stopping = threading.Event()

    def start(self) -> None:
        """Configures the queue, then polls until stop() is called."""
        self.initialize()
        logger.info(
            "Starting message loop",
            extra={
                "queue_url": self._queue_config.url,
                "max_in_flight": self._worker_config.max_in_flight,
            },
        )
        try:
            while not self._stopping.is_set():
                self.run_once()
        finally:
            self.shutdown()

    def stop(self) -> None:
        """Asks the poll loop to exit after the current receive."""
        self._stopping.set()

    def shutdown(self) -> None:
        """Waits for every in-flight message, then for the transcoding engine."""
        self._executor.shutdown(wait=True)
        if self._engine_executor is not None:
            self._engine_executor.shutdown(wait=True, cancel_futures=True)
        logger.info("Worker stopped")

    def initialize(self) -> None:
        """
        Sets the redrive policy on the primary queue when a dead-letter queue
        is configured. A failure here is logged and does not stop the worker.
        """
        dead_letter_arn = self._queue_config.dead_letter_arn
        if not dead_letter_arn:
            logger.warning(
                "No dead-letter queue configured, failed messages are redelivered without limit"
            )
            return

        try:
            self._queue.configure_dead_letter(
                dead_letter_arn, self._queue_config.max_receive_count
            )
        except QueueOperationError:
            logger.warning(
                "Continuing without a redrive policy",
                extra={"dead_letter_arn": dead_letter_arn},
            )

    def run_once(self) -> list[Future]:
        """
        Performs one receive and dispatches whatever arrived.

        Waits for a free pool slot before receiving, so a message is never held
        invisible while it waits for a thread. Returns without waiting for the
        dispatched messages to finish.

        Returns:
            Futures of the dispatched pipeline runs.
        """
        if not self._slots.acquire(timeout=_SLOT_WAIT_SECONDS):
            return []

        try:
            messages = self._queue.receive()
        except QueueOperationError:
            self._slots.release()
            self._back_off()
            return []
        except Exception:
            self._slots.release()
            logger.exception("Unexpected error while receiving messages")
            self._back_off()
            return []

        if not messages:
            self._slots.release()
            return []

        futures = []
        for index, message in enumerate(messages):
            if index:
                self._slots.acquire()
            futures.append(self._dispatch(message))
        return futures

    def _dispatch(self, message: QueueMessage) -> Future:
        try:
            future = self._executor.submit(self._handler.handle, message)
        except RuntimeError:
            self._slots.release()
            raise
        future.add_done_callback(self._on_done)
        return future

    def _on_done(self, future: Future) -> None:
        self._slots.release()
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("Pipeline task crashed", exc_info=error)

    def _back_off(self) -> None:
        backoff = self._worker_config.receive_error_backoff_seconds
        logger.error("Receive failed, retrying", extra={"backoff_seconds": backoff})
        self._stopping.wait(backoff)
