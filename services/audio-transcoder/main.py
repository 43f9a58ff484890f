"""
Audio Transcoder Service.

Entry point for the audio transcoding worker. It:
- Polls an SQS queue for transcode requests naming a source object.
- Converts the source audio to Opus.
- Uploads the result to the shared bucket.
- Routes failed requests to a failure queue or a dead-letter queue.
- Emits structured JSON logs and Datadog traces.
"""

import signal
import sys

from ddtrace import patch_all
from transcoder_common import ConfigurationError, setup_logging

from config import load_config
from dependencies import build_worker

patch_all()
logger = setup_logging()


def main():
    """Starts the worker."""
    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(
            "Cannot start worker",
            extra={"setting": e.setting, "reason": e.reason},
        )
        sys.exit(1)

    worker = build_worker(config)

    def _request_shutdown(signum, frame):
        logger.info("Shutdown requested", extra={"signal": signum})
        worker.stop()

    signal.signal(signal.SIGTERM, _request_shutdown)
    signal.signal(signal.SIGINT, _request_shutdown)

    worker.start()


if __name__ == "__main__":
    main()
