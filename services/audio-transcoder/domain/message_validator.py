"""Parsing and validation of inbound queue messages."""

import json

from pydantic import ValidationError
from transcoder_common import MessageFormatError, setup_logging

from .artifact_naming import SOURCE_EXTENSION, derive_output_name
from .models import QueueMessage, TranscodeRequest

logger = setup_logging()


def parse_request(
    message: QueueMessage, source_extension: str = SOURCE_EXTENSION
) -> TranscodeRequest:
    """
    Parses a queue message body into a transcode request.

    Args:
        message: The received queue message.
        source_extension: Extension the requested filename must carry.

    Returns:
        The validated TranscodeRequest.

    Raises:
        MessageFormatError: If the body is not JSON, is not an object, lacks a
            non-empty ``filename``, or names a file of the wrong type.
    """
    try:
        data = json.loads(message.body)
    except (TypeError, ValueError) as e:
        raise MessageFormatError(message.body, f"Body is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MessageFormatError(message.body, "Body must be a JSON object")

    try:
        request = TranscodeRequest.model_validate(data)
    except ValidationError as e:
        raise MessageFormatError(
            message.body, f'Expected "filename" value in message: {e}'
        ) from e

    derive_output_name(request.filename, source_extension)

    logger.debug(
        "Message validated",
        extra={"message_id": message.message_id, "file_name": request.filename},
    )
    return request
