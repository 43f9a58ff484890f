"""Message handler exports."""

from .failure_router import FailureRouter
from .transcode_message_handler import TranscodeMessageHandler

__all__ = ["FailureRouter", "TranscodeMessageHandler"]
