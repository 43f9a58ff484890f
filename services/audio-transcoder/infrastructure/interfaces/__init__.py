"""Infrastructure interface exports."""

from .message_queue import MessageQueue
from .transcoding_engine import TranscodingEngine

__all__ = ["MessageQueue", "TranscodingEngine"]
