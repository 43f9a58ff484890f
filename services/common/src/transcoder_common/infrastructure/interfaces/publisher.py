"""Abstract interface for publishing messages to a queue."""

from abc import ABC, abstractmethod


class MessagePublisher(ABC):
    """Abstract base class for publishing messages to an ordered queue."""

    @abstractmethod
    def publish(self, payload: dict, group_id: str, deduplication_id: str) -> None:
        """
        Publishes a message.

        Args:
            payload: The message data as a dictionary.
            group_id: Ordering group; messages sharing it keep arrival order.
            deduplication_id: Token unique to this publish attempt.

        Raises:
            QueueOperationError: If publishing fails.
        """
