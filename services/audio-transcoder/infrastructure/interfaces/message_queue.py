"""Abstract interface for the primary work queue."""

from abc import abstractmethod

from transcoder_common.infrastructure import MessagePublisher

from domain.models import QueueMessage


class MessageQueue(MessagePublisher):
    """Abstract base class for a queue that hands out units of work."""

    @abstractmethod
    def receive(self) -> list[QueueMessage]:
        """
        Long-polls the queue for at most one message.

        Returns:
            The received messages, empty when the wait elapsed without any.

        Raises:
            QueueOperationError: If the queue cannot be reached.
        """
        pass

    @abstractmethod
    def delete(self, receipt_handle: str) -> None:
        """
        Deletes a received message so it is not delivered again.

        Args:
            receipt_handle: Handle returned with the received message.

        Raises:
            QueueOperationError: If the delete call fails.
        """
        pass

    @abstractmethod
    def configure_dead_letter(self, dead_letter_arn: str, max_receive_count: int) -> None:
        """
        Sets a redrive policy moving repeatedly undeleted messages to a
        dead-letter queue.

        Args:
            dead_letter_arn: ARN of the dead-letter queue.
            max_receive_count: Receives allowed before a message is moved.

        Raises:
            QueueOperationError: If the attribute update fails.
        """
        pass
