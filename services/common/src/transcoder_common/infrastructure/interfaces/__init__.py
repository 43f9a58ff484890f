from transcoder_common.infrastructure.interfaces.publisher import MessagePublisher
from transcoder_common.infrastructure.interfaces.storage import StorageClient

__all__ = [
    "StorageClient",
    "MessagePublisher",
]
