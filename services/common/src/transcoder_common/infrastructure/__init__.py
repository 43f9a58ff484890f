from transcoder_common.infrastructure.interfaces import MessagePublisher, StorageClient

__all__ = ["MessagePublisher", "StorageClient"]
