"""Abstract interface for transcoding engine backends."""

from abc import ABC, abstractmethod
from pathlib import Path

from domain.models import TranscodeOptions


class TranscodingEngine(ABC):
    """Abstract base class for audio transcoding backends."""

    @abstractmethod
    def convert(self, source_url: str, output_path: Path, options: TranscodeOptions) -> None:
        """
        Reads audio from a URL and writes it to a local file in another codec.

        Args:
            source_url: Location the engine reads the source audio from.
            output_path: Local file the converted audio is written to.
            options: Codec, bitrate and encoder settings.

        Raises:
            Exception: Whatever the engine reports. Callers wrap it in
                TranscodeError.
        """
        pass
