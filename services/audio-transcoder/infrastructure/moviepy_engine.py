"""MoviePy implementation of the TranscodingEngine interface."""

from pathlib import Path

import moviepy
from transcoder_common import setup_logging

from domain.models import TranscodeOptions

from .interfaces import TranscodingEngine

logger = setup_logging()


class MoviepyTranscodingEngine(TranscodingEngine):
    """Transcodes audio with MoviePy, which drives ffmpeg underneath."""

    def convert(self, source_url: str, output_path: Path, options: TranscodeOptions) -> None:
        """
        Decodes the source through ffmpeg and re-encodes it with the
        configured codec. ffmpeg reads the URL directly, so the source is
        never downloaded as a whole.
        """
        clip = moviepy.AudioFileClip(source_url, fps=options.sample_rate)
        try:
            clip.write_audiofile(
                str(output_path),
                fps=options.sample_rate,
                codec=options.codec,
                bitrate=str(options.bitrate),
                ffmpeg_params=options.ffmpeg_params(),
                logger=None,
            )
        finally:
            clip.close()

        logger.debug(
            "Engine finished",
            extra={"source_url": source_url, "output_path": str(output_path)},
        )
