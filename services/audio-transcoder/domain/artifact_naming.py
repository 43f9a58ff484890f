"""Derivation of output object names from source filenames."""

import posixpath

from transcoder_common import UnsupportedSourceFormatError

SOURCE_EXTENSION = ".mp3"
TARGET_EXTENSION = ".opus"


def derive_output_name(
    filename: str,
    source_extension: str = SOURCE_EXTENSION,
    target_extension: str = TARGET_EXTENSION,
) -> str:
    """
    Replaces the source extension of a filename with the target extension.

    Only the final extension is touched, so directory names or stems that
    happen to contain the codec name survive unchanged
    (``mp3s/mp3-show.mp3`` -> ``mp3s/mp3-show.opus``).

    Args:
        filename: Source object key.
        source_extension: Expected extension of the source, compared
            case-insensitively.
        target_extension: Extension of the produced artifact.

    Returns:
        The output object key.

    Raises:
        UnsupportedSourceFormatError: If the filename does not end with the
            source extension, or has nothing in front of it.
    """
    stem, extension = posixpath.splitext(filename)
    if extension.lower() != source_extension.lower() or not posixpath.basename(stem):
        raise UnsupportedSourceFormatError(filename, source_extension)
    return stem + target_extension
