# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Converts entry data to a commonly playable or viewable format.

Each FileType has exactly one handler. Handlers take the entry data and
return the converted bytes; the extension for the converted file comes from
the same table.
"""

from .errors import ConversionError, WadError
from .mus2mid import mus_to_midi
from .picture import picture_to_png
from .riff import raw_audio_to_wav
from .sniffer import FileType, classify


def _copy(data):
    return bytes(data)


def _virtual(data):
    raise ConversionError("Virtual entries have no data to convert.")


# FileType -> (extension, handler)
CONVERTERS = {
    FileType.XM: (".XM", _copy),
    FileType.IT: (".IT", _copy),
    FileType.WAV: (".WAV", _copy),
    FileType.MP3: (".MP3", _copy),
    FileType.MID: (".MID", _copy),
    FileType.OGG: (".OGG", _copy),
    FileType.MUS: (".MID", mus_to_midi),
    FileType.RAWAUDIO: (".WAV", raw_audio_to_wav),
    FileType.UNKNOWN: (".PNG", picture_to_png),
    FileType.VIRTUAL: ("", _virtual),
}


def convert(data, file_type=None):
    """
    Converts data to its common format.

    Args:
        data: The entry data.
        file_type: The already detected FileType. Detected from the data if
            omitted.

    Returns:
        A tuple of (extension, converted_bytes). The extension includes the
        leading dot.

    Raises:
        ConversionError: If there is nothing to convert or the converter
            rejects the data.
    """
    if file_type is None:
        file_type = classify(data)

    extension, handler = CONVERTERS[file_type]
    try:
        return extension, handler(data)
    except ConversionError:
        raise
    except WadError as e:
        raise ConversionError(f"{file_type.value}: {e}") from e
