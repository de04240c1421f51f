# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Detects the format of an entry's data from its leading bytes.
"""

import struct
from enum import Enum

from .constants import MUS_MAGIC, RAW_AUDIO_HEADER_FORMAT, RAW_AUDIO_HEADER_SIZE, RAW_AUDIO_TAG


class FileType(Enum):
    """
    Formats an entry can be classified as.
    """
    XM = "XM"
    IT = "IT"
    WAV = "WAV"
    MP3 = "MP3"
    MID = "MID"
    MUS = "MUS"
    OGG = "OGG"
    RAWAUDIO = "RAWAUDIO"
    UNKNOWN = "UNKNOWN"
    VIRTUAL = "VIRTUAL"


def is_mus(data: bytes) -> bool:
    """
    True if the data starts with the MUS magic ("MUS" followed by 0x1A).
    """
    return data[:4] == MUS_MAGIC


def is_raw_audio(data: bytes) -> bool:
    """
    True if the data is a raw audio lump: format tag 3 followed by the sample
    rate, a sample count that matches the payload exactly, and a zero word.
    """
    if not data.startswith(RAW_AUDIO_TAG) or len(data) < RAW_AUDIO_HEADER_SIZE:
        return False
    _, _, num_samples, _ = struct.unpack_from(RAW_AUDIO_HEADER_FORMAT, data, 0)
    return num_samples == len(data) - RAW_AUDIO_HEADER_SIZE


# Checked in order, first match wins
_SIGNATURES = (
    (FileType.XM, lambda d: d.startswith(b"Extended Module")),
    (FileType.IT, lambda d: d.startswith(b"IMPM")),
    (FileType.WAV, lambda d: d.startswith(b"RIFF")),
    (FileType.MP3, lambda d: d.startswith(b"ID3")),
    (FileType.MID, lambda d: d.startswith(b"MThd")),
    (FileType.MUS, is_mus),
    (FileType.OGG, lambda d: d.startswith(b"OggS")),
    (FileType.RAWAUDIO, is_raw_audio),
)


def classify(data) -> FileType:
    """
    Classifies a buffer by its leading bytes.

    Args:
        data: The entry data. None or an empty buffer is a virtual entry.

    Returns:
        The detected FileType. Data matching no signature is UNKNOWN, which
        the export treats as a picture lump.
    """
    if not data:
        return FileType.VIRTUAL
    for file_type, matches in _SIGNATURES:
        if matches(data):
            return file_type
    return FileType.UNKNOWN
