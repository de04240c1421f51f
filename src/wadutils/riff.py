# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
RIFF (Resource Interchange File Format) utility functions.
Provides functions to create RIFF chunks and PCM WAVE files from raw audio
lumps.
"""

import struct

from .constants import (
    RAW_AUDIO_HEADER_FORMAT,
    RAW_AUDIO_HEADER_SIZE,
    RAW_AUDIO_TAG,
    WAV_BITS_PER_SAMPLE,
    WAV_CHANNELS,
    WAV_HEADER_SIZE,
    WAV_SAMPLE_RATE,
)
from .errors import ConversionError


def make_chunk_header(chunk_id: bytes, size: int) -> bytes:
    """
    Creates a RIFF chunk header (ID and little-endian size).

    Args:
        chunk_id: The 4-byte chunk ID.
        size: The size of the chunk's data in bytes.

    Returns:
        The 8-byte chunk header.
    """
    if len(chunk_id) != 4:
        raise ValueError("Chunk ID must be 4 bytes long.")

    return chunk_id + struct.pack("<I", size)


def make_chunk(chunk_id: bytes, data: bytes) -> bytes:
    """
    Creates a RIFF chunk with the given ID and data.
    Automatically adds padding if the data size is odd.

    Args:
        chunk_id: The 4-byte chunk ID.
        data: The chunk's data.

    Returns:
        The created chunk as a bytes object.
    """
    size = len(data)
    packed_data = make_chunk_header(chunk_id, size) + data

    # Add padding if size is odd
    if size % 2:
        packed_data += b"\x00"

    return packed_data


def wave_header(num_samples: int, sample_rate: int = WAV_SAMPLE_RATE,
                channels: int = WAV_CHANNELS, bits: int = WAV_BITS_PER_SAMPLE) -> bytes:
    """
    Creates the canonical 44-byte header of a PCM WAVE file.

    Args:
        num_samples: Number of sample frames that follow the header.
        sample_rate: Frames per second.
        channels: 1 (mono) or 2 (stereo).
        bits: Bits per sample.

    Returns:
        The header. The sample data must be appended unchanged.
    """
    block_align = channels * bits // 8
    data_size = num_samples * block_align

    fmt = make_chunk(b"fmt ", struct.pack(
        "<HHIIHH",
        1,  # PCM
        channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        bits
    ))

    header = (
        make_chunk_header(b"RIFF", WAV_HEADER_SIZE - 8 + data_size)
        + b"WAVE"
        + fmt
        + make_chunk_header(b"data", data_size)
    )
    assert len(header) == WAV_HEADER_SIZE
    return header


def raw_audio_to_wav(data: bytes) -> bytes:
    """
    Converts a raw audio lump (8-byte header + unsigned 8-bit mono samples)
    into a WAVE file.

    Raises:
        ConversionError: If the header is not a raw audio header or the
            sample count does not match the payload.
    """
    if len(data) <= RAW_AUDIO_HEADER_SIZE or not data.startswith(RAW_AUDIO_TAG):
        raise ConversionError("Not a raw audio lump.")

    _, _, num_samples, reserved = struct.unpack_from(RAW_AUDIO_HEADER_FORMAT, data, 0)
    if reserved != 0:
        raise ConversionError(f"Unexpected raw audio header value {reserved}.")
    if num_samples != len(data) - RAW_AUDIO_HEADER_SIZE:
        raise ConversionError(
            f"Raw audio declares {num_samples} samples but carries "
            f"{len(data) - RAW_AUDIO_HEADER_SIZE}."
        )

    return wave_header(num_samples) + data[RAW_AUDIO_HEADER_SIZE:]
