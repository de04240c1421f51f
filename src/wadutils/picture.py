# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Picture lump reconstruction.

DOOM engine pictures are stored column by column. Each column is a list of
posts (runs of opaque pixels); everything not covered by a post is
transparent. Pixels are palette indices; without the game palette they are
rendered as grey levels.
"""

import io
import struct

import numpy as np
from PIL import Image

from .constants import (
    PICTURE_HEADER_FORMAT,
    PICTURE_HEADER_SIZE,
    PICTURE_MAX_DIMENSION,
    PICTURE_POST_END,
)
from .errors import ConversionError


def picture_to_array(data):
    """
    Decodes a picture lump into a (height, width, 2) array of grey level and
    alpha.

    Raises:
        ConversionError: If the data is not a well-formed picture lump.
    """
    if len(data) < PICTURE_HEADER_SIZE:
        raise ConversionError("Picture lump is too short.")

    width, height, _, _ = struct.unpack_from(PICTURE_HEADER_FORMAT, data, 0)
    if not (0 < width <= PICTURE_MAX_DIMENSION and 0 < height <= PICTURE_MAX_DIMENSION):
        raise ConversionError(f"Implausible picture size {width}x{height}.")

    table_end = PICTURE_HEADER_SIZE + width * 4
    if table_end > len(data):
        raise ConversionError("Picture column table is truncated.")
    column_offsets = struct.unpack_from(f"<{width}I", data, PICTURE_HEADER_SIZE)

    pixels = np.zeros((height, width, 2), dtype=np.uint8)
    for x, offset in enumerate(column_offsets):
        if not table_end <= offset < len(data):
            raise ConversionError(f"Column {x} points outside the lump ({offset}).")

        pos = offset
        while True:
            if pos >= len(data):
                raise ConversionError(f"Column {x} is not terminated.")
            top = data[pos]
            if top == PICTURE_POST_END:
                break
            if pos + 2 >= len(data):
                raise ConversionError(f"Post header in column {x} is truncated.")
            length = data[pos + 1]
            start = pos + 3  # skip the unused padding byte
            end = start + length
            if end + 1 > len(data):
                raise ConversionError(f"Post in column {x} is truncated.")
            if top + length > height:
                raise ConversionError(f"Post in column {x} extends below the picture.")

            column = np.frombuffer(data, dtype=np.uint8, count=length, offset=start)
            pixels[top:top + length, x, 0] = column
            pixels[top:top + length, x, 1] = 255
            pos = end + 1

    return pixels


def picture_to_png(data):
    """
    Converts a picture lump to a grey-scale PNG with transparency.

    Returns:
        The PNG file as bytes.

    Raises:
        ConversionError: If the data is not a well-formed picture lump.
    """
    image = Image.fromarray(picture_to_array(data))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
