# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
WAD Parser - Reads a WAD file into an ordered list of entries.

A WAD file is a 12-byte header (magic, entry count, directory offset), a data
region and a trailing directory of 16-byte records (offset, length, name).
"""

import hashlib
import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .constants import (
    WAD_DIRECTORY_FORMAT,
    WAD_DIRECTORY_RECORD_SIZE,
    WAD_HEADER_FORMAT,
    WAD_HEADER_SIZE,
    WAD_NAME_LENGTH,
)
from .errors import FormatError


class WadType(Enum):
    """
    Role of a WAD file: a main game archive or a patch loaded on top of it.
    """
    IWAD = "IWAD"
    PWAD = "PWAD"

    @classmethod
    def from_magic(cls, magic):
        """
        Returns the WadType for a magic string, ignoring case.

        Raises:
            FormatError: If the magic is neither IWAD nor PWAD.
        """
        if isinstance(magic, bytes):
            magic = magic.decode("ascii", errors="replace")
        try:
            return cls(magic.strip().upper())
        except ValueError:
            raise FormatError(f"Unrecognized header: {magic!r}") from None


def content_hash(data: Optional[bytes]) -> str:
    """
    Computes the identity hash of an entry's data (upper-case SHA-1 hex).
    Missing data hashes like an empty buffer.
    """
    return hashlib.sha1(data or b"").hexdigest().upper()


def sanitize_filename(name):
    """
    Replaces characters that are invalid in filenames with underscores.

    Args:
        name: The original filename.

    Returns:
        The sanitized filename. Never empty, "." or "..".
    """
    invalid_chars = "<>:\"/\\|?*"
    for char in invalid_chars:
        name = name.replace(char, "_")
    name = "".join("_" if ord(c) < 32 else c for c in name).strip()
    if name in ("", ".", ".."):
        name = "_" * max(len(name), 1)
    return name


def decode_name(raw: bytes) -> str:
    """
    Decodes an 8-byte directory name, stopping at the first NUL byte.
    Each byte maps to one character, so names survive a round trip.
    """
    return raw.split(b"\x00", 1)[0].decode("latin-1")


def encode_name(name: str) -> bytes:
    """
    Encodes an entry name as an 8-byte NUL-padded directory field.
    Longer names are truncated.
    """
    return name.encode("latin-1", errors="replace")[:WAD_NAME_LENGTH].ljust(WAD_NAME_LENGTH, b"\x00")


@dataclass
class WadEntry:
    """
    A named resource in a WAD file.

    Virtual entries carry no data; they only mark positions in the directory
    (e.g. the start and end of a sprite group).
    """
    name: str
    offset: int = 0
    data: Optional[bytes] = field(default=None, repr=False)
    content_hash: str = field(init=False)

    def __post_init__(self):
        if not self.data:
            self.data = None
            self.offset = 0
        self.content_hash = content_hash(self.data)

    @property
    def is_virtual(self):
        return self.data is None

    @property
    def length(self):
        return 0 if self.data is None else len(self.data)

    @property
    def safe_name(self):
        """
        The entry name with characters that are invalid in file names replaced.
        """
        return sanitize_filename(self.name)


@dataclass
class WadArchive:
    """
    A parsed WAD file. Entry order is significant and preserved.
    """
    kind: WadType
    entries: List[WadEntry] = field(default_factory=list)

    @property
    def virtual_count(self):
        return sum(1 for e in self.entries if e.is_virtual)


def parse_wad(data: bytes) -> WadArchive:
    """
    Decodes a complete WAD file held in memory.

    Args:
        data: The WAD file contents. The buffer is not modified.

    Returns:
        The decoded WadArchive. Entries own copies of their data.

    Raises:
        FormatError: If the magic is unknown or the directory or any entry
            lies outside the buffer.
    """
    if len(data) < WAD_HEADER_SIZE:
        raise FormatError("Unrecognized header: file is too short.")

    magic, num_entries, directory_offset = struct.unpack_from(WAD_HEADER_FORMAT, data, 0)
    kind = WadType.from_magic(magic)

    if num_entries < 0 or directory_offset < 0:
        raise FormatError(f"Invalid directory: {num_entries} entries at offset {directory_offset}.")

    directory_end = directory_offset + num_entries * WAD_DIRECTORY_RECORD_SIZE
    if directory_end > len(data):
        raise FormatError(
            f"Directory of {num_entries} entries at offset {directory_offset} "
            f"extends past the end of the file ({len(data)} bytes)."
        )

    entries = []
    for i in range(num_entries):
        record_offset = directory_offset + i * WAD_DIRECTORY_RECORD_SIZE
        offset, length, raw_name = struct.unpack_from(WAD_DIRECTORY_FORMAT, data, record_offset)
        name = decode_name(raw_name)

        if length > 0 and offset > 0:
            if offset + length > len(data):
                raise FormatError(
                    f"Incomplete data for \"{name}\". "
                    f"Expected {length} bytes at offset {offset}, file is {len(data)} bytes."
                )
            entries.append(WadEntry(name, offset, bytes(data[offset:offset + length])))
        else:
            entries.append(WadEntry(name))

    return WadArchive(kind, entries)


class WadParser:
    """
    A parser for WAD files on disk.
    """

    def __init__(self, filepath):
        """
        Initializes the WadParser.

        Args:
            filepath: The path to the WAD file.
        """
        self.filepath = filepath
        self.archive = None

    def parse(self):
        """
        Reads and decodes the entire WAD file.

        Returns:
            The decoded WadArchive.
        """
        with open(self.filepath, "rb") as f:
            data = f.read()

        self.archive = parse_wad(data)
        return self.archive

    @property
    def kind(self):
        return self.archive.kind if self.archive else None

    @property
    def entries(self):
        return self.archive.entries if self.archive else []
