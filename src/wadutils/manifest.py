# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Index file (!INDEX.TXT) handling.

The first line holds the WAD type (IWAD or PWAD). Every following line
describes one directory entry, in order:

    NAME                         virtual entry (no data)
    NAME<TAB>FILENAME<TAB>HASH   entry whose data is stored in FILENAME

Padding around the fields is ignored. The hash is informational only and is
never checked against the file contents.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import INDEX_FILENAME
from .errors import ManifestError


@dataclass
class ManifestLine:
    """
    One entry line of an index file.
    """
    name: str
    filename: Optional[str] = None
    hash: Optional[str] = None

    @property
    def is_virtual(self):
        return self.filename is None

    def is_valid(self):
        """
        A line is valid if it has a name and, unless virtual, a file name.
        """
        return bool(self.name) and (self.is_virtual or bool(self.filename))

    def validate(self):
        """
        Raises:
            ManifestError: If the line is not valid.
        """
        if not self.name:
            raise ManifestError("Entry has no name.")
        if not self.is_virtual and not self.filename:
            raise ManifestError(f"Entry \"{self.name}\" has no file name.")


def parse_line(text):
    """
    Parses a single entry line.

    Args:
        text: The line, with or without its line terminator.

    Returns:
        The parsed ManifestLine. An empty line, or a content line whose name
        field is blank, yields an invalid line with an empty name.
    """
    # Only trailing whitespace is trimmed before the split, so a blank name
    # field still occupies the first column
    parts = [part.strip() for part in text.rstrip().split("\t")]
    if len(parts) >= 2:
        return ManifestLine(
            name=parts[0],
            filename=parts[1],
            hash=parts[2] if len(parts) > 2 and parts[2] else None,
        )
    return ManifestLine(name=parts[0])


def format_line(name, filename=None, hash_value=None):
    """
    Formats an entry line, padding the name to 8 and the file name to 12
    characters.
    """
    if filename is None:
        return f"{name:>8}"
    return f"{name:>8}\t{filename:>12}\t{hash_value or ''}"


def read_manifest(input_dir):
    """
    Reads the index file of an expanded WAD directory.

    Args:
        input_dir: The directory containing !INDEX.TXT.

    Returns:
        The raw lines of the file (type line first).

    Raises:
        FileNotFoundError: If the index file is missing.
    """
    index_path = Path(input_dir) / INDEX_FILENAME
    if not index_path.exists():
        raise FileNotFoundError(f"{INDEX_FILENAME} not found in {input_dir}")

    with open(index_path, "r", encoding="utf-8-sig") as f:
        return f.read().splitlines()
