# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
WAD Compiler - Rebuilds a WAD file from an expanded directory.

The directory must contain an !INDEX.TXT file (see manifest.py) listing the
entries in order. Files with identical contents are stored only once; every
entry referencing them points at the same data.
"""

import struct
import sys
from pathlib import Path

from .constants import (
    WAD_DIRECTORY_FORMAT,
    WAD_HEADER_FORMAT,
)
from .errors import FormatError, ManifestError
from .manifest import parse_line, read_manifest
from .parser import WadType, content_hash, encode_name


class AssemblyStats:
    """
    Counters collected while assembling a WAD file.
    """

    def __init__(self):
        self.entries = 0
        self.virtual = 0
        self.duplicates = 0
        self.skipped = 0
        self.bytes_saved = 0


def _place_data(output, data, placed, stats):
    """
    Appends data to the output unless identical data was placed earlier.

    Args:
        output: The WAD buffer being built.
        data: The entry data.
        placed: Mapping of content hash -> (offset, length) for this assembly.
        stats: AssemblyStats to update.

    Returns:
        A tuple of (offset, length) for the directory record.
    """
    digest = content_hash(data)
    if digest in placed:
        stats.duplicates += 1
        stats.bytes_saved += len(data)
        return placed[digest]

    location = (len(output), len(data))
    output += data
    placed[digest] = location
    return location


def assemble_wad(lines, base_dir, stats=None):
    """
    Assembles a WAD file from index lines and the files they reference.

    Args:
        lines: The lines of the index file; the first one is the WAD type.
        base_dir: Directory that file names in the index are relative to.
        stats: Optional AssemblyStats to fill in.

    Returns:
        The complete WAD file as bytes.

    Raises:
        FormatError: If the first line is not IWAD or PWAD.
        FileNotFoundError: If a referenced file does not exist.
    """
    lines = list(lines)
    if not lines:
        raise FormatError("Index is empty; expected IWAD or PWAD on the first line.")

    kind = WadType.from_magic(lines[0])
    base_dir = Path(base_dir)
    if stats is None:
        stats = AssemblyStats()

    # Header is patched once the directory position is known
    output = bytearray(struct.pack(WAD_HEADER_FORMAT, kind.value.encode("ascii"), 0, 0))
    directory = bytearray()
    placed = {}

    for line_number, text in enumerate(lines[1:], 2):
        line = parse_line(text)
        try:
            line.validate()
        except ManifestError as e:
            if text.strip():
                print(f"  Warning: Skipping line {line_number} \"{text.strip()}\": {e}", file=sys.stderr)
            stats.skipped += 1
            continue

        if line.is_virtual:
            offset, length = 0, 0
            stats.virtual += 1
        else:
            with open(base_dir / line.filename, "rb") as f:
                data = f.read()
            if data:
                offset, length = _place_data(output, data, placed, stats)
            else:
                offset, length = 0, 0

        directory += struct.pack(WAD_DIRECTORY_FORMAT, offset, length, encode_name(line.name))
        stats.entries += 1

    struct.pack_into("<ii", output, 4, stats.entries, len(output))
    output += directory
    return bytes(output)


class WadCompiler:
    """
    Compiles a WAD file from an expanded directory.
    """

    def __init__(self, input_dir, output_wad):
        """
        Initializes the WAD Compiler.

        Args:
            input_dir: The input directory path (containing !INDEX.TXT).
            output_wad: The output WAD file path.
        """
        self.input_dir = Path(input_dir)
        self.output_wad = Path(output_wad)
        self.stats = AssemblyStats()

    def compile(self):
        """
        Generates the WAD file from the directory.
        """
        print(f"Compiling from: {self.input_dir}")

        lines = read_manifest(self.input_dir)
        data = assemble_wad(lines, self.input_dir, self.stats)

        print(f"Writing WAD file: {self.output_wad}")
        if self.output_wad.exists():
            print(f"  Warning: Overwriting existing file: {self.output_wad}", file=sys.stderr)
        with open(self.output_wad, "wb") as f:
            f.write(data)

        print(f"  Entries: {self.stats.entries} ({self.stats.virtual} virtual, {self.stats.duplicates} deduplicated)")
        if self.stats.skipped:
            print(f"  Skipped {self.stats.skipped} invalid line(s)", file=sys.stderr)
        print(f"  Deduplication saved {self.stats.bytes_saved} bytes")
        print("Compilation complete!")
        return self.output_wad
