# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

from .compiler import WadCompiler, assemble_wad
from .converter import convert
from .decompiler import WadDecompiler, export_entries
from .errors import ConversionError, FormatError, ManifestError, WadError
from .manifest import ManifestLine, parse_line
from .mus2mid import mus_to_midi
from .parser import WadArchive, WadEntry, WadParser, WadType, content_hash, parse_wad
from .sniffer import FileType, classify

__all__ = [
    "WadCompiler",
    "WadDecompiler",
    "WadParser",
    "WadArchive",
    "WadEntry",
    "WadType",
    "ManifestLine",
    "FileType",
    "WadError",
    "FormatError",
    "ManifestError",
    "ConversionError",
    "assemble_wad",
    "export_entries",
    "parse_wad",
    "parse_line",
    "classify",
    "convert",
    "content_hash",
    "mus_to_midi"
]
