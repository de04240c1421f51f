# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
WAD Decompiler - Expands a WAD file into a directory.

This tool expands a WAD file into the following structure:
- !INDEX.TXT: WAD type and the ordered entry list (see manifest.py)
- one file per distinct entry content, named after the entry
- MEDIA/: converted copies of recognized entries (MIDI, WAV, PNG, ...)

Entries with identical contents are written once; later entries only
reference the first file in the index.
"""

import sys
from pathlib import Path

from .constants import INDEX_FILENAME, MEDIA_DIRNAME
from .converter import convert
from .errors import ConversionError
from .manifest import format_line
from .parser import WadParser, content_hash, sanitize_filename
from .sniffer import FileType, classify


def _unique_filename(name, used_names):
    """
    Returns name, or name with the first free "_<n>" suffix if it is taken.
    Comparison ignores case.
    """
    candidate = name
    index = 0
    while candidate.lower() in used_names:
        candidate = f"{name}_{index}"
        index += 1
    return candidate


def export_entries(archive, write_file, write_derived=None, hash_fn=content_hash, convert_pictures=True):
    """
    Writes the entries of an archive and builds its index.

    Args:
        archive: The WadArchive to export.
        write_file: Callable (filename, data) storing the raw entry data.
        write_derived: Optional callable (filename, data) storing converted
            copies. Nothing is converted if omitted.
        hash_fn: Callable computing the content hash of entry data.
        convert_pictures: Whether unrecognized entries are converted as
            picture lumps.

    Returns:
        The index file text.
    """
    lines = [archive.kind.value]
    exported = {}  # content hash -> filename
    # Names reserved by the directory layout
    used_names = {INDEX_FILENAME.lower(), MEDIA_DIRNAME.lower()}

    for entry in archive.entries:
        if entry.is_virtual:
            lines.append(format_line(entry.name))
            continue

        digest = hash_fn(entry.data)
        if digest in exported:
            print(f"  {entry.name} duplicates {exported[digest]}; creating reference only", file=sys.stderr)
        else:
            filename = _unique_filename(sanitize_filename(entry.name), used_names)
            if filename != sanitize_filename(entry.name):
                print(f"  Warning: Duplicate entry name \"{entry.name}\" -> Renaming to: \"{filename}\"", file=sys.stderr)

            write_file(filename, entry.data)
            used_names.add(filename.lower())
            exported[digest] = filename

            if write_derived is not None:
                _export_derived(entry, filename, write_derived, convert_pictures)

        lines.append(format_line(entry.name, exported[digest], digest))

    return "\n".join(lines) + "\n"


def _export_derived(entry, filename, write_derived, convert_pictures):
    """
    Writes the converted copy of an entry, reporting failures without
    stopping the export.
    """
    file_type = classify(entry.data)
    if file_type == FileType.UNKNOWN and not convert_pictures:
        return

    try:
        extension, converted = convert(entry.data, file_type)
    except ConversionError as e:
        print(f"  Warning: Could not convert \"{entry.name}\" ({file_type.value}): {e}", file=sys.stderr)
        return

    write_derived(f"{filename}{extension}", converted)


class WadDecompiler:
    """
    Decompiles a WAD file into a directory structure.
    """

    def __init__(self, wad_path, output_dir, convert_media=True, convert_pictures=True):
        """
        Initializes the WAD Decompiler.

        Args:
            wad_path: The path to the WAD file.
            output_dir: The output directory path.
            convert_media: Whether to write converted copies to MEDIA/.
            convert_pictures: Whether unrecognized entries are converted as
                picture lumps.
        """
        self.wad_path = wad_path
        self.output_dir = Path(output_dir)
        self.media_dir = self.output_dir / MEDIA_DIRNAME
        self.parser = WadParser(wad_path)
        self.convert_media = convert_media
        self.convert_pictures = convert_pictures

        self.written_files = set()
        self.derived_files = set()

    def decompile(self):
        """
        Decompiles the file.
        """
        print(f"Parsing file: {self.wad_path}")
        archive = self.parser.parse()
        print(f"  {len(archive.entries)} entries ({archive.virtual_count} virtual)")

        # Create output directories
        self.output_dir.mkdir(parents=True, exist_ok=True)
        if self.convert_media:
            self.media_dir.mkdir(exist_ok=True)
        print(f"Decompiling to: {self.output_dir}")

        index_text = export_entries(
            archive,
            self._write_file,
            self._write_derived if self.convert_media else None,
            convert_pictures=self.convert_pictures,
        )

        with open(self.output_dir / INDEX_FILENAME, "w", encoding="utf-8") as f:
            f.write(index_text)
        print(f"  Created: {INDEX_FILENAME}")
        print(f"  Created: {len(self.written_files)} entry files")
        if self.convert_media:
            print(f"  Created: {len(self.derived_files)} media files in {MEDIA_DIRNAME}/")

        print("Decompilation complete!")
        return archive

    def _write_file(self, filename, data):
        output_path = self.output_dir / filename
        with open(output_path, "wb") as f:
            f.write(data)
        self.written_files.add(output_path)

    def _write_derived(self, filename, data):
        output_path = self.media_dir / filename
        with open(output_path, "wb") as f:
            f.write(data)
        self.derived_files.add(output_path)
