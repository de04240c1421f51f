# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Command-line interface for wadutils.

Provides subcommands:
- list: print the directory of a WAD file
- export: expand a WAD file into a folder
- assemble: build a WAD file from an expanded folder
- convert: convert a single lump to its common format

This module exposes small entry functions that can be used as console_scripts
entry points (they must be callables taking no arguments).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


from .compiler import WadCompiler
from .converter import convert
from .decompiler import WadDecompiler
from .parser import WadParser
from .sniffer import classify


def _build_root_parser():
    p = argparse.ArgumentParser(prog="wadutils", description="wadutils command-line tool")
    sub = p.add_subparsers(dest="command", required=True)

    c_list = sub.add_parser("list", help="List the entries of a WAD file")
    c_list.add_argument("input_file", help="Input WAD file path")

    c_export = sub.add_parser("export", help="Export a WAD file into a directory")
    c_export.add_argument("input_file", help="Input WAD file path")
    c_export.add_argument("output_directory", nargs="?", help="Output directory to create (default: same name as input file)")
    c_export.add_argument("-f", "--force", action="store_true", help="Force overwrite without confirmation")
    c_export.add_argument("--no-media", action="store_true", help="Do not write converted copies to MEDIA/")
    c_export.add_argument("--no-pictures", action="store_true", help="Do not convert unrecognized entries as pictures")

    c_assemble = sub.add_parser("assemble", help="Assemble a directory into a WAD file")
    c_assemble.add_argument("input_directory", help="Input directory with !INDEX.TXT")
    c_assemble.add_argument("output_file", nargs="?", help="Output WAD file path (default: <input_dir_name>.wad)")
    c_assemble.add_argument("-f", "--force", action="store_true", help="Force overwrite without confirmation")

    c_convert = sub.add_parser("convert", help="Convert a single lump to its common format")
    c_convert.add_argument("input_file", help="Input lump file path")
    c_convert.add_argument("output_file", nargs="?", help="Output file path (default: input path plus detected extension)")
    c_convert.add_argument("-f", "--force", action="store_true", help="Force overwrite without confirmation")

    return p


def _confirm_overwrite(path):
    """
    Asks before overwriting an existing path. Returns True to proceed.
    """
    response = input(f"Warning: \"{path}\" already exists. Overwrite? (y/n): ")
    return response.lower() == "y"


def _list(args):
    archive = WadParser(args.input_file).parse()
    print(archive.kind.value)
    for e in archive.entries:
        print(f"{e.name};{e.safe_name};{e.offset};{e.length};{e.content_hash}")
    return 0


def _export(args):
    wad = Path(args.input_file)

    # Determine output directory if not specified
    if args.output_directory:
        outdir = Path(args.output_directory)
    else:
        # Use the stem of the input file
        outdir = wad.with_suffix("")

    # Warn if output directory exists (unless --force is used)
    if outdir.exists() and not args.force and not _confirm_overwrite(outdir):
        print("Export cancelled.")
        return 0

    decompiler = WadDecompiler(
        wad,
        outdir,
        convert_media=not args.no_media,
        convert_pictures=not args.no_pictures,
    )
    decompiler.decompile()
    return 0


def _assemble(args):
    inp = Path(args.input_directory)
    if not inp.is_dir():
        raise FileNotFoundError(f"Directory not found: {inp}")

    out = Path(args.output_file) if args.output_file else inp.with_suffix(".wad")

    # Warn if output file exists (unless --force is used)
    if out.exists() and not args.force and not _confirm_overwrite(out):
        print("Assembly cancelled.")
        return 0

    compiler = WadCompiler(inp, out)
    compiler.compile()
    return 0


def _convert(args):
    inp = Path(args.input_file)
    with open(inp, "rb") as f:
        data = f.read()

    file_type = classify(data)
    extension, converted = convert(data, file_type)

    out = Path(args.output_file) if args.output_file else inp.with_name(inp.name + extension)
    if out.exists() and not args.force and not _confirm_overwrite(out):
        print("Conversion cancelled.")
        return 0

    with open(out, "wb") as f:
        f.write(converted)
    print(f"{file_type.value} -> {out}")
    return 0


_COMMANDS = {
    "list": _list,
    "export": _export,
    "assemble": _assemble,
    "convert": _convert,
}


def main(argv=None):
    """
    Generic entry point for `python -m wadutils` or package-level CLI.

    Returns exit code (0 on success).
    """
    argv = list(argv) if argv is not None else None
    parser = _build_root_parser()
    args = parser.parse_args(argv)

    command = _COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 2

    try:
        return command(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
