"""
Shared fixtures: small WAD files and lumps built in memory.
"""

import struct

import pytest


def _build_wad(kind, entries):
    """
    Builds a WAD file from (name, data) pairs; data None makes a virtual entry.
    """
    body = bytearray()
    directory = bytearray()
    for name, payload in entries:
        if payload:
            directory += struct.pack("<ii8s", 12 + len(body), len(payload), name.encode("ascii"))
            body += payload
        else:
            directory += struct.pack("<ii8s", 0, 0, name.encode("ascii"))
    header = struct.pack("<4sii", kind, len(entries), 12 + len(body))
    return header + bytes(body) + bytes(directory)


def _mus(body, score_start=0):
    """
    Builds a MUS lump with a zeroed header (except the score start) and the
    given event bytes directly after it.
    """
    return b"MUS\x1a" + struct.pack("<HHHHH", len(body), score_start, 0, 0, 0) + bytes(body)


def _raw_audio(samples, rate=11025):
    return struct.pack("<HHHH", 3, rate, len(samples), 0) + bytes(samples)


def _picture():
    """
    A 2x3 picture: column 0 has one post of two pixels (10, 20) at the top,
    column 1 is empty.
    """
    header = struct.pack("<hhhh", 2, 3, 0, 0)
    column0 = bytes([0, 2, 0, 10, 20, 0, 0xFF])
    column1 = bytes([0xFF])
    table = struct.pack("<II", 16, 16 + len(column0))
    return header + table + column0 + column1


@pytest.fixture
def build_wad():
    return _build_wad


@pytest.fixture
def make_mus():
    return _mus


@pytest.fixture
def make_raw_audio():
    return _raw_audio


@pytest.fixture
def picture_lump():
    return _picture()


@pytest.fixture
def sample_wad(build_wad, make_mus, make_raw_audio, picture_lump):
    """
    A PWAD exercising virtual markers, duplicates, name clashes and every
    converter.
    """
    return build_wad(b"PWAD", [
        ("F_START", None),
        ("PIC", picture_lump),
        ("D_E1M1", make_mus(b"\x10\x3c\x60")),
        ("DSPISTOL", make_raw_audio(b"\x80\x90\xa0\xb0")),
        ("COPY", picture_lump),
        ("F_END", None),
        ("a/b", b"xyz"),
        ("A_B", b"other"),
    ])
