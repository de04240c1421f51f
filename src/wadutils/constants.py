# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
WAD Constants - Common constant definitions used by the WAD tools

Defines constants used by the parser, the compiler, the decompiler and the
media converters.
"""

# WAD header: 4-byte magic, int32 entry count, int32 directory offset
WAD_MAGICS = ("IWAD", "PWAD")
WAD_HEADER_FORMAT = "<4sii"
WAD_HEADER_SIZE = 12

# Directory record: int32 offset, int32 length, 8-byte name
WAD_DIRECTORY_FORMAT = "<ii8s"
WAD_DIRECTORY_RECORD_SIZE = 16
WAD_NAME_LENGTH = 8

# Export directory layout
INDEX_FILENAME = "!INDEX.TXT"
MEDIA_DIRNAME = "MEDIA"

# MUS header: "MUS\x1A" + score length, score start, primary channels,
# secondary channels, instrument count
MUS_MAGIC = b"MUS\x1a"
MUS_HEADER_FORMAT = "<4sHHHHH"
MUS_HEADER_SIZE = 14

# MUS event kinds (bits 4-6 of the event descriptor)
MUS_RELEASE_KEY = 0
MUS_PRESS_KEY = 1
MUS_PITCH_WHEEL = 2
MUS_SYSTEM_EVENT = 3
MUS_CHANGE_CONTROLLER = 4
MUS_SCORE_END = 6

MUS_NUM_CHANNELS = 16
MUS_PERCUSSION_CHANNEL = 15

# MIDI status bytes (high nibble)
MIDI_RELEASE_KEY = 0x80
MIDI_PRESS_KEY = 0x90
MIDI_CHANGE_CONTROLLER = 0xB0
MIDI_CHANGE_PATCH = 0xC0
MIDI_PITCH_WHEEL = 0xE0

MIDI_PERCUSSION_CHANNEL = 9
MIDI_DEFAULT_VELOCITY = 127
MIDI_END_OF_TRACK = b"\xff\x2f\x00"

# MUS controller number -> MIDI controller number
# 0-9 come with change-controller events, 10-14 with system events
MUS_CONTROLLER_MAP = (
    0x00,  # 0: program change (handled separately)
    0x20,  # 1: bank select
    0x01,  # 2: modulation
    0x07,  # 3: volume
    0x0A,  # 4: pan
    0x0B,  # 5: expression
    0x5B,  # 6: reverb depth
    0x5D,  # 7: chorus depth
    0x40,  # 8: sustain pedal
    0x43,  # 9: soft pedal
    0x78,  # 10: all sounds off
    0x7B,  # 11: all notes off
    0x7E,  # 12: mono
    0x7F,  # 13: poly
    0x79,  # 14: reset all controllers
)

# Single track, format 0, 70 ticks per quarter note; the MTrk length field
# (the last 4 bytes) is patched once the track body is known
MIDI_HEADER = (
    b"MThd"
    b"\x00\x00\x00\x06"
    b"\x00\x00"
    b"\x00\x01"
    b"\x00\x46"
    b"MTrk"
    b"\x00\x00\x00\x00"
)
MIDI_TRACK_LENGTH_OFFSET = 18

# Raw audio lumps: <HHHH format tag (3), sample rate, sample count, zero
RAW_AUDIO_TAG = b"\x03\x00"
RAW_AUDIO_HEADER_FORMAT = "<HHHH"
RAW_AUDIO_HEADER_SIZE = 8

# Parameters of the synthesized RIFF/WAVE header
WAV_HEADER_SIZE = 44
WAV_SAMPLE_RATE = 11025
WAV_CHANNELS = 1
WAV_BITS_PER_SAMPLE = 8

# Picture lumps: <hhhh width, height, left offset, top offset
PICTURE_HEADER_FORMAT = "<hhhh"
PICTURE_HEADER_SIZE = 8
PICTURE_MAX_DIMENSION = 4096
PICTURE_POST_END = 0xFF
