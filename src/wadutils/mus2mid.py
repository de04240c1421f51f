# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
MUS to MIDI converter.

MUS is the compact music format stored in DOOM engine WAD files. A score is a
sequence of event groups; each group is followed by a variable-length delay.
The output is a format 0 Standard MIDI File with a single track.
"""

import struct

from .constants import (
    MIDI_CHANGE_CONTROLLER,
    MIDI_CHANGE_PATCH,
    MIDI_DEFAULT_VELOCITY,
    MIDI_END_OF_TRACK,
    MIDI_HEADER,
    MIDI_PERCUSSION_CHANNEL,
    MIDI_PITCH_WHEEL,
    MIDI_PRESS_KEY,
    MIDI_RELEASE_KEY,
    MIDI_TRACK_LENGTH_OFFSET,
    MUS_CHANGE_CONTROLLER,
    MUS_CONTROLLER_MAP,
    MUS_HEADER_FORMAT,
    MUS_HEADER_SIZE,
    MUS_NUM_CHANNELS,
    MUS_PERCUSSION_CHANNEL,
    MUS_PITCH_WHEEL,
    MUS_PRESS_KEY,
    MUS_RELEASE_KEY,
    MUS_SCORE_END,
    MUS_SYSTEM_EVENT,
)
from .errors import FormatError
from .sniffer import is_mus


def encode_variable_length(value):
    """
    Encodes a non-negative integer as a MIDI variable-length quantity
    (7 bits per byte, most significant group first, continuation bit set on
    all but the last byte).
    """
    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(groups))


class MusHeader:
    """
    The fixed 14-byte header of a MUS lump.
    """

    def __init__(self, data):
        """
        Reads the header from the start of a MUS lump.

        Raises:
            FormatError: If the data is too short or the magic is wrong.
        """
        if len(data) < MUS_HEADER_SIZE or not is_mus(data):
            raise FormatError("Not a MUS lump: missing \"MUS\\x1A\" header.")

        (
            _,
            self.score_length,
            self.score_start,
            self.primary_channels,
            self.secondary_channels,
            self.instrument_count,
        ) = struct.unpack_from(MUS_HEADER_FORMAT, data, 0)


class MusToMidiConverter:
    """
    Converts one MUS lump to MIDI.

    All state (channel allocation, per-channel velocities, pending delay)
    belongs to the instance, so every conversion starts fresh.
    """

    def __init__(self, data):
        """
        Args:
            data: The complete MUS lump.
        """
        self.data = data
        self.header = None
        self.position = 0

        self.channel_map = {MUS_PERCUSSION_CHANNEL: MIDI_PERCUSSION_CHANNEL}
        self.channel_velocities = [MIDI_DEFAULT_VELOCITY] * MUS_NUM_CHANNELS
        self.queued_time = 0
        self.output = bytearray()

    def convert(self):
        """
        Runs the conversion.

        Returns:
            The MIDI file as bytes.

        Raises:
            FormatError: If the header or any event is invalid, or the score
                ends without a score-end event.
        """
        self.header = MusHeader(self.data)

        # Scores normally start right after the header and the instrument
        # list; a start offset inside the header means "right after it"
        self.position = max(self.header.score_start, MUS_HEADER_SIZE)
        if self.position > len(self.data):
            raise FormatError(f"MUS score start {self.header.score_start} is past the end of the lump.")

        self.output = bytearray(MIDI_HEADER)
        self.queued_time = 0

        score_ended = False
        while not score_ended:
            score_ended = self._read_event_group()
            if not score_ended:
                self.queued_time += self._read_delay()

        self._write_time()
        self.output += MIDI_END_OF_TRACK

        track_size = len(self.output) - len(MIDI_HEADER)
        struct.pack_into(">I", self.output, MIDI_TRACK_LENGTH_OFFSET, track_size)
        return bytes(self.output)

    def _read_byte(self):
        if self.position >= len(self.data):
            raise FormatError("Unexpected end of MUS data.")
        value = self.data[self.position]
        self.position += 1
        return value

    def _read_event_group(self):
        """
        Reads events until one has its last-event bit set.

        Returns:
            True if the score-end event was reached.
        """
        while True:
            descriptor = self._read_byte()
            channel = self._get_midi_channel(descriptor & 0x0F)
            event = (descriptor >> 4) & 0x07

            if event == MUS_RELEASE_KEY:
                key = self._read_byte()
                self._write_event(MIDI_RELEASE_KEY, channel, key & 0x7F, 0)

            elif event == MUS_PRESS_KEY:
                key = self._read_byte()
                if key & 0x80:
                    self.channel_velocities[channel] = self._read_byte() & 0x7F
                self._write_event(MIDI_PRESS_KEY, channel, key & 0x7F, self.channel_velocities[channel])

            elif event == MUS_PITCH_WHEEL:
                wheel = self._read_byte() * 64
                self._write_event(MIDI_PITCH_WHEEL, channel, wheel & 0x7F, (wheel >> 7) & 0x7F)

            elif event == MUS_SYSTEM_EVENT:
                controller = self._read_byte()
                if not 10 <= controller <= 14:
                    raise FormatError(f"Invalid MUS system event {controller}.")
                self._write_event(MIDI_CHANGE_CONTROLLER, channel, MUS_CONTROLLER_MAP[controller], 0)

            elif event == MUS_CHANGE_CONTROLLER:
                controller = self._read_byte()
                value = self._read_byte()
                if controller == 0:
                    self._write_event(MIDI_CHANGE_PATCH, channel, value & 0x7F)
                elif 1 <= controller <= 9:
                    self._write_event(MIDI_CHANGE_CONTROLLER, channel, MUS_CONTROLLER_MAP[controller], min(value, 0x7F))
                else:
                    raise FormatError(f"Invalid MUS controller {controller}.")

            elif event == MUS_SCORE_END:
                return True

            else:
                raise FormatError(f"Invalid MUS event {event} at offset {self.position - 1}.")

            if descriptor & 0x80:
                return False

    def _read_delay(self):
        """
        Reads the delay that follows an event group (7 bits per byte, high
        bit set on all but the last byte).
        """
        delay = 0
        while True:
            working = self._read_byte()
            delay = delay * 128 + (working & 0x7F)
            if not working & 0x80:
                return delay

    def _get_midi_channel(self, mus_channel):
        """
        Returns the MIDI channel for a MUS channel, allocating the lowest free
        one on first use. MUS channel 15 always maps to the percussion channel.
        """
        if mus_channel not in self.channel_map:
            used = set(self.channel_map.values())
            free = [c for c in range(MUS_NUM_CHANNELS) if c not in used]
            if not free:
                raise RuntimeError(f"No MIDI channel left for MUS channel {mus_channel}.")
            self.channel_map[mus_channel] = free[0]
        return self.channel_map[mus_channel]

    def _write_time(self):
        self.output += encode_variable_length(self.queued_time)
        self.queued_time = 0

    def _write_event(self, status, channel, *params):
        self._write_time()
        self.output.append(status | channel)
        self.output += bytes(params)


def mus_to_midi(data):
    """
    Converts a MUS lump to a Standard MIDI File.

    Args:
        data: The MUS lump.

    Returns:
        The MIDI file as bytes.

    Raises:
        FormatError: If the lump is not a valid MUS score.
    """
    return MusToMidiConverter(data).convert()
