"""
Tests for the media converters.
"""

import io
import struct

import numpy as np
import pytest
import soundfile as sf
from PIL import Image

from wadutils import ConversionError, FileType, convert
from wadutils.picture import picture_to_array
from wadutils.riff import make_chunk, raw_audio_to_wav, wave_header


def test_wave_header_layout():
    header = wave_header(1000)
    assert len(header) == 44
    assert header[:4] == b"RIFF"
    assert struct.unpack_from("<I", header, 4)[0] == 1036
    assert header[8:16] == b"WAVEfmt "
    assert struct.unpack_from("<IHHIIHH", header, 16) == (16, 1, 1, 11025, 11025, 1, 8)
    assert header[36:40] == b"data"
    assert struct.unpack_from("<I", header, 40)[0] == 1000


def test_make_chunk_pads_odd_sizes():
    assert make_chunk(b"abcd", b"xyz") == b"abcd\x03\x00\x00\x00xyz\x00"
    with pytest.raises(ValueError):
        make_chunk(b"abc", b"")


def test_raw_audio_to_wav_keeps_samples(make_raw_audio):
    samples = bytes([0x80, 0x90, 0xa0, 0xb0, 0x70])
    wav = raw_audio_to_wav(make_raw_audio(samples))
    assert len(wav) == 44 + len(samples)
    assert wav[44:] == samples
    assert struct.unpack_from("<I", wav, 40)[0] == len(samples)


def test_raw_audio_wav_is_readable(tmp_path, make_raw_audio):
    path = tmp_path / "sound.wav"
    path.write_bytes(raw_audio_to_wav(make_raw_audio(bytes(range(0x40, 0xc0)))))
    info = sf.info(str(path))
    assert info.samplerate == 11025
    assert info.channels == 1
    assert info.frames == 0x80
    assert info.subtype == "PCM_U8"


@pytest.mark.parametrize("data", [
    struct.pack("<HHHH", 3, 11025, 5, 0) + bytes(4),
    struct.pack("<HHHH", 3, 11025, 4, 1) + bytes(4),
    struct.pack("<HHHH", 3, 11025, 0, 0),
    b"RIFF" + bytes(8),
])
def test_malformed_raw_audio_raises_conversion_error(data):
    with pytest.raises(ConversionError):
        raw_audio_to_wav(data)


def test_picture_to_array(picture_lump):
    pixels = picture_to_array(picture_lump)
    assert pixels.shape == (3, 2, 2)
    assert pixels[:, 0, 0].tolist() == [10, 20, 0]
    assert pixels[:, 0, 1].tolist() == [255, 255, 0]
    assert not np.any(pixels[:, 1, 1])


def test_picture_converts_to_png(picture_lump):
    extension, png = convert(picture_lump, FileType.UNKNOWN)
    assert extension == ".PNG"
    image = Image.open(io.BytesIO(png))
    assert image.size == (2, 3)
    assert image.mode == "LA"
    assert image.getpixel((0, 1)) == (20, 255)
    assert image.getpixel((1, 0))[1] == 0


@pytest.mark.parametrize("data", [
    b"\x01\x02",
    struct.pack("<hhhh", 0, 5, 0, 0),
    struct.pack("<hhhh", 4, 4, 0, 0) + bytes(4),
    struct.pack("<hhhh", 1, 1, 0, 0) + struct.pack("<I", 500),
    struct.pack("<hhhh", 1, 1, 0, 0) + struct.pack("<I", 12) + bytes([0, 3, 0, 1, 2, 3, 0, 0xFF]),
    struct.pack("<hhhh", 1, 4, 0, 0) + struct.pack("<I", 12) + bytes([0, 1, 0, 1, 0]),
])
def test_malformed_pictures_raise_conversion_error(data):
    with pytest.raises(ConversionError):
        picture_to_array(data)


def test_convert_detects_type(make_mus, make_raw_audio):
    extension, midi = convert(make_mus(b"\x10\x3c\x60"))
    assert extension == ".MID"
    assert midi.startswith(b"MThd")

    extension, wav = convert(make_raw_audio(b"\x80\x80"))
    assert extension == ".WAV"
    assert wav.startswith(b"RIFF")


@pytest.mark.parametrize("data, extension", [
    (b"Extended Module: x", ".XM"),
    (b"IMPM....", ".IT"),
    (b"RIFF....WAVE", ".WAV"),
    (b"ID3.....", ".MP3"),
    (b"MThd....", ".MID"),
    (b"OggS....", ".OGG"),
])
def test_common_formats_are_copied(data, extension):
    assert convert(data) == (extension, data)


def test_invalid_mus_raises_conversion_error(make_mus):
    with pytest.raises(ConversionError, match="MUS"):
        convert(make_mus(b"\x50\x60"))


def test_virtual_raises_conversion_error():
    with pytest.raises(ConversionError):
        convert(b"")
