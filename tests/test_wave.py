import struct

import pytest

from sigmat.matrix import Matrix
from sigmat.vector import Vector
from sigmat.wave import MetaData, Wave, WaveError, WaveFormat


def _chunk(name: bytes, body: bytes) -> bytes:
    return struct.pack("<4sI", name, len(body)) + body


def _fmt_body(fmt: int, channels: int, rate: int, bits: int) -> bytes:
    width = bits // 8
    return struct.pack("<hhiihh", fmt, channels, rate, rate * channels * width,
                       channels * width, bits)


@pytest.mark.parametrize(
    "wave_format, bits, code",
    [(WaveFormat.LPCM, 16, 1), (WaveFormat.IEEE_FLOAT, 32, 3)],
)
def test_format_codes_written_to_header(tmp_path, wave_format, bits, code):
    path = tmp_path / "code.wav"
    Wave(8000, 1, bits, wave_format).write_vector(path, [1.0, 2.0])
    raw = path.read_bytes()
    (written,) = struct.unpack("<h", raw[20:22])
    assert written == code


def test_metadata_validity():
    assert MetaData(44100, 2, 16, WaveFormat.LPCM).is_valid()
    assert not MetaData(44100, 0, 16, WaveFormat.LPCM).is_valid()
    assert not MetaData(44100, 2, 16, WaveFormat.UNKNOWN).is_valid()
    assert not MetaData().is_valid()


def test_header_layout(tmp_path):
    path = tmp_path / "h.wav"
    fs, ch, bits = 48000, 2, 16
    samples = [1.0, 2.0, 3.0, 4.0]
    Wave(fs, ch, bits).write_vector(path, samples)
    raw = path.read_bytes()
    data_size = len(samples) * bits // 8
    assert raw[0:4] == b"RIFF"
    assert raw[8:12] == b"WAVE"
    assert raw[12:16] == b"fmt "
    assert raw[36:40] == b"data"
    (riff_size,) = struct.unpack("<I", raw[4:8])
    assert riff_size == len(raw) - 8
    fmt, channels, rate, byte_rate, block, depth = struct.unpack("<hhiihh", raw[20:36])
    assert (fmt, channels, rate, depth) == (int(WaveFormat.LPCM), ch, fs, bits)
    assert byte_rate == fs * ch * bits // 8
    assert block == ch * bits // 8
    (size,) = struct.unpack("<I", raw[40:44])
    assert size == data_size
    assert struct.unpack("<4h", raw[44:]) == tuple(int(v) for v in samples)


def test_vector_round_trip_pcm16(tmp_path):
    path = tmp_path / "v.wav"
    samples = [0.0, 100.0, -100.0, 32767.0, -32768.0, 5.0]
    Wave(44100, 2, 16).write_vector(path, Vector(samples))
    wave = Wave()
    result = wave.read_vector(path)
    assert list(result) == samples
    assert wave.metadata == MetaData(44100, 2, 16, WaveFormat.LPCM)
    assert wave.duration == pytest.approx(len(samples) / 2 / 44100)


def test_vector_round_trip_pcm32(tmp_path):
    path = tmp_path / "v32.wav"
    samples = [1.0, -70000.0, 123456.0]
    Wave(8000, 1, 32).write_vector(path, samples)
    assert list(Wave().read_vector(path)) == samples


def test_integer_samples_truncate_and_clamp(tmp_path):
    path = tmp_path / "t.wav"
    Wave(8000, 1, 16).write_vector(path, [1.7, -1.7, 40000.0])
    assert list(Wave().read_vector(path)) == [1.0, -1.0, 32767.0]


def test_float_matrix_round_trip(tmp_path):
    path = tmp_path / "float.wav"
    ch, length = 2, 10
    buffer = Matrix(ch, length)
    for c in range(ch):
        for i in range(length):
            buffer[c][i] = (c + 1) * 10 + i
    Wave(48000, ch, 32, WaveFormat.IEEE_FLOAT).write_matrix(path, buffer)
    wave = Wave()
    result = wave.read_matrix(path)
    assert result == buffer
    assert wave.metadata.wave_format == WaveFormat.IEEE_FLOAT
    assert wave.metadata.bit_depth == 32


def test_write_matrix_interleaves_channels(tmp_path):
    path = tmp_path / "m.wav"
    buffer = Matrix.from_rows([[1, 2, 3], [10, 20, 30]])
    Wave(8000, 2, 16).write_matrix(path, buffer)
    raw = path.read_bytes()
    assert struct.unpack("<6h", raw[44:]) == (1, 10, 2, 20, 3, 30)
    vector = Wave().read_vector(path)
    matrix = Wave().read_matrix(path)
    assert [matrix[c][i] for i in range(3) for c in range(2)] == list(vector)


def test_read_skips_unknown_chunks_and_reads_fact(tmp_path):
    path = tmp_path / "extra.wav"
    samples = (3, -4, 5, -6)
    body = (
        b"WAVE"
        + _chunk(b"fmt ", _fmt_body(1, 1, 8000, 16))
        + _chunk(b"LIST", b"abcd")
        + _chunk(b"fact", struct.pack("<i", len(samples)))
        + _chunk(b"data", struct.pack("<4h", *samples))
    )
    path.write_bytes(struct.pack("<4sI", b"RIFF", len(body)) + body)
    wave = Wave()
    assert list(wave.read_vector(path)) == [float(v) for v in samples]
    assert wave.duration == pytest.approx(len(samples) / 8000)


def test_read_rejects_non_wave_riff(tmp_path):
    path = tmp_path / "avi.wav"
    path.write_bytes(struct.pack("<4sI", b"RIFF", 4) + b"AVI ")
    with pytest.raises(WaveError):
        Wave().read_vector(path)


def test_read_truncated_data(tmp_path):
    path = tmp_path / "short.wav"
    body = (
        b"WAVE"
        + _chunk(b"fmt ", _fmt_body(1, 1, 8000, 16))
        + struct.pack("<4sI", b"data", 100)
        + b"\x00\x01"
    )
    path.write_bytes(struct.pack("<4sI", b"RIFF", len(body)) + body)
    with pytest.raises(WaveError):
        Wave().read_vector(path)


def test_read_without_data_chunk(tmp_path):
    path = tmp_path / "nodata.wav"
    body = b"WAVE" + _chunk(b"fmt ", _fmt_body(1, 1, 8000, 16))
    path.write_bytes(struct.pack("<4sI", b"RIFF", len(body)) + body)
    with pytest.raises(WaveError):
        Wave().read_vector(path)


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Wave().read_vector(tmp_path / "absent.wav")


def test_write_requires_valid_metadata(tmp_path):
    with pytest.raises(WaveError):
        Wave().write_vector(tmp_path / "x.wav", [1.0])
    assert not (tmp_path / "x.wav").exists()


def test_write_rejects_empty_buffer(tmp_path):
    with pytest.raises(WaveError):
        Wave(8000, 1, 16).write_vector(tmp_path / "x.wav", [])
    with pytest.raises(WaveError):
        Wave(8000, 1, 16).write_matrix(tmp_path / "y.wav", Matrix())


def test_write_rejects_unsupported_depth(tmp_path):
    with pytest.raises(WaveError):
        Wave(8000, 1, 24).write_vector(tmp_path / "x.wav", [1.0])
    with pytest.raises(WaveError):
        Wave(8000, 1, 16, WaveFormat.IEEE_FLOAT).write_vector(tmp_path / "y.wav", [1.0])


def test_write_matrix_needs_row_per_channel(tmp_path):
    buffer = Matrix.from_rows([[1.0, 2.0]])
    with pytest.raises(WaveError):
        Wave(8000, 2, 16).write_matrix(tmp_path / "x.wav", buffer)


def test_set_metadata_replaces_parameters():
    wave = Wave()
    wave.set_metadata(22050, 1, 32, WaveFormat.IEEE_FLOAT)
    assert wave.metadata == MetaData(22050, 1, 32, WaveFormat.IEEE_FLOAT)
    assert wave.metadata.is_valid()