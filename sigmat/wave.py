"""Reading and writing RIFF/WAVE audio files as vectors and matrices."""

from __future__ import annotations

import enum
import io
import logging
import math
import os
import struct
from collections.abc import Iterable
from dataclasses import dataclass
from typing import BinaryIO, Union

from sigmat.matrix import Matrix
from sigmat.vector import Vector

PathLike = Union[str, "os.PathLike[str]"]

logger = logging.getLogger(__name__)

_CHUNK_HEADER = struct.Struct("<4sI")
_ID_RIFF = b"RIFF"
_ID_WAVE = b"WAVE"
_ID_FMT = b"fmt "
_ID_DATA = b"data"
_ID_FACT = b"fact"
_FMT_SIZE = 0x10


class WaveError(Exception):
    """Raised when a wave file cannot be read or written."""


class WaveFormat(enum.IntEnum):
    """Sample encodings, with their codes in the ``fmt `` chunk."""

    UNKNOWN = 0
    LPCM = 1
    IEEE_FLOAT = 3


@dataclass
class MetaData:
    """Stream parameters carried by the ``fmt `` chunk."""

    sampling_rate: int = 0
    channels: int = 0
    bit_depth: int = 0
    wave_format: WaveFormat = WaveFormat.UNKNOWN

    def is_valid(self) -> bool:
        """True if every parameter is set and the format is known."""
        return (
            self.channels != 0
            and self.sampling_rate != 0
            and self.bit_depth != 0
            and self.wave_format != WaveFormat.UNKNOWN
        )


# struct codes for each supported (format, bytes per sample) pair
_SAMPLE_CODES: dict[tuple[WaveFormat, int], str] = {
    (WaveFormat.LPCM, 2): "h",
    (WaveFormat.LPCM, 4): "i",
    (WaveFormat.IEEE_FLOAT, 4): "f",
}

_INTEGER_LIMITS = {"h": (-(1 << 15), (1 << 15) - 1), "i": (-(1 << 31), (1 << 31) - 1)}


def _read_exact(handle: BinaryIO, size: int) -> bytes:
    data = handle.read(size)
    if len(data) != size:
        raise WaveError(f"unexpected end of file: wanted {size} bytes, got {len(data)}")
    return data


def _to_format(code: int) -> WaveFormat:
    try:
        return WaveFormat(code)
    except ValueError:
        return WaveFormat.UNKNOWN


class Wave:
    """A wave file description that reads and writes sample data.

    Samples are exchanged as plain floats without any scaling: a 16-bit
    PCM sample of 1000 reads back as ``1000.0``.  Reading replaces the
    metadata with what the file declares.
    """

    def __init__(
        self,
        sampling_rate: int = 0,
        channels: int = 0,
        bit_depth: int = 0,
        wave_format: WaveFormat = WaveFormat.LPCM,
    ) -> None:
        self.metadata = MetaData()
        self.duration = 0.0
        self.set_metadata(sampling_rate, channels, bit_depth, wave_format)

    def set_metadata(
        self,
        sampling_rate: int,
        channels: int,
        bit_depth: int,
        wave_format: WaveFormat = WaveFormat.LPCM,
    ) -> None:
        """Replace the stream parameters used for writing."""
        self.metadata = MetaData(sampling_rate, channels, bit_depth, WaveFormat(wave_format))

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    def _sample_code(self) -> str:
        meta = self.metadata
        if meta.bit_depth % 8:
            raise WaveError(f"unsupported bit depth: {meta.bit_depth}")
        key = (meta.wave_format, meta.bit_depth // 8)
        try:
            return _SAMPLE_CODES[key]
        except KeyError:
            raise WaveError(
                f"unsupported sample format: {meta.wave_format.name}, {meta.bit_depth} bits"
            ) from None

    def _read_metadata(self, handle: BinaryIO) -> tuple[int, int]:
        """Walk the chunks and return the data position and size in bytes."""
        data_position: int | None = None
        data_size = 0
        length = 0
        while True:
            header = handle.read(_CHUNK_HEADER.size)
            if len(header) < _CHUNK_HEADER.size:
                break
            name, size = _CHUNK_HEADER.unpack(header)
            if name == _ID_RIFF:
                kind = _read_exact(handle, 4)
                if kind != _ID_WAVE:
                    raise WaveError(f"unsupported RIFF type: {kind!r}")
            elif name == _ID_FMT:
                code, channels, rate = struct.unpack("<hhi", _read_exact(handle, 8))
                handle.seek(6, io.SEEK_CUR)
                (bits,) = struct.unpack("<h", _read_exact(handle, 2))
                handle.seek(size - _FMT_SIZE, io.SEEK_CUR)
                self.metadata = MetaData(rate, channels, bits, _to_format(code))
            elif name == _ID_DATA:
                data_position = handle.tell()
                data_size = size
                handle.seek(size, io.SEEK_CUR)
            elif name == _ID_FACT:
                (length,) = struct.unpack("<i", _read_exact(handle, 4))
                handle.seek(size - 4, io.SEEK_CUR)
                if size > 4:
                    logger.warning("unexpected size of fact chunk: %d", size)
            else:
                logger.warning("skipping unsupported chunk %r", name)
                handle.seek(size, io.SEEK_CUR)

        if data_position is None:
            raise WaveError("no data chunk")
        meta = self.metadata
        if (
            meta.wave_format in (WaveFormat.LPCM, WaveFormat.IEEE_FLOAT)
            and meta.bit_depth >= 8
            and meta.channels > 0
        ):
            length = data_size // (meta.bit_depth // 8) // meta.channels
        if length != 0 and meta.sampling_rate != 0:
            self.duration = length / meta.sampling_rate
        return data_position, data_size

    def read_vector(self, path: PathLike) -> Vector:
        """Read every sample, channels interleaved, into one vector."""
        with open(path, "rb") as handle:
            position, size = self._read_metadata(handle)
            code = self._sample_code()
            width = self.metadata.bit_depth // 8
            count = size // width
            handle.seek(position)
            data = _read_exact(handle, count * width)
        return Vector(struct.unpack(f"<{count}{code}", data))

    def read_matrix(self, path: PathLike) -> Matrix:
        """Read the samples into a matrix with one row per channel."""
        samples = list(self.read_vector(path))
        channels = self.metadata.channels
        if channels <= 0:
            raise WaveError(f"invalid number of channels: {channels}")
        length = len(samples) // channels
        end = length * channels
        return Matrix.from_rows(samples[c:end:channels] for c in range(channels))

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------
    def _require_valid(self) -> None:
        if not self.metadata.is_valid():
            raise WaveError(f"incomplete metadata: {self.metadata}")

    def _header(self, size: int) -> bytes:
        meta = self.metadata
        width = meta.bit_depth // 8
        riff_size = 4 + _CHUNK_HEADER.size * 2 + _FMT_SIZE + size
        return b"".join(
            (
                _CHUNK_HEADER.pack(_ID_RIFF, riff_size),
                _ID_WAVE,
                _CHUNK_HEADER.pack(_ID_FMT, _FMT_SIZE),
                struct.pack(
                    "<hhiihh",
                    int(meta.wave_format),
                    meta.channels,
                    meta.sampling_rate,
                    meta.sampling_rate * meta.channels * width,
                    meta.channels * width,
                    meta.bit_depth,
                ),
                _CHUNK_HEADER.pack(_ID_DATA, size),
            )
        )

    @staticmethod
    def _encode(values: list[float], code: str) -> bytes:
        if code in _INTEGER_LIMITS:
            low, high = _INTEGER_LIMITS[code]
            converted: list[float | int] = []
            for v in values:
                if math.isnan(v):
                    raise WaveError("cannot store NaN as an integer sample")
                converted.append(min(max(int(v) if math.isfinite(v) else
                                         (high if v > 0 else low), low), high))
        else:
            converted = list(values)
        try:
            return struct.pack(f"<{len(converted)}{code}", *converted)
        except (struct.error, OverflowError) as error:
            raise WaveError(f"cannot encode samples: {error}") from error

    def write_vector(self, path: PathLike, buffer: Iterable[float]) -> None:
        """Write interleaved samples to a new file at ``path``.

        Integer samples are truncated toward zero and clamped to the range
        of the sample width.
        """
        self._require_valid()
        values = [float(v) for v in buffer]
        if not values:
            raise WaveError("nothing to write")
        code = self._sample_code()
        payload = self._encode(values, code)
        with open(path, "wb") as handle:
            handle.write(self._header(len(payload)))
            handle.write(payload)

    def write_matrix(self, path: PathLike, buffer: Matrix) -> None:
        """Write a matrix holding one row per channel."""
        if buffer.is_null():
            raise WaveError("nothing to write")
        self._require_valid()
        channels = self.metadata.channels
        if buffer.row_length < channels:
            raise WaveError(
                f"matrix has {buffer.row_length} rows for {channels} channels"
            )
        rows = [buffer[c] for c in range(channels)]
        interleaved = [row[i] for i in range(buffer.column_length) for row in rows]
        self.write_vector(path, interleaved)