"""Periodic waveform generator with optional exponential frequency sweep."""

from __future__ import annotations

import copy as _copy
import enum
import math
import struct
from collections.abc import Callable
from dataclasses import dataclass

from sigmat.vector import Vector

DEFAULT_SAMPLING_RATE = 48000
DEFAULT_FREQUENCY = 440.0
DEFAULT_DUTY = 0.5


def _to_float32(value: float) -> float:
    """Round ``value`` to single precision, as the sample period is kept."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


class WaveType(enum.Enum):
    """Shapes the generator can produce."""

    SINE = enum.auto()
    SAWTOOTH = enum.auto()
    TRIANGLE = enum.auto()
    SQUARE = enum.auto()
    WATERSURFACE = enum.auto()
    NOISE_WHITE = enum.auto()
    NOISE_PINK = enum.auto()


@dataclass(frozen=True)
class Variable:
    """Snapshot of the generator's running state."""

    phase: float
    value: float
    frequency: float


class WaveGen:
    """A waveform generator stepping one sample period at a time.

    The phase is the position within one period, normalised to one.
    Moving forward or backward by ``n`` samples advances the phase by
    ``n / sampling_rate * frequency``; when a sweep is enabled the
    frequency is multiplied by the sweep factor once per sample.
    """

    def __init__(
        self,
        sampling_rate: int = DEFAULT_SAMPLING_RATE,
        frequency: float = DEFAULT_FREQUENCY,
        wave_type: WaveType = WaveType.SINE,
        duty: float = DEFAULT_DUTY,
    ) -> None:
        self._sampling_rate = DEFAULT_SAMPLING_RATE
        self._tick = _to_float32(1.0 / DEFAULT_SAMPLING_RATE)
        self.set_sampling_rate(sampling_rate)
        self._wave_type = WaveType.SINE
        self._duty = DEFAULT_DUTY
        self._frequency_base = float(frequency)
        self._frequency = float(frequency)
        self._sweep_enabled = False
        self._sweep_factor = 1.0
        self._phase = 0.0
        self._value = 0.0
        self.set_wave_type(wave_type, duty)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def variable(self) -> Variable:
        """Current phase, value and frequency."""
        return Variable(self._phase, self._value, self._frequency)

    @property
    def value(self) -> float:
        """Value of the waveform at the current phase."""
        return self._value

    @property
    def sampling_rate(self) -> int:
        """Samples per second."""
        return self._sampling_rate

    @property
    def wave_type(self) -> WaveType:
        return self._wave_type

    @property
    def duty(self) -> float:
        return self._duty

    @property
    def sweep_enabled(self) -> bool:
        return self._sweep_enabled

    def __repr__(self) -> str:
        return (
            f"WaveGen(sampling_rate={self._sampling_rate}, "
            f"frequency={self._frequency}, wave_type={self._wave_type.name}, "
            f"phase={self._phase})"
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_wave_type(self, wave_type: WaveType, duty: float = DEFAULT_DUTY) -> None:
        """Select the waveform shape and duty cycle, updating the value."""
        wave_type = WaveType(wave_type)
        self._wave_type = wave_type
        self._duty = float(duty)
        self._value = self._generate(self._phase)

    def set_wave_param(
        self, base: float, wave_type: WaveType, duty: float = DEFAULT_DUTY
    ) -> None:
        """Set the base frequency and then the waveform shape."""
        self.set_wave_frequency(base)
        self.set_wave_type(wave_type, duty)

    def set_wave_frequency(self, base: float) -> None:
        """Set both the base and the current frequency."""
        if not base > 0.0:
            raise ValueError(f"frequency must be positive: {base}")
        self._frequency_base = float(base)
        self._frequency = float(base)

    def set_phase(self, phase: float) -> None:
        """Move to ``phase``, which must lie in ``[0, 1)``."""
        if phase < 0.0 or phase >= 1.0:
            raise ValueError(f"phase must be in [0, 1): {phase}")
        self._phase = float(phase)
        self._value = self._generate(self._phase)

    def enable_sweep(self) -> bool:
        """Turn the sweep on if a sweep factor is set; return whether it is on."""
        self._sweep_enabled = self._sweep_factor != 1.0
        return self._sweep_enabled

    def disable_sweep(self) -> None:
        self._sweep_enabled = False

    def set_sweep_param(
        self, target_frequency: float, duration: float, enable: bool = True
    ) -> bool:
        """Arrange for the frequency to reach ``target_frequency`` after
        ``duration`` seconds.  Returns whether the sweep is enabled."""
        if not duration > 0.0:
            raise ValueError(f"duration must be positive: {duration}")
        if not target_frequency > 0.0:
            raise ValueError(f"target frequency must be positive: {target_frequency}")
        if self._frequency_base == target_frequency:
            self._sweep_factor = 1.0
            self._sweep_enabled = False
        else:
            self._sweep_factor = math.pow(
                target_frequency / self._frequency_base,
                1.0 / (self._sampling_rate * duration),
            )
            self._sweep_enabled = bool(enable)
        return self._sweep_enabled

    def reset(self) -> None:
        """Return to phase zero at the base frequency with no sweep."""
        self._phase = 0.0
        self._frequency = self._frequency_base
        self._sweep_enabled = False
        self._sweep_factor = 1.0
        self._value = self._generate(self._phase)

    def set_sampling_rate(self, sampling_rate: int) -> None:
        if not sampling_rate > 0:
            raise ValueError(f"sampling rate must be positive: {sampling_rate}")
        self._sampling_rate = int(sampling_rate)
        self._tick = _to_float32(1.0 / sampling_rate)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def advance(self, steps: int = 1) -> WaveGen:
        """Move ``steps`` samples forward (or backward if negative)."""
        tick = steps * self._tick
        factor = math.pow(self._sweep_factor, steps) if self._sweep_enabled else 1.0
        phase = self._phase + tick * self._frequency
        phase -= int(phase)
        self._phase = phase
        self._frequency *= factor
        self._value = self._generate(self._phase)
        return self

    def copy(self) -> WaveGen:
        """Return an independent generator in the same state."""
        return _copy.copy(self)

    def __add__(self, steps: object) -> WaveGen:
        if not isinstance(steps, int):
            return NotImplemented
        return self.copy().advance(steps)

    def __sub__(self, steps: object) -> WaveGen:
        if not isinstance(steps, int):
            return NotImplemented
        return self.copy().advance(-steps)

    def __iadd__(self, steps: object) -> WaveGen:
        if not isinstance(steps, int):
            return NotImplemented
        return self.advance(steps)

    def __isub__(self, steps: object) -> WaveGen:
        if not isinstance(steps, int):
            return NotImplemented
        return self.advance(-steps)

    def __getitem__(self, steps: int) -> WaveGen:
        """Return a generator ``steps`` samples away; this one is unchanged."""
        if not isinstance(steps, int):
            raise TypeError(f"steps must be an integer, not {type(steps).__name__}")
        return self + steps

    def generate_waveform(self, length: int, amplitude: float = 1.0) -> Vector:
        """Return ``length`` samples scaled by ``amplitude``, stepping the
        generator once after each sample."""
        if length < 0:
            raise ValueError(f"length must not be negative: {length}")
        samples = []
        for _ in range(length):
            samples.append(amplitude * self._value)
            self.advance(1)
        return Vector(samples)

    # ------------------------------------------------------------------
    # Waveform shapes
    # ------------------------------------------------------------------
    def _generate(self, phase: float) -> float:
        """Evaluate the current shape at ``phase``.

        Shapes without a synthesis model (water surface and noise) yield 0.
        """
        shapes: dict[WaveType, Callable[[float], float]] = {
            WaveType.SINE: self._sine,
            WaveType.SAWTOOTH: self._sawtooth,
            WaveType.TRIANGLE: self._triangle,
            WaveType.SQUARE: self._square,
        }
        shape = shapes.get(self._wave_type)
        return shape(phase) if shape is not None else 0.0

    @staticmethod
    def _sine(nt: float) -> float:
        return math.sin(2 * math.pi * nt)

    @staticmethod
    def _sawtooth(nt: float) -> float:
        return 2.0 * nt - 2.0 if nt >= 0.5 else 2.0 * nt

    @staticmethod
    def _triangle(nt: float) -> float:
        if nt >= 0.75:
            return 4.0 * nt - 4.0
        if nt >= 0.25:
            return -4.0 * nt + 2.0
        return 4.0 * nt

    def _square(self, nt: float) -> float:
        if not 0.0 < self._duty < 1.0:
            raise ValueError(f"duty must be in (0, 1): {self._duty}")
        return -1.0 if nt >= self._duty else 1.0