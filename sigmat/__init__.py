"""Vectors, matrices, CSV and WAVE file I/O, and waveform generation."""

__version__ = "0.1.0"
__all__ = ["vector", "matrix", "csvio", "wave", "wavegen"]