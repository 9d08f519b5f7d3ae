# sigmat

Small building blocks for signal-processing experiments in pure Python, with
no dependencies outside the standard library.

- `sigmat.vector.Vector`: a resizable vector of floats. Arithmetic with a
  scalar applies to every element; arithmetic with another vector works
  element by element over the shorter length. It provides `maximum`,
  `minimum`, `maximum_absolute`, `minimum_absolute` and the matching
  `*_index(offset)` methods, `local_maximum_index` / `local_minimum_index`
  (which return -1 when there is none), `sum`, `average`, `norm`, `dot`,
  `push_back` / `push_front` (shift in one value, return the one shifted out),
  `carve(offset, length)`, `copy_from`, `fill`, `resize`, `initialize(start,
  step)` and `initialize_with(func)`. `to_matrix()` and `transpose()` give a
  one-row or one-column `Matrix`.
- `sigmat.matrix.Matrix`: a row-major matrix whose rows are `Vector` objects.
  Operators `+ - * /` work element by element; `multiply` (or `a @ b`) is the
  matrix product. It also has `transpose`, `determinant` (closed forms up to
  3x3, cofactor expansion beyond), `cofactor`, `cofactor_matrix`, `inverse`
  (Gauss-Jordan with partial pivoting), `submatrix` (inclusive bounds, clipped
  to the matrix), `identity`, `from_rows` and `from_vector`.
- `sigmat.csvio`: `write_values` writes `index,value` lines; `write_matrix`
  writes one line per column holding the column index followed by every row's
  value. `read_matrix` reads every line that starts like a number as one
  column, so the index field comes back as row 0. `CsvFile` is the
  context-managed file object behind these functions.
- `sigmat.wave`: `Wave` reads and writes RIFF/WAVE files in 16- or 32-bit
  integer PCM and 32-bit IEEE float. `read_vector` returns interleaved
  samples; `read_matrix` returns one row per channel. Samples are not scaled:
  a 16-bit sample of 1000 reads as `1000.0`, and integer samples are truncated
  and clamped on writing. Problems raise `WaveError`.
- `sigmat.wavegen.WaveGen`: a stepping oscillator for sine, sawtooth, triangle
  and square waves, with an optional exponential frequency sweep set by
  `set_sweep_param`. `advance`, `+`, `-`, `+=`, `-=` and `gen[n]` move by whole
  samples; `generate_waveform(length, amplitude)` returns a `Vector`.

## Installation

```
pip install .
```

## Examples

```python
from sigmat.vector import Vector
from sigmat.matrix import Matrix

v = Vector([1.0, -2.0, 3.0])
v += 1
print(v.maximum(), v.minimum_absolute(), v.norm())

m = Matrix.from_rows([[3, 2, 1, 0], [1, 2, 3, 4], [2, 1, 0, 1], [2, 0, 2, 1]])
identity = m @ m.inverse()
print(m.determinant())
```

Generate a one-second 440 Hz sine that sweeps up to 880 Hz, and write it to a
16-bit mono WAVE file:

```python
from sigmat.wavegen import WaveGen, WaveType
from sigmat.wave import Wave, WaveFormat

gen = WaveGen(48000, 440.0, WaveType.SINE, 0.5)
gen.set_sweep_param(880.0, 1.0, True)
samples = gen.generate_waveform(48000, 32767.0)

Wave(48000, 1, 16, WaveFormat.LPCM).write_vector("sweep.wav", samples)
```

Write a matrix to CSV and read it back:

```python
from sigmat import csvio

csvio.write_matrix("table.csv", m)
back = csvio.read_matrix("table.csv")  # row 0 holds the column indices
```

## What it does not do

- There is no command-line program; everything is used as a library.
- `WaveType.WATERSURFACE`, `WaveType.NOISE_WHITE` and `WaveType.NOISE_PINK`
  exist but have no synthesis behind them: they always yield 0.
- WAVE files in other encodings (8- or 24-bit PCM, 64-bit float, compressed
  formats) are rejected with `WaveError`.
- Mismatched shapes raise `ValueError` (matrix product, determinant and
  inverse of non-square matrices, singular matrices in `inverse`).

## Running the tests

```
pip install .[test]
pytest
```