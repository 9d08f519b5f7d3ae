"""Dense matrices of floating-point values built from rows of vectors."""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable, Iterator, Sequence
from numbers import Real
from typing import Any

from sigmat.vector import Vector

_PIVOT_THRESHOLD = 1.0e-10


class Matrix:
    """A row-major matrix whose rows are :class:`Vector` objects.

    ``m[i]`` is row ``i`` and ``m[i][k]`` is the element in row ``i``,
    column ``k``.  Arithmetic operators work element by element; use
    :meth:`multiply` (or ``@``) for the matrix product.
    """

    __slots__ = ("_rows", "_columns")

    def __init__(self, rows: int = 0, columns: int = 0) -> None:
        self._rows: list[Vector] = []
        self._columns = 0
        self.resize(rows, columns)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_vector(cls, vector: Iterable[float], transpose: bool = False) -> Matrix:
        """Return a one-row matrix of ``vector``, or a one-column one if
        ``transpose`` is true."""
        values = [float(v) for v in vector]
        if transpose:
            return cls.from_rows([[v] for v in values])
        return cls.from_rows([values])

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[float]]) -> Matrix:
        """Build a matrix from an iterable of equally long rows."""
        vectors = [Vector(row) for row in rows]
        columns = len(vectors[0]) if vectors else 0
        if any(len(v) != columns for v in vectors):
            raise ValueError("all rows must have the same length")
        matrix = cls()
        matrix._rows = vectors
        matrix._columns = columns
        return matrix

    @classmethod
    def identity(cls, size: int) -> Matrix:
        """Return the ``size`` x ``size`` identity matrix."""
        matrix = cls(size, size)
        for i, row in enumerate(matrix._rows):
            row[i] = 1.0
        return matrix

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------
    @property
    def row_length(self) -> int:
        """Number of rows."""
        return len(self._rows)

    @property
    def column_length(self) -> int:
        """Number of columns."""
        return self._columns

    def is_null(self) -> bool:
        """True if the matrix holds no elements."""
        return not self._rows or self._columns == 0

    def resize(self, rows: int, columns: int) -> None:
        """Change the shape; the contents are discarded and set to zero."""
        if rows < 0 or columns < 0:
            raise ValueError(f"shape must not be negative: {rows}x{columns}")
        self._columns = columns if rows > 0 else 0
        self._rows = [Vector.zeros(columns) for _ in range(rows)]

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------
    def __getitem__(self, index: int) -> Vector:
        return self._rows[index]

    def __setitem__(self, index: int, row: Any) -> None:
        target = self._rows[index]
        if isinstance(row, Real):
            target.fill(float(row))
            return
        values = [float(v) for v in row]
        if len(values) != self._columns:
            raise ValueError(
                f"row must have {self._columns} elements, got {len(values)}"
            )
        target[:] = values

    def __iter__(self) -> Iterator[Vector]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Matrix):
            return self._rows == other._rows
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            if len(other) != len(self._rows):
                return False
            return all(row == list(o) for row, o in zip(self._rows, other))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix.from_rows({[list(r) for r in self._rows]!r})"

    # ------------------------------------------------------------------
    # Filling and copying
    # ------------------------------------------------------------------
    def fill(self, value: float) -> Matrix:
        """Set every element to ``value``."""
        for row in self._rows:
            row.fill(value)
        return self

    def copy(self) -> Matrix:
        """Return an independent copy."""
        return Matrix.from_rows(self._rows)

    def initialize(self, initializer: Callable[[int, int, int, int], float]) -> Matrix:
        """Set element ``(r, c)`` to ``initializer(r, rows, c, columns)``."""
        rows, columns = self.row_length, self.column_length
        for r, row in enumerate(self._rows):
            row[:] = [initializer(r, rows, c, columns) for c in range(columns)]
        return self

    # ------------------------------------------------------------------
    # Element-wise arithmetic
    # ------------------------------------------------------------------
    def _apply(self, other: object, op: Callable[[Any, Any], Any]) -> Any:
        if isinstance(other, Real):
            for row in self._rows:
                op(row, float(other))
            return self
        if isinstance(other, Matrix):
            for row, other_row in zip(self._rows, other._rows):
                op(row, other_row)
            return self
        return NotImplemented

    def __add__(self, other: object) -> Matrix:
        return self.copy()._apply(other, operator.iadd)

    def __sub__(self, other: object) -> Matrix:
        return self.copy()._apply(other, operator.isub)

    def __mul__(self, other: object) -> Matrix:
        return self.copy()._apply(other, operator.imul)

    def __truediv__(self, other: object) -> Matrix:
        return self.copy()._apply(other, operator.itruediv)

    def __radd__(self, other: object) -> Matrix:
        if isinstance(other, Real):
            return self + other
        return NotImplemented

    def __rmul__(self, other: object) -> Matrix:
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def __neg__(self) -> Matrix:
        return self * -1.0

    def __iadd__(self, other: object) -> Matrix:
        return self._apply(other, operator.iadd)

    def __isub__(self, other: object) -> Matrix:
        return self._apply(other, operator.isub)

    def __imul__(self, other: object) -> Matrix:
        return self._apply(other, operator.imul)

    def __itruediv__(self, other: object) -> Matrix:
        return self._apply(other, operator.itruediv)

    # ------------------------------------------------------------------
    # Linear algebra
    # ------------------------------------------------------------------
    def transpose(self) -> Matrix:
        """Return the transposed matrix."""
        transposed = Matrix(self.column_length, self.row_length)
        for i, row in enumerate(self._rows):
            for j, value in enumerate(row):
                transposed._rows[j][i] = value
        return transposed

    def multiply(self, other: Matrix) -> Matrix:
        """Return the matrix product ``self x other``."""
        if self.column_length != other.row_length:
            raise ValueError(
                f"cannot multiply {self.row_length}x{self.column_length} "
                f"by {other.row_length}x{other.column_length}"
            )
        columns = other.transpose()
        return Matrix.from_rows(
            [[row.dot(col) for col in columns] for row in self._rows]
        ) if self._rows else Matrix(0, other.column_length)

    def __matmul__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    def _require_square(self, what: str) -> None:
        if self.row_length != self.column_length:
            raise ValueError(
                f"{what} needs a square matrix, got "
                f"{self.row_length}x{self.column_length}"
            )

    def cofactor_matrix(self, row: int, column: int) -> Matrix:
        """Return the matrix with ``row`` and ``column`` removed."""
        if not 0 <= row < self.row_length or not 0 <= column < self.column_length:
            raise IndexError(f"({row}, {column}) is outside the matrix")
        minor = Matrix(self.row_length - 1, self.column_length - 1)
        kept_rows = (r for i, r in enumerate(self._rows) if i != row)
        for target, source in zip(minor._rows, kept_rows):
            target[:] = [v for j, v in enumerate(source) if j != column]
        return minor

    def cofactor(self, row: int, column: int) -> float:
        """Signed minor of the element at ``(row, column)``."""
        sign = -1.0 if (row + column) & 1 else 1.0
        return self.cofactor_matrix(row, column).determinant() * sign

    def determinant(self) -> float:
        """Determinant of a square matrix (0 for an empty one)."""
        self._require_square("determinant")
        n = self.row_length
        m = self._rows
        if n == 0:
            return 0.0
        if n == 1:
            return m[0][0]
        if n == 2:
            return m[0][0] * m[1][1] - m[0][1] * m[1][0]
        if n == 3:
            return (
                m[0][0] * m[1][1] * m[2][2]
                + m[0][1] * m[1][2] * m[2][0]
                + m[0][2] * m[1][0] * m[2][1]
                - m[0][2] * m[1][1] * m[2][0]
                - m[0][1] * m[1][0] * m[2][2]
                - m[0][0] * m[1][2] * m[2][1]
            )
        return sum(self.cofactor(r, 0) * m[r][0] for r in range(n))

    def inverse(self) -> Matrix:
        """Return the inverse, computed by Gauss-Jordan elimination with
        partial pivoting.  Raises ValueError for a singular matrix."""
        self._require_square("inverse")
        n = self.row_length
        if n == 0:
            return Matrix()
        augmented = [
            Vector(list(row) + [1.0 if j == i else 0.0 for j in range(n)])
            for i, row in enumerate(self._rows)
        ]
        for row in augmented:
            row /= row.maximum_absolute()
        for r in range(n):
            pivot_index = max(range(r, n), key=lambda k: (abs(augmented[k][r]), -k))
            if abs(augmented[pivot_index][r]) < _PIVOT_THRESHOLD:
                raise ValueError(f"matrix is singular (no pivot in column {r})")
            if pivot_index != r:
                augmented[r], augmented[pivot_index] = augmented[pivot_index], augmented[r]
            pivot = augmented[r]
            pivot /= pivot[r]
            for k, row in enumerate(augmented):
                if k != r:
                    row -= pivot * row[r]
        return Matrix.from_rows(list(row)[n:] for row in augmented)

    def submatrix(
        self, row_begin: int, row_end: int, column_begin: int, column_end: int
    ) -> Matrix:
        """Return rows ``row_begin..row_end`` and columns
        ``column_begin..column_end`` (both inclusive), clipped to the matrix.

        An end before its begin gives an empty matrix.
        """
        if row_end < row_begin or column_end < column_begin:
            return Matrix()
        rows = max(0, min(row_end - row_begin + 1, self.row_length - row_begin))
        columns = max(0, min(column_end - column_begin + 1, self.column_length - column_begin))
        if rows == 0 or columns == 0:
            return Matrix()
        return Matrix.from_rows(
            list(self._rows[r])[column_begin:column_begin + columns]
            for r in range(row_begin, row_begin + rows)
        )