"""Dense vectors of floating-point values with element-wise arithmetic."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator, Sequence
from numbers import Real
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sigmat.matrix import Matrix

_BinaryOp = Callable[[float, float], float]


def _add(a: float, b: float) -> float:
    return a + b


def _sub(a: float, b: float) -> float:
    return a - b


def _mul(a: float, b: float) -> float:
    return a * b


def _div(a: float, b: float) -> float:
    return a / b


class Vector:
    """A resizable sequence of floats.

    Arithmetic with a scalar applies to every element.  Arithmetic with
    another vector applies element by element over the shorter of the two
    lengths; elements of the left operand beyond that are left unchanged.
    """

    __slots__ = ("_data",)

    def __init__(self, values: Iterable[float] = ()) -> None:
        self._data: list[float] = [float(v) for v in values]

    @classmethod
    def zeros(cls, length: int) -> Vector:
        """Return a vector of ``length`` zeros."""
        if length < 0:
            raise ValueError(f"length must not be negative: {length}")
        return cls([0.0] * length)

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return Vector(self._data[index])
        return self._data[index]

    def __setitem__(self, index: int | slice, value: Any) -> None:
        if isinstance(index, slice):
            self._data[index] = [float(v) for v in value]
        else:
            self._data[index] = float(value)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Vector):
            return self._data == other._data
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return self._data == [float(v) for v in other]
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vector({self._data!r})"

    def is_null(self) -> bool:
        """True if the vector holds no elements."""
        return not self._data

    # ------------------------------------------------------------------
    # Shape and copying
    # ------------------------------------------------------------------
    def resize(self, length: int) -> None:
        """Change the length, truncating or padding with zeros."""
        if length < 0:
            raise ValueError(f"length must not be negative: {length}")
        current = len(self._data)
        if length < current:
            del self._data[length:]
        else:
            self._data.extend([0.0] * (length - current))

    def fill(self, value: float) -> Vector:
        """Set every element to ``value``."""
        self._data = [float(value)] * len(self._data)
        return self

    def copy_from(self, other: Vector) -> Vector:
        """Copy ``other`` into the leading elements, over the shorter length."""
        n = min(len(self._data), len(other))
        self._data[:n] = [float(v) for v in other[:n]]
        return self

    def copy(self) -> Vector:
        """Return an independent copy."""
        return Vector(self._data)

    def carve(self, offset: int, length: int) -> Vector:
        """Return up to ``length`` elements starting at ``offset``.

        An offset outside the vector gives an empty vector.
        """
        if offset < 0 or offset >= len(self._data) or length <= 0:
            return Vector()
        return Vector(self._data[offset:offset + length])

    def push_back(self, value: float) -> float:
        """Shift everything one place to the front, append ``value`` and
        return the element that dropped off the front."""
        if not self._data:
            raise IndexError("push_back on an empty vector")
        dropped = self._data.pop(0)
        self._data.append(float(value))
        return dropped

    def push_front(self, value: float) -> float:
        """Shift everything one place to the back, put ``value`` first and
        return the element that dropped off the back."""
        if not self._data:
            raise IndexError("push_front on an empty vector")
        dropped = self._data.pop()
        self._data.insert(0, float(value))
        return dropped

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def _apply(self, other: object, op: _BinaryOp) -> Any:
        if isinstance(other, Real):
            value = float(other)
            self._data = [op(x, value) for x in self._data]
            return self
        if isinstance(other, Vector):
            n = min(len(self._data), len(other))
            self._data[:n] = [op(a, b) for a, b in zip(self._data, other._data)]
            return self
        return NotImplemented

    def __add__(self, other: object) -> Vector:
        return self.copy()._apply(other, _add)

    def __sub__(self, other: object) -> Vector:
        return self.copy()._apply(other, _sub)

    def __mul__(self, other: object) -> Vector:
        return self.copy()._apply(other, _mul)

    def __truediv__(self, other: object) -> Vector:
        return self.copy()._apply(other, _div)

    def __radd__(self, other: object) -> Vector:
        if isinstance(other, Real):
            return self + other
        return NotImplemented

    def __rmul__(self, other: object) -> Vector:
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def __neg__(self) -> Vector:
        return self * -1.0

    def __iadd__(self, other: object) -> Vector:
        return self._apply(other, _add)

    def __isub__(self, other: object) -> Vector:
        return self._apply(other, _sub)

    def __imul__(self, other: object) -> Vector:
        return self._apply(other, _mul)

    def __itruediv__(self, other: object) -> Vector:
        return self._apply(other, _div)

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------
    def _require_elements(self, what: str) -> None:
        if not self._data:
            raise ValueError(f"{what} of an empty vector")

    def maximum(self) -> float:
        self._require_elements("maximum")
        return max(self._data)

    def minimum(self) -> float:
        self._require_elements("minimum")
        return min(self._data)

    def maximum_absolute(self) -> float:
        self._require_elements("maximum_absolute")
        return max(abs(x) for x in self._data)

    def minimum_absolute(self) -> float:
        self._require_elements("minimum_absolute")
        return min(abs(x) for x in self._data)

    def _index_of(self, target: float, offset: int, absolute: bool) -> int:
        for k in range(max(offset, 0), len(self._data)):
            value = abs(self._data[k]) if absolute else self._data[k]
            if value == target:
                return k
        raise ValueError(f"{target} not found at or after offset {offset}")

    def maximum_index(self, offset: int = 0) -> int:
        """Index of the first maximum at or after ``offset``."""
        return self._index_of(self.maximum(), offset, absolute=False)

    def minimum_index(self, offset: int = 0) -> int:
        """Index of the first minimum at or after ``offset``."""
        return self._index_of(self.minimum(), offset, absolute=False)

    def maximum_absolute_index(self, offset: int = 0) -> int:
        """Index of the first element of largest magnitude at or after ``offset``."""
        return self._index_of(self.maximum_absolute(), offset, absolute=True)

    def minimum_absolute_index(self, offset: int = 0) -> int:
        """Index of the first element of smallest magnitude at or after ``offset``."""
        return self._index_of(self.minimum_absolute(), offset, absolute=True)

    def _local_extremum_index(self, offset: int, is_peak: Callable[[float, float, float], bool]) -> int:
        data = self._data
        if offset > len(data) - 1:
            return -1
        for k in range(max(offset, 1), len(data) - 1):
            if is_peak(data[k - 1], data[k], data[k + 1]):
                return k
        return -1

    def local_maximum_index(self, offset: int = 0) -> int:
        """Index of the first strict local maximum at or after ``offset``, or -1."""
        return self._local_extremum_index(offset, lambda a, b, c: a < b > c)

    def local_minimum_index(self, offset: int = 0) -> int:
        """Index of the first strict local minimum at or after ``offset``, or -1."""
        return self._local_extremum_index(offset, lambda a, b, c: a > b < c)

    def sum(self) -> float:
        return float(sum(self._data))

    def average(self) -> float:
        self._require_elements("average")
        return self.sum() / len(self._data)

    def norm(self) -> float:
        """Euclidean norm."""
        return math.sqrt(sum(x * x for x in self._data))

    def dot(self, other: Vector) -> float:
        """Dot product over this vector's length."""
        if len(other) < len(self._data):
            raise ValueError(
                f"dot product needs at least {len(self._data)} elements, got {len(other)}"
            )
        return float(sum(a * b for a, b in zip(self._data, other)))

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------
    def initialize(self, start: float = 0.0, step: float = 1.0) -> Vector:
        """Set element ``i`` to ``start + i * step``."""
        self._data = [float(start + i * step) for i in range(len(self._data))]
        return self

    def initialize_with(self, initializer: Callable[[int, int], float]) -> Vector:
        """Set element ``i`` to ``initializer(i, len(self))``."""
        n = len(self._data)
        self._data = [float(initializer(i, n)) for i in range(n)]
        return self

    # ------------------------------------------------------------------
    # Matrix views
    # ------------------------------------------------------------------
    def to_matrix(self) -> Matrix:
        """Return a one-row matrix holding this vector."""
        from sigmat.matrix import Matrix

        return Matrix.from_vector(self, False)

    def transpose(self) -> Matrix:
        """Return a one-column matrix holding this vector."""
        from sigmat.matrix import Matrix

        return Matrix.from_vector(self, True)