"""Comma-separated text files of indexed numeric series."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from types import TracebackType
from typing import IO, Union

from sigmat.matrix import Matrix

PathLike = Union[str, "os.PathLike[str]"]

DELIMITER = ","

_ACCEPTABLE_FIRST = frozenset("0123456789-+.")
_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _is_data_line(line: str) -> bool:
    return bool(line) and line[0] in _ACCEPTABLE_FIRST


def _tokens(line: str) -> list[str]:
    """Split on the delimiter, dropping empty fields."""
    return [token for token in line.split(DELIMITER) if token]


def _strip_line_end(line: str) -> str:
    """Cut the line at its first carriage return or line feed."""
    for index, char in enumerate(line):
        if char in "\r\n":
            return line[:index]
    return line


def _parse_leading_float(token: str) -> float:
    match = _FLOAT_PREFIX.match(token)
    if match is None:
        raise ValueError(f"not a number: {token!r}")
    return float(match.group(0))


class CsvFile:
    """A CSV file opened for writing series or reading them back.

    Each written line starts with the sample index followed by the values
    at that index.  Reading turns every line that starts like a number into
    one column of the resulting matrix; field ``r`` of that line goes to
    row ``r``.
    """

    def __init__(self, path: PathLike | None = None, mode: str = "w") -> None:
        self._handle: IO[str] | None = None
        if path is not None:
            self.open(path, mode)

    def open(self, path: PathLike, mode: str = "w") -> None:
        """Open ``path`` with ``mode``, closing any file already open."""
        self.close()
        self._handle = open(path, mode.replace("b", ""), newline="")

    def close(self) -> None:
        """Close the file if it is open."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> CsvFile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _require_handle(self) -> IO[str]:
        if self._handle is None:
            raise ValueError("CSV file is not open")
        return self._handle

    def crlf(self) -> None:
        """Write a line break."""
        self._require_handle().write("\n")

    def write_text(self, text: str) -> None:
        """Write ``text`` as it is."""
        self._require_handle().write(text)

    def write_values(self, values: Iterable[float]) -> None:
        """Write one ``index,value`` line per value."""
        handle = self._require_handle()
        handle.writelines(
            f"{i}{DELIMITER}{float(v):g}\n" for i, v in enumerate(values)
        )

    def write_matrix(self, matrix: Matrix) -> None:
        """Write one line per column: the column index, then the value of
        every row at that column."""
        handle = self._require_handle()
        rows = list(matrix)
        for i in range(matrix.column_length):
            fields = [str(i)] + [f"{row[i]:g}" for row in rows]
            handle.write(DELIMITER.join(fields) + "\n")

    def read_matrix(self) -> Matrix:
        """Read the whole file back into a matrix."""
        handle = self._require_handle()
        handle.seek(0)
        lines = [line for line in handle if _is_data_line(line)]
        rows = max((len(_tokens(line)) for line in lines), default=0)
        matrix = Matrix(rows, len(lines))
        for column, line in enumerate(lines):
            for r, token in enumerate(_tokens(_strip_line_end(line))[:rows]):
                matrix[r][column] = _parse_leading_float(token)
        return matrix


def write_values(path: PathLike, values: Iterable[float]) -> None:
    """Write ``values`` to a new file at ``path`` as ``index,value`` lines."""
    with CsvFile(path) as csv:
        csv.write_values(values)


def write_matrix(path: PathLike, matrix: Matrix) -> None:
    """Write ``matrix`` to a new file at ``path``, one line per column."""
    with CsvFile(path) as csv:
        csv.write_matrix(matrix)


def read_matrix(path: PathLike) -> Matrix:
    """Read the file at ``path`` into a matrix."""
    with CsvFile(path, "r") as csv:
        return csv.read_matrix()