import pytest

from sigmat.csvio import CsvFile, read_matrix, write_matrix, write_values
from sigmat.matrix import Matrix
from sigmat.vector import Vector

LENGTH = 16


def _sample_matrix() -> Matrix:
    matrix = Matrix(3, LENGTH)
    for i in range(LENGTH):
        for k in range(3):
            matrix[k][i] = 10 * (k + 1) + i + 1.0
    return matrix


def test_write_values_format(tmp_path):
    path = tmp_path / "values.csv"
    write_values(path, [1.0, 2.5])
    assert path.read_text() == "0,1\n1,2.5\n"


def test_write_values_uses_six_significant_digits(tmp_path):
    path = tmp_path / "third.csv"
    write_values(path, [1.0 / 3.0])
    assert path.read_text() == "0,0.333333\n"


def test_write_values_from_vector_matches_list(tmp_path):
    values = [i + 1.0 for i in range(LENGTH)]
    list_path = tmp_path / "list.csv"
    vector_path = tmp_path / "vector.csv"
    write_values(list_path, values)
    write_values(vector_path, Vector(values))
    assert list_path.read_text() == vector_path.read_text()
    assert len(vector_path.read_text().splitlines()) == LENGTH


def test_write_matrix_one_line_per_column(tmp_path):
    path = tmp_path / "m.csv"
    write_matrix(path, Matrix.from_rows([[1, 2], [3, 4]]))
    assert path.read_text() == "0,1,3\n1,2,4\n"


def test_read_back_written_matrix_with_header_and_break(tmp_path):
    path = tmp_path / "matrix.csv"
    matrix = _sample_matrix()
    with CsvFile(path) as csv:
        csv.write_text("i,data,data,data\n")
        csv.write_matrix(matrix)
        csv.crlf()
        csv.write_matrix(matrix)

    m1 = read_matrix(path)
    assert m1.row_length == matrix.row_length + 1
    assert m1.column_length == matrix.column_length * 2
    for c in range(m1.column_length):
        source = c % matrix.column_length
        assert m1[0][c] == source
        for r in range(m1.row_length - 1):
            assert m1[r + 1][c] == matrix[r][source]


def test_read_short_lines_leave_zeros(tmp_path):
    path = tmp_path / "uneven.csv"
    path.write_text("0,1\n1,2,3\n")
    m = read_matrix(path)
    assert m.row_length == 3
    assert m.column_length == 2
    assert m[2][0] == 0.0
    assert m[2][1] == 3.0
    assert m[1][0] == 1.0


def test_read_skips_non_numeric_lines(tmp_path):
    path = tmp_path / "mixed.csv"
    path.write_text("time,value\n\n0,-1.5\n# note\n1,+2\n")
    m = read_matrix(path)
    assert m == [[0.0, 1.0], [-1.5, 2.0]]


def test_read_handles_carriage_returns(tmp_path):
    path = tmp_path / "crlf.csv"
    path.write_bytes(b"0,4\r\n1,5\r\n")
    m = read_matrix(path)
    assert m == [[0.0, 1.0], [4.0, 5.0]]


def test_read_empty_file_gives_null_matrix(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    assert read_matrix(path).is_null()


def test_write_without_open_file_raises():
    csv = CsvFile()
    with pytest.raises(ValueError):
        csv.write_text("x")
    with pytest.raises(ValueError):
        csv.crlf()
    with pytest.raises(ValueError):
        csv.read_matrix()


def test_context_manager_closes(tmp_path):
    path = tmp_path / "closed.csv"
    with CsvFile(path) as csv:
        csv.write_values([3.0])
    with pytest.raises(ValueError):
        csv.write_values([4.0])
    assert path.read_text() == "0,3\n"


def test_reopen_switches_file(tmp_path):
    first = tmp_path / "first.csv"
    second = tmp_path / "second.csv"
    csv = CsvFile(first)
    csv.write_values([1.0])
    csv.open(second)
    csv.write_values([2.0, 3.0])
    csv.close()
    assert read_matrix(first) == [[0.0], [1.0]]
    assert read_matrix(second) == [[0.0, 1.0], [2.0, 3.0]]


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_matrix(tmp_path / "missing.csv")


def test_round_trip_values(tmp_path):
    path = tmp_path / "round.csv"
    values = [0.5, -2.0, 100.0, 7.25]
    write_values(path, values)
    m = read_matrix(path)
    assert list(m[0]) == [0.0, 1.0, 2.0, 3.0]
    assert list(m[1]) == values