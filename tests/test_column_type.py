import pytest

from rsvcore.column import Columns
from rsvcore.column_type import ColumnType, ColumnTypes, CType
from rsvcore.util import CliError

INT, FLOAT, STRING, NULL = (
    ColumnType.INT,
    ColumnType.FLOAT,
    ColumnType.STRING,
    ColumnType.NULL,
)


@pytest.mark.parametrize(
    "start,field,expected",
    [
        (NULL, "12", INT),
        (NULL, "-7", INT),
        (NULL, "1.5", FLOAT),
        (NULL, "1e3", FLOAT),
        (NULL, "abc", STRING),
        (INT, "3", INT),
        (INT, "2.5", FLOAT),
        (INT, "x", STRING),
        (FLOAT, "4", FLOAT),
        (FLOAT, "x", STRING),
        (STRING, "1", STRING),
        (NULL, "99999999999999999999", FLOAT),
        (NULL, "1_0", STRING),
        (NULL, " 1", STRING),
    ],
)
def test_updated(start, field, expected):
    assert start.updated(field) is expected


@pytest.mark.parametrize(
    "field,expected",
    [("12", "int"), ("1.5", "float"), ("abc", "string")],
)
def test_display_names(field, expected):
    assert str(NULL.updated(field)) == expected


def test_display_name_of_null():
    assert str(STRING.updated("1")) == "string"
    assert f"{NULL}" == "null"


def test_is_number_and_is_string():
    assert INT.is_number() and FLOAT.is_number()
    assert not STRING.is_number() and not NULL.is_number()
    assert STRING.is_string() and not INT.is_string()


def test_excel_col_width_is_clamped():
    assert CType(0, INT, 2).excel_col_width() == 6.0
    assert CType(0, INT, 100).excel_col_width() == 60.0
    assert CType(0, INT, 10).excel_col_width() == 10.0


def test_guess_from_csv(tmp_path):
    p = tmp_path / "d.csv"
    p.write_text("a,b,c,d\n1,2.5,xy,\n30,NA,z,\n")
    types = ColumnTypes.guess_from_csv(p, ",", '"', False, Columns("").parse())
    got = list(types)
    assert [c.col_index for c in got] == [0, 1, 2, 3]
    assert [c.col_type for c in got] == [INT, FLOAT, STRING, NULL]
    assert [c.max_length for c in got] == [len("30"), len("2.5"), len("xy"), 0]


def test_guess_from_csv_no_header_includes_first_line(tmp_path):
    p = tmp_path / "d.csv"
    p.write_text("a\n1\n2\n")
    types = ColumnTypes.guess_from_csv(p, ",", '"', True, Columns("").parse())
    assert [c.col_type for c in types] == [STRING]


def test_guess_from_csv_header_only_is_none(tmp_path):
    p = tmp_path / "d.csv"
    p.write_text("a,b\n")
    assert ColumnTypes.guess_from_csv(p, ",", '"', False, Columns("").parse()) is None


def test_guess_from_csv_selected_columns(tmp_path):
    p = tmp_path / "d.csv"
    p.write_text("a,b,c,d\n1,x,2,y\n")
    types = ColumnTypes.guess_from_csv(p, ",", '"', False, Columns("1,3").parse())
    assert [(c.col_index, c.col_type) for c in types] == [(1, STRING), (3, STRING)]


def test_guess_from_csv_short_row_raises(tmp_path):
    p = tmp_path / "d.csv"
    p.write_text("a,b\n1,2\n3\n")
    with pytest.raises(CliError):
        ColumnTypes.guess_from_csv(p, ",", '"', False, Columns("").parse())


def test_guess_from_io():
    rows = [["1", "x"], ["2", "y"]]
    types = ColumnTypes.guess_from_io(rows, Columns("").total_col(2).parse())
    assert [c.col_type for c in types] == [INT, STRING]
    assert len(types) == 2


def test_guess_from_io_empty_raises():
    with pytest.raises(CliError):
        ColumnTypes.guess_from_io([], Columns("").parse())


def test_guess_from_io_uses_first_5000_rows():
    rows = [["1"]] * 5000 + [["x"]]
    types = ColumnTypes.guess_from_io(rows, Columns("").parse())
    assert [c.col_type for c in types] == [INT]