import pytest

from rsvcore.filter import Filter, parse_f64
from rsvcore.util import CliError


def test_string_equal():
    f = Filter("0=INN00001").parse()
    assert f.record_is_valid(["INN00001", "2"]) is True
    assert f.record_is_valid(["INN00002", "2"]) is False


def test_string_equal_any_of():
    f = Filter("0=x,y").parse()
    assert f.record_is_valid(["y"]) is True
    assert f.record_is_valid(["z"]) is False


def test_numeric_equal():
    f = Filter("1N=2").parse()
    assert f.record_is_valid(["a", "2"]) is True
    assert f.record_is_valid(["a", "2.0"]) is True
    assert f.record_is_valid(["a", "3"]) is False
    assert f.record_is_valid(["a", "abc"]) is False


def test_numeric_not_equal_accepts_non_numbers():
    f = Filter("1N!=2").parse()
    assert f.record_is_valid(["a", "abc"]) is True
    assert f.record_is_valid(["a", "2"]) is False


def test_conjunction():
    f = Filter("0N>10&1=b").parse()
    assert f.record_is_valid(["11", "b"]) is True
    assert f.record_is_valid(["11", "a"]) is False
    assert f.record_is_valid(["9", "b"]) is False


def test_not_empty():
    f = Filter("0!=").parse()
    assert f.record_is_valid([""]) is False
    assert f.record_is_valid(["a"]) is True


def test_string_ordering():
    f = Filter("0>=b").parse()
    assert f.record_is_valid(["b"]) is True
    assert f.record_is_valid(["a"]) is False
    assert Filter("0<b").parse().record_is_valid(["a"]) is True


def test_math_expression_with_columns():
    f = Filter("0>@1 + 1").parse()
    assert f.record_is_valid(["5", "3"]) is True
    assert f.record_is_valid(["4", "3"]) is False
    assert f.record_is_valid(["x", "3"]) is False


def test_math_expression_with_parentheses():
    f = Filter("0>=(@1+1)/(2^2)").parse()
    assert f.record_is_valid(["2", "7"]) is True
    assert f.record_is_valid(["1", "7"]) is False


def test_math_expression_without_columns():
    f = Filter("0N>2*3").parse()
    assert f.record_is_valid(["7"]) is True
    assert f.record_is_valid(["6"]) is False


def test_math_expression_on_first_column():
    f = Filter("1<@0").parse()
    assert f.record_is_valid(["5", "3"]) is True
    assert f.record_is_valid(["1", "3"]) is False


def test_negative_column_with_total():
    f = Filter("-1=z").total_col(3).parse()
    assert f.record_is_valid(["a", "b", "z"]) is True


def test_negative_column_from_file(tmp_path):
    p = tmp_path / "d.csv"
    p.write_text("a,b,c\nx,y,z\n", encoding="utf-8")
    f = Filter("-2=y").total_col_of(p, ",", '"').parse()
    assert f.record_is_valid(["x", "y", "z"]) is True
    assert f.record_is_valid(["x", "q", "z"]) is False


def test_empty_filter():
    f = Filter("").parse()
    assert f.parsed is True
    assert f.is_empty() is True
    assert f.record_is_valid(["anything"]) is True


def test_record_valid_map():
    assert Filter("").parse().record_valid_map("a,b", ",", '"') == ("a,b", None)
    f = Filter("1=b").parse()
    assert f.record_valid_map("a,b", ",", '"') == ("a,b", ["a", "b"])
    assert f.record_valid_map("a,x", ",", '"') is None


@pytest.mark.parametrize("raw", ["0", "0=1=2"])
def test_wrong_syntax(raw):
    with pytest.raises(CliError, match="Filter syntax is wrong"):
        Filter(raw).parse()


def test_bad_column():
    with pytest.raises(CliError, match="Column syntax error"):
        Filter("aN>1").parse()


def test_bad_numbers():
    with pytest.raises(CliError):
        Filter("0N>xyz").parse()
    with pytest.raises(CliError, match="is not a number"):
        Filter("0N=1,q").parse()


def test_parse_f64():
    assert parse_f64("1.5") == 1.5
    with pytest.raises(CliError):
        parse_f64(" 1")
    with pytest.raises(CliError):
        parse_f64("1_0")