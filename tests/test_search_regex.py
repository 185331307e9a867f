import pytest

from rsvcore.search_regex import Re
from rsvcore.util import CliError


def test_match_is_case_insensitive():
    assert Re("abc").is_match("xABCx") is True


def test_match_anywhere():
    assert Re("b").is_match("abc") is True
    assert Re("z").is_match("abc") is False


def test_anchored_date_pattern():
    r = Re(r"^\d{4}-\d{2}-\d{2}$")
    assert r.is_match("2022-01-21") is True
    assert r.is_match("x2022-01-21") is False


def test_invalid_pattern_raises():
    with pytest.raises(CliError):
        Re("(")