from rsvcore.column import Columns
from rsvcore.column_stats import ColumnStats, CStat
from rsvcore.column_type import ColumnType, ColumnTypes


def _stats(rows, names):
    types = ColumnTypes.guess_from_io(rows, Columns("").parse())
    stats = ColumnStats(types, names)
    for row in rows:
        stats.parse_line_by_fields(row)
    stats.cal_unique_and_mean()
    return stats


def test_int_column():
    rows = [["1"], ["5"], ["3"]]
    s = _stats(rows, ["a"]).stat[0]
    assert s.col_type is ColumnType.INT
    assert s.min_fmt() == "1"
    assert s.max_fmt() == "5"
    assert s.unique_fmt() == str(len(rows))
    assert s.mean_fmt() == "3.00"


def test_int_column_widens_to_float():
    s = CStat(0, ColumnType.INT, "a")
    s.parse("1")
    s.parse("2.5")
    assert s.col_type is ColumnType.FLOAT
    assert s.unique_fmt() == "-"
    assert s.min_fmt() == "1.00"


def test_string_column():
    rows = [["pear"], ["apple"], ["fig"]]
    s = _stats(rows, ["fruit"]).stat[0]
    assert s.col_type is ColumnType.STRING
    assert s.mean_fmt() == "-"
    assert s.min_fmt() == "apple"
    assert s.max_fmt() == "pear"


def test_nulls_are_counted():
    nulls = [["NA"], [""]]
    stats = _stats([["1"], *nulls, ["2"]], ["a"])
    assert stats.stat[0].null == len(nulls)
    assert stats.rows == len(nulls) + 2


def test_empty_int_stat_formats_zero():
    s = CStat(0, ColumnType.INT, "a")
    assert s.min_fmt() == "0"
    assert s.max_fmt() == s.min_fmt()


def test_bad_line_is_skipped(capsys):
    stats = _stats([["1", "x"]], ["a", "b"])
    before = stats.rows
    stats.parse_line_by_fields(["1"])
    assert stats.rows == before
    assert capsys.readouterr().out.startswith("[info] ignore a bad line")


def test_parse_line_splits():
    stats = _stats([["1", "x"]], ["a", "b"])
    stats.parse_line('2,"y"', ",", '"')
    assert stats.rows == 2
    assert "y" in stats.stat[1].unique_values


def test_merge_matches_single_pass():
    rows = [["1", "b"], ["4", "a"], ["NA", "c"], ["2", "a"]]
    names = ["n", "s"]
    whole = _stats(rows, names)

    types = ColumnTypes.guess_from_io(rows, Columns("").parse())
    first = ColumnStats(types, names)
    second = first.copy()
    for row in rows[:2]:
        first.parse_line_by_fields(row)
    for row in rows[2:]:
        second.parse_line_by_fields(row)
    first.merge(second)
    first.cal_unique_and_mean()

    assert first.rows == whole.rows
    assert first.render() == whole.render()


def test_copy_is_empty():
    stats = _stats([["1", "x"], ["2", "y"]], ["a", "b"])
    dup = stats.copy()
    assert dup.rows == 0
    assert [c.name for c in dup.stat] == ["a", "b"]
    assert [c.col_type for c in dup.stat] == [c.col_type for c in stats.stat]
    assert all(not c.unique_values for c in dup.stat)


def test_render_shape():
    stats = _stats([["1", "x"]], ["a", "b"])
    lines = stats.render().split("\n")
    assert lines[0].startswith("┌")
    assert lines[-1].startswith("└")
    assert lines[2].startswith("├")
    for word in ("col", "type", "min", "max", "mean", "unique", "null"):
        assert word in lines[1]
    assert len({len(line) for line in lines}) == 1
    assert str(stats) == stats.render()


def test_print(capsys):
    stats = _stats([["1"]], ["a"])
    stats.print()
    assert capsys.readouterr().out == stats.render() + "\n"