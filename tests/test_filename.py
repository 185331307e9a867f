from pathlib import Path

from rsvcore.filename import dir_file, full_path, new_file, new_path, str_to_filename


def test_new_path_keeps_directory_and_extension():
    src = Path("data") / "data.csv"
    out = new_path(src, "-slice")
    assert out.parent == src.parent
    assert out.suffix == ".csv"
    assert out.stem == "data" + "-slice"


def test_new_path_without_extension():
    src = Path("data") / "records"
    out = new_path(src, "-sorted")
    assert out == src.parent / ("records" + "-sorted")
    assert out.suffix == ""


def test_new_file_in_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert new_file("out.csv") == Path.cwd() / "out.csv"
    assert new_file("out.csv").parent == Path.cwd()


def test_full_path_in_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert full_path("sub/x.csv") == Path.cwd() / "sub" / "x.csv"


def test_dir_file(tmp_path):
    assert dir_file(tmp_path, "a.csv") == tmp_path / "a.csv"
    assert dir_file(str(tmp_path), "a.csv").parent == tmp_path


def test_str_to_filename():
    assert str_to_filename("plain-name") == "plain-name"
    assert str_to_filename('<>:\\/"?*') == ""
    assert str_to_filename("a?b") == "ab"
    cleaned = str_to_filename('x<y>z:"w"/v\\u*')
    assert not set('<>:\\/"?*') & set(cleaned)