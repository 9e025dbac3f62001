"""Tests for schema file discovery."""

from compatgate.config import FileSet
from compatgate._internal.io.schema_files import discover_schema_files, included_files


def _touch(path, content="{}"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_default_includes_find_nested_avsc(tmp_path):
    _touch(tmp_path / "Root.avsc")
    _touch(tmp_path / "orders" / "Order.avsc")
    _touch(tmp_path / "orders" / "README.md")

    files = included_files(FileSet(directory=str(tmp_path)))

    assert [p.name for p in files] == ["Root.avsc", "Order.avsc"]


def test_files_sorted_by_relative_path(tmp_path):
    _touch(tmp_path / "b" / "B.avsc")
    _touch(tmp_path / "a" / "A.avsc")

    files = included_files(FileSet(directory=str(tmp_path)))

    assert [p.relative_to(tmp_path).as_posix() for p in files] == ["a/A.avsc", "b/B.avsc"]


def test_excludes(tmp_path):
    _touch(tmp_path / "keep" / "Keep.avsc")
    _touch(tmp_path / "legacy" / "Old.avsc")
    _touch(tmp_path / "Skip.avsc")

    files = included_files(FileSet(
        directory=str(tmp_path),
        excludes=["legacy/**", "**/Skip.avsc"],
    ))

    assert [p.name for p in files] == ["Keep.avsc"]


def test_missing_directory_yields_nothing(tmp_path):
    assert included_files(FileSet(directory=str(tmp_path / "nope"))) == []


def test_discover_dedupes_across_filesets(tmp_path):
    _touch(tmp_path / "avro" / "Foo.avsc")
    _touch(tmp_path / "avro" / "extra" / "Bar.avsc")

    files = discover_schema_files([
        FileSet(directory=str(tmp_path / "avro")),
        FileSet(directory=str(tmp_path / "avro" / "extra")),
    ])

    assert [p.name for p in files] == ["Foo.avsc", "Bar.avsc"]
