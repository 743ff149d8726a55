import pytest

from vaulton.fs import LocalFileSystem, MemoryFileSystem


def test_read_existing_file(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("test content", encoding="utf-8")
    assert LocalFileSystem().read_to_string(path) == "test content"


def test_read_existing_file_by_str(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("test content", encoding="utf-8")
    assert LocalFileSystem().read_to_string(str(path)) == "test content"


def test_read_nonexistent_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        LocalFileSystem().read_to_string(tmp_path / "definitely_not_exists.txt")


def test_mock_fluent_api():
    fs = (
        MemoryFileSystem()
        .with_file("config/app.yml", "key: value")
        .with_file("data.txt", "hello world")
    )
    assert fs.read_to_string("config/app.yml") == "key: value"
    assert fs.read_to_string("data.txt") == "hello world"


def test_nonexistent_memory_file():
    fs = MemoryFileSystem().with_file("exists.txt", "content")
    with pytest.raises(FileNotFoundError) as info:
        fs.read_to_string("does_not_exist.txt")
    assert "does_not_exist.txt" in str(info.value)


def test_nested_paths():
    fs = MemoryFileSystem().with_file("config/env/dev.yml", "environment: development")
    assert fs.read_to_string("config/env/dev.yml") == "environment: development"


def test_with_dir_and_has_path():
    fs = MemoryFileSystem().with_dir("config")
    assert fs.has_path("config")
    assert not fs.has_path("other")
    assert fs.read_to_string("config") == ""


def test_equivalent_paths_match():
    fs = MemoryFileSystem().with_file("config/./app.yml", "key: value")
    assert fs.read_to_string("config/app.yml") == "key: value"


def test_later_file_replaces_earlier():
    fs = MemoryFileSystem().with_file("a.txt", "first").with_file("a.txt", "second")
    assert fs.read_to_string("a.txt") == "second"