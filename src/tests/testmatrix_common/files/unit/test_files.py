"""Tests for testmatrix_common.io.files module."""

import json
from pathlib import Path

import pytest

from testmatrix_common.io.files import (
    FileOperationError,
    atomic_write,
    ensure_dir,
    read_lines,
    safe_read_json,
    safe_read_yaml,
    safe_write_json,
)


class TestSafeReadJson:
    """Tests for safe_read_json function."""

    def test_reads_any_top_level_value(self, tmp_path: Path):
        """Test that non-object documents are returned as-is."""
        json_file = tmp_path / "list.json"
        json_file.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

        assert safe_read_json(json_file) == [1, 2, 3]

    def test_accepts_byte_order_mark(self, tmp_path: Path):
        """Test that a UTF-8 BOM written by build tools is tolerated."""
        json_file = tmp_path / "bom.json"
        json_file.write_bytes(b'\xef\xbb\xbf{"project": "P"}')

        assert safe_read_json(json_file) == {"project": "P"}

    def test_raises_error_on_missing_file(self, tmp_path: Path):
        """Test that missing file raises FileOperationError."""
        with pytest.raises(FileOperationError, match="does not exist"):
            safe_read_json(tmp_path / "missing.json")

    def test_raises_error_on_malformed_json(self, tmp_path: Path):
        """Test that malformed JSON raises FileOperationError."""
        json_file = tmp_path / "bad.json"
        json_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(FileOperationError, match="Invalid JSON"):
            safe_read_json(json_file)


class TestSafeWriteJson:
    """Tests for safe_write_json function."""

    def test_preserves_key_order_when_unsorted(self, tmp_path: Path):
        """Test that sort_keys=False keeps insertion order."""
        json_file = tmp_path / "out.json"

        safe_write_json(json_file, {"b": 1, "a": 2}, sort_keys=False)

        assert json_file.read_text(encoding="utf-8") == '{\n  "b": 1,\n  "a": 2\n}\n'

    def test_sorts_keys_by_default(self, tmp_path: Path):
        """Test default sorted output."""
        json_file = tmp_path / "out.json"

        safe_write_json(json_file, {"b": 1, "a": 2})

        assert list(json.loads(json_file.read_text(encoding="utf-8"))) == ["a", "b"]

    def test_rejects_unserializable_data(self, tmp_path: Path):
        """Test that unserializable data raises without creating the file."""
        json_file = tmp_path / "out.json"

        with pytest.raises(FileOperationError, match="Cannot serialize"):
            safe_write_json(json_file, {"value": object()})
        assert not json_file.exists()


class TestAtomicWrite:
    """Tests for atomic_write function."""

    def test_replaces_existing_content(self, tmp_path: Path):
        """Test that the target is fully replaced."""
        target = tmp_path / "file.txt"
        target.write_text("old content that is longer", encoding="utf-8")

        atomic_write(target, "new")

        assert target.read_text(encoding="utf-8") == "new"

    def test_leaves_no_temporary_files(self, tmp_path: Path):
        """Test that only the target remains after writing."""
        atomic_write(tmp_path / "file.txt", "content")

        assert [p.name for p in tmp_path.iterdir()] == ["file.txt"]

    def test_raises_when_parent_is_a_file(self, tmp_path: Path):
        """Test that an impossible target directory raises FileOperationError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(FileOperationError):
            atomic_write(blocker / "file.txt", "content")


class TestHelpers:
    """Tests for ensure_dir, read_lines and safe_read_yaml."""

    def test_ensure_dir_creates_nested(self, tmp_path: Path):
        """Test nested directory creation."""
        path = ensure_dir(tmp_path / "a" / "b")

        assert path.is_dir()

    def test_read_lines_strips_terminators(self, tmp_path: Path):
        """Test that CRLF and LF line endings are both removed."""
        text_file = tmp_path / "list.txt"
        text_file.write_bytes(b"one\r\ntwo\nthree")

        assert read_lines(text_file) == ["one", "two", "three"]

    def test_read_lines_missing_file(self, tmp_path: Path):
        """Test that a missing file raises FileOperationError."""
        with pytest.raises(FileOperationError, match="does not exist"):
            read_lines(tmp_path / "missing.txt")

    def test_safe_read_yaml_empty_file(self, tmp_path: Path):
        """Test that an empty YAML document reads as an empty dict."""
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("", encoding="utf-8")

        assert safe_read_yaml(yaml_file) == {}

    def test_safe_read_yaml_invalid(self, tmp_path: Path):
        """Test that invalid YAML raises FileOperationError."""
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("key: [unclosed", encoding="utf-8")

        with pytest.raises(FileOperationError, match="Invalid YAML"):
            safe_read_yaml(yaml_file)
