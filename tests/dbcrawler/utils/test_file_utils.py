"""Tests for file utility functions."""

import pytest

from dbcrawler.utils.file_utils import read_text_file


class TestReadTextFile:
    """Tests for read_text_file function."""

    def test_read_template_file(self, tmp_path):
        """Test reading a template file."""
        content = "{% for table in tables %}{{ table.name }}\n{% endfor %}"
        template = tmp_path / "tables.j2"
        template.write_text(content, encoding="utf-8")

        assert read_text_file(template) == content

    def test_read_empty_file(self, tmp_path):
        template = tmp_path / "empty.j2"
        template.write_text("")
        assert read_text_file(template) == ""

    def test_read_unicode(self, tmp_path):
        """Test reading UTF-8 content."""
        template = tmp_path / "unicode.j2"
        template.write_text("Kundenübersicht: {{ title }}", encoding="utf-8")
        assert read_text_file(template) == "Kundenübersicht: {{ title }}"

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="File not found"):
            read_text_file(tmp_path / "missing.j2")

    def test_directory(self, tmp_path):
        """Test that a directory raises ValueError."""
        with pytest.raises(ValueError, match="not a file"):
            read_text_file(tmp_path)

    def test_invalid_utf8(self, tmp_path):
        template = tmp_path / "latin1.j2"
        template.write_bytes(b"caf\xe9")
        with pytest.raises(UnicodeDecodeError):
            read_text_file(template)
