"""File helpers for dbcrawler."""

from pathlib import Path


def read_text_file(file_path: Path) -> str:
    """Return the UTF-8 contents of a template or other text file.

    Raises:
        FileNotFoundError: If nothing exists at the path.
        ValueError: If the path is a directory or another non-file.
        UnicodeDecodeError: If the file is not UTF-8.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    if not file_path.is_file():
        raise ValueError(f"Path is not a file: {file_path}")
    return file_path.read_text(encoding="utf-8")
