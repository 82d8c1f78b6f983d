"""File I/O and byte-ownership helpers."""

from __future__ import annotations

from pathlib import Path


def resolve_path(file_path: str | Path) -> Path:
    """Resolve and validate a file path."""
    path = Path(file_path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path


def is_pdf(file_path: str | Path) -> bool:
    """Check if a file is a PDF."""
    return Path(file_path).suffix.lower() == ".pdf"


def read_document(file_path: str | Path) -> bytes:
    """Read a PDF from disk into an owned byte string."""
    path = resolve_path(file_path)
    if not is_pdf(path):
        raise ValueError(f"Not a PDF file: {path}")
    return path.read_bytes()


def clone_bytes(data: bytes | bytearray | memoryview) -> bytes:
    """Return a private copy of ``data``.

    Every boundary that hands caller bytes to a parser goes through this, so
    a collaborator that consumes or mutates its input buffer can never touch
    the caller's copy.
    """
    return bytes(bytearray(data))
