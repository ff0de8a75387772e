"""Shared helpers for reading and fingerprinting source files."""

import hashlib
from pathlib import Path


def read_source(path: Path) -> bytes:
    """Read a file's raw bytes.

    Unreadable files and content that is not valid UTF-8 are both treated
    as empty, so one bad file never aborts a scan.
    """
    try:
        data = Path(path).read_bytes()
    except OSError:
        return b""
    try:
        data.decode("utf8")
    except UnicodeDecodeError:
        return b""
    return data


def content_digest(data: bytes) -> str:
    """Return the SHA-256 hex digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


def node_text(node, source: bytes) -> str:
    """Extract the text of a tree-sitter node."""
    return source[node.start_byte:node.end_byte].decode("utf8")
