"""Shared fixtures for the furnace test suite."""

from pathlib import Path
from textwrap import dedent

import pytest

from furnace.parsers import RustParser


def write_tree(root: Path, files: dict) -> Path:
    """Write {relative_path: text or bytes} under root. Text is dedented."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(dedent(content).lstrip("\n"), encoding="utf8")
    return root


def cargo_toml(name: str, version: str = "0.1.0") -> str:
    return f'[package]\nname = "{name}"\nversion = "{version}"\n'


@pytest.fixture
def make_project(tmp_path):
    """Factory: build a project tree in tmp_path and return its resolved root."""
    def _make(files: dict) -> Path:
        return write_tree(tmp_path, files).resolve()
    return _make


@pytest.fixture
def package_manifest():
    """Factory for a minimal [package] Cargo.toml."""
    return cargo_toml


@pytest.fixture(scope="module")
def rust_parser():
    return RustParser()


@pytest.fixture
def parse(rust_parser):
    """Parse dedented Rust source into a Snapshot (or None)."""
    def _parse(code: str, path: str = "src/lib.rs"):
        return rust_parser.parse_snapshot(dedent(code).encode("utf8"), path)
    return _parse
