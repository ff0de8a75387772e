"""Rust source and Cargo manifest parsers."""

from .models import (
    Snapshot, FunctionDecl, StructDecl, TraitDecl, EnumDecl, ImplDecl,
)
from .base import read_source, content_digest
from .rust import RustParser, SOURCE_EXTENSION
from .manifest import (
    CargoManifest, read_cargo_manifest, load_cargo_manifest,
    resolve_crate_roots,
)

__all__ = [
    "Snapshot", "FunctionDecl", "StructDecl", "TraitDecl", "EnumDecl", "ImplDecl",
    "read_source", "content_digest",
    "RustParser", "SOURCE_EXTENSION",
    "CargoManifest", "read_cargo_manifest", "load_cargo_manifest",
    "resolve_crate_roots",
]
