"""
Scan a Cargo project into a ProjectGraph.

Discovers crates from the root Cargo.toml, follows `mod name;` declarations
from each crate's entry file to the files that define them, and parses every
file into a structural Snapshot.
"""

from __future__ import annotations

import warnings
from pathlib import Path

from .graph import CrateNode, FileNode, ModuleNode, ProjectGraph
from .parsers import RustParser, SOURCE_EXTENSION, content_digest, read_source
from .parsers.manifest import (
    CARGO_MANIFEST, DEFAULT_VERSION, read_cargo_manifest, resolve_crate_roots,
    toml_module,
)

ROOT_MODULE = "crate"
SRC_DIR = "src"
LIB_ENTRY = "lib" + SOURCE_EXTENSION
BIN_ENTRY = "main" + SOURCE_EXTENSION
MOD_FILE = "mod" + SOURCE_EXTENSION


def find_entry_file(crate_root: Path) -> Path | None:
    """Return src/lib.rs, else src/main.rs, else None."""
    src_dir = crate_root / SRC_DIR
    for entry in (LIB_ENTRY, BIN_ENTRY):
        candidate = src_dir / entry
        if candidate.is_file():
            return candidate
    return None


def resolve_module_file(name: str, search_dir: Path) -> tuple[Path, Path] | None:
    """Find the file defining module ``name``.

    Tries ``<search_dir>/<name>.rs`` then ``<search_dir>/<name>/mod.rs``.
    Returns ``(file, child_search_dir)`` or None if neither exists.
    """
    flat = search_dir / f"{name}{SOURCE_EXTENSION}"
    if flat.is_file():
        return flat, search_dir
    nested = search_dir / name / MOD_FILE
    if nested.is_file():
        return nested, search_dir / name
    return None


class TraversalEngine:
    """Single full scan of a project root. Synchronous, depth-first."""

    def __init__(self, root: str | Path, *, verbose: bool = False):
        self.root = Path(root).resolve()
        self.verbose = verbose
        self._parser = RustParser()

    def scan(self) -> ProjectGraph:
        """Scan the project. Never raises for bad input; may return no crates."""
        if not (self.root / CARGO_MANIFEST).is_file():
            if self.verbose:
                print(f"No {CARGO_MANIFEST} in {self.root}, nothing to scan")
            return ProjectGraph(root_path=self.root, crates=[])

        crates = []
        for crate_root in resolve_crate_roots(self.root):
            crate_node = self.scan_crate(crate_root)
            if crate_node is not None:
                crates.append(crate_node)

        if self.verbose:
            n_files = sum(1 for c in crates for m in c.root_module.walk() if m.file)
            print(f"Scanned {len(crates)} crate(s), {n_files} file(s)")
        return ProjectGraph(root_path=self.root, crates=crates)

    def scan_crate(self, crate_root: Path) -> CrateNode | None:
        """Build the node for one crate, or None if it has no usable manifest or entry file."""
        crate_root = Path(crate_root).resolve()
        try:
            manifest = read_cargo_manifest(crate_root / CARGO_MANIFEST)
        except (OSError, UnicodeDecodeError, toml_module().TOMLDecodeError):
            return None
        if manifest.package_name is None:
            return None

        entry = find_entry_file(crate_root)
        if entry is None:
            return None

        if self.verbose:
            print(f"Scanning crate {manifest.package_name} ({entry.relative_to(crate_root)})")

        visited = {entry.resolve()}
        root_module = self.scan_module(ROOT_MODULE, entry, crate_root / SRC_DIR, visited)
        return CrateNode(
            name=manifest.package_name,
            version=manifest.version or DEFAULT_VERSION,
            path=crate_root,
            root_module=root_module,
        )

    def scan_module(self, name: str, file_path: Path, search_dir: Path,
                    visited: set[Path] | None = None) -> ModuleNode:
        """Ingest ``file_path`` and recursively resolve its `mod x;` children.

        ``visited`` holds the resolved paths already in this walk. A child
        whose file was seen before is skipped with a warning, which keeps
        repeated or cyclic declarations from recursing forever.
        """
        if visited is None:
            visited = {Path(file_path).resolve()}

        file_node = self.create_file_node(file_path)
        submodules = []

        if file_node.snapshot is not None:
            for mod_name in file_node.snapshot.submodule_declarations:
                resolved = resolve_module_file(mod_name, search_dir)
                if resolved is None:
                    continue
                child_file, child_dir = resolved
                key = child_file.resolve()
                if key in visited:
                    warnings.warn(
                        f"Module '{mod_name}' in {file_path} resolves to "
                        f"{child_file}, which is already part of the module tree; skipping",
                        stacklevel=2,
                    )
                    continue
                visited.add(key)
                submodules.append(
                    self.scan_module(mod_name, child_file, child_dir, visited)
                )

        return ModuleNode(
            name=name,
            path=search_dir,
            file=file_node,
            submodules=submodules,
        )

    def create_file_node(self, path: Path) -> FileNode:
        """Read, fingerprint and parse one file."""
        path = Path(path)
        source = read_source(path)
        return FileNode(
            path=path,
            hash=content_digest(source),
            snapshot=self._parser.parse_snapshot(source, str(path)),
        )


def scan(root: str | Path, *, verbose: bool = False) -> ProjectGraph:
    """Scan a Cargo project root into a ProjectGraph.

    Args:
        root: Directory holding the root Cargo.toml.
        verbose: If True, print progress information.

    Example::

        from furnace import scan

        graph = scan("/path/to/project")
        for crate in graph.crates:
            print(crate.name, crate.version)
    """
    return TraversalEngine(root, verbose=verbose).scan()
