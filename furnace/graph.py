"""The project graph produced by a scan: crates, modules, files, snapshots."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .parsers.models import Snapshot


def _jsonable(value):
    """Convert Paths and tuples inside an ``asdict`` result to JSON types."""
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


@dataclass(frozen=True)
class FileNode:
    path: Path
    hash: str                          # SHA-256 hex of the raw bytes
    snapshot: Snapshot | None = None   # None when the file failed to parse

    def to_dict(self) -> dict:
        return _jsonable(asdict(self))


@dataclass(frozen=True)
class ModuleNode:
    name: str
    path: Path | None = None           # search directory for child modules
    file: FileNode | None = None
    submodules: list[ModuleNode] = field(default_factory=list)

    def walk(self) -> Iterator[ModuleNode]:
        """Yield this module and all descendants, depth-first pre-order."""
        yield self
        for sub in self.submodules:
            yield from sub.walk()

    def to_dict(self) -> dict:
        return _jsonable(asdict(self))


@dataclass(frozen=True)
class CrateNode:
    name: str
    version: str
    path: Path
    root_module: ModuleNode

    def to_dict(self) -> dict:
        return _jsonable(asdict(self))


@dataclass(frozen=True)
class ProjectGraph:
    root_path: Path
    crates: list[CrateNode] = field(default_factory=list)

    def modules(self) -> Iterator[ModuleNode]:
        """All modules of all crates, depth-first pre-order."""
        for crate in self.crates:
            yield from crate.root_module.walk()

    def files(self) -> Iterator[FileNode]:
        for module in self.modules():
            if module.file is not None:
                yield module.file

    def snapshots(self, ignore: Iterable[str] = ()) -> list[Snapshot]:
        return collect_snapshots(self, ignore)

    def to_dict(self) -> dict:
        return _jsonable(asdict(self))

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def is_ignored(path: str | Path, ignore: Iterable[str]) -> bool:
    """True if any ignore pattern occurs as a substring of the path."""
    path_str = str(path)
    return any(pattern in path_str for pattern in ignore)


def collect_snapshots(graph: ProjectGraph,
                      ignore: Iterable[str] = ()) -> list[Snapshot]:
    """Flatten a graph into per-file snapshots, depth-first pre-order.

    Files whose path contains any of the ``ignore`` substrings are dropped,
    as are files that failed to parse.
    """
    ignore = list(ignore)
    snapshots = []
    for file_node in graph.files():
        if is_ignored(file_node.path, ignore):
            continue
        if file_node.snapshot is not None:
            snapshots.append(file_node.snapshot)
    return snapshots
