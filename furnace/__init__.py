"""Furnace - structural snapshots of Rust (Cargo) projects using tree-sitter.

Usage::

    from furnace import scan

    graph = scan("/path/to/cargo/project")
    snapshots = graph.snapshots(ignore=["tests/"])
"""

from .engine import scan, TraversalEngine
from .graph import ProjectGraph, CrateNode, ModuleNode, FileNode, collect_snapshots
from .parsers.models import (
    Snapshot, FunctionDecl, StructDecl, TraitDecl, EnumDecl, ImplDecl,
)
from .config import FurnaceConfig, load_config
from .linting import LintWarning, lint_snapshots

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "scan", "TraversalEngine",
    "ProjectGraph", "CrateNode", "ModuleNode", "FileNode", "collect_snapshots",
    "Snapshot", "FunctionDecl", "StructDecl", "TraitDecl", "EnumDecl", "ImplDecl",
    "FurnaceConfig", "load_config",
    "LintWarning", "lint_snapshots",
]
