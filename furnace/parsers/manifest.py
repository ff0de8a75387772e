"""Cargo.toml reading and workspace member resolution."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path

CARGO_MANIFEST = "Cargo.toml"
DEFAULT_VERSION = "0.0.0"

# ── TOML loading (stdlib 3.11+, tomli fallback for 3.10) ─────────────

_tomllib = None


def toml_module():
    """Return stdlib tomllib, or tomli on Python 3.10."""
    global _tomllib
    if _tomllib is None:
        try:
            import tomllib as _tl
        except ModuleNotFoundError:
            try:
                import tomli as _tl  # type: ignore[no-redef]
            except ImportError:
                raise ImportError(
                    "TOML parsing requires Python 3.11+ or the 'tomli' package. "
                    "Install with: pip install tomli"
                ) from None
        _tomllib = _tl
    return _tomllib


def load_toml(path: Path) -> dict:
    """Load a TOML file."""
    with open(path, "rb") as f:
        return toml_module().load(f)


# ── Model ─────────────────────────────────────────────────────────────


@dataclass
class CargoManifest:
    """The parts of a Cargo.toml the scanner reads. Everything else is ignored."""
    package_name: str | None = None
    version: str | None = None
    has_package: bool = False
    workspace_members: list[str] | None = None  # None: no [workspace] table
    workspace_exclude: list[str] = field(default_factory=list)

    @property
    def is_workspace(self) -> bool:
        return self.workspace_members is not None


def _string_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def read_cargo_manifest(manifest_path: Path) -> CargoManifest:
    """Parse a Cargo.toml.

    Raises:
        OSError: If the file cannot be read.
        TOMLDecodeError: If the file is not valid TOML.
    """
    data = load_toml(manifest_path)

    manifest = CargoManifest()
    package = data.get("package")
    if isinstance(package, dict):
        manifest.has_package = True
        name = package.get("name")
        manifest.package_name = name if isinstance(name, str) else None
        # `version.workspace = true` and other non-string forms are not resolved
        version = package.get("version")
        manifest.version = version if isinstance(version, str) else None

    workspace = data.get("workspace")
    if isinstance(workspace, dict):
        manifest.workspace_members = _string_list(workspace.get("members", []))
        manifest.workspace_exclude = _string_list(workspace.get("exclude", []))
    return manifest


def load_cargo_manifest(manifest_path: Path) -> CargoManifest:
    """Like :func:`read_cargo_manifest`, but a malformed manifest becomes an empty one.

    Emits a ``UserWarning`` describing the problem.
    """
    try:
        return read_cargo_manifest(manifest_path)
    except (OSError, UnicodeDecodeError, toml_module().TOMLDecodeError) as e:
        warnings.warn(
            f"Failed to parse {manifest_path}: {e}; using an empty manifest",
            stacklevel=2,
        )
        return CargoManifest()


# ── Workspace resolution ──────────────────────────────────────────────


def _expand_member(project_root: Path, member: str) -> list[Path]:
    """Resolve one workspace member entry to candidate crate roots.

    A literal path is used if it exists. An entry whose last segment holds
    a wildcard is matched against the immediate children of its parent
    directory; only children with their own Cargo.toml are kept.
    """
    candidate = project_root / member
    if candidate.exists():
        return [candidate]
    if "*" not in member:
        return []

    # Only the last segment may be a glob
    if "*" in str(Path(member).parent):
        return []
    pattern = candidate.name
    parent = candidate.parent
    if not parent.is_dir():
        return []
    try:
        children = sorted(parent.iterdir())
    except OSError:
        return []
    return [
        child for child in children
        if child.is_dir()
        and fnmatch(child.name, pattern)
        and (child / CARGO_MANIFEST).is_file()
    ]


def resolve_crate_roots(project_root: Path) -> list[Path]:
    """Find the crate root directories of a Cargo project.

    Returns an empty list when the root has no Cargo.toml. A workspace
    manifest yields its resolved members; a plain package manifest yields
    the root itself.
    """
    project_root = Path(project_root)
    manifest_path = project_root / CARGO_MANIFEST
    if not manifest_path.is_file():
        return []

    manifest = load_cargo_manifest(manifest_path)

    if manifest.is_workspace:
        excluded = {(project_root / e).resolve() for e in manifest.workspace_exclude}
        roots: list[Path] = []
        seen: set[Path] = set()
        for member in manifest.workspace_members:
            for member_dir in _expand_member(project_root, member):
                key = member_dir.resolve()
                if key in excluded or key in seen:
                    continue
                seen.add(key)
                roots.append(member_dir)
        return roots

    if manifest.has_package:
        return [project_root]
    return []
