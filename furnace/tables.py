"""
Flatten a ProjectGraph into pandas DataFrames.

One frame per entity kind (crates, modules, files, functions, structs,
enums, traits, impls). Modules and items get a ``qualified_name`` built
from the crate name and the module path, e.g. ``mycrate::net::Client``.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from .graph import ModuleNode, ProjectGraph

SEPARATOR = "::"

COLUMNS: dict[str, list[str]] = {
    "crates": ["name", "version", "path", "root_module"],
    "modules": ["qualified_name", "name", "crate", "parent", "directory", "file_path"],
    "files": ["path", "filename", "crate", "module", "hash", "parsed"],
    "functions": ["qualified_name", "name", "module", "file_path",
                  "args", "arg_count", "variables"],
    "structs": ["qualified_name", "name", "module", "file_path",
                "fields", "field_count", "methods"],
    "enums": ["qualified_name", "name", "module", "file_path", "variants", "methods"],
    "traits": ["qualified_name", "name", "module", "file_path", "methods"],
    "impls": ["for_type", "trait_name", "module", "file_path", "methods"],
}


def _join(names) -> str | None:
    return ", ".join(names) if names else None


def _collect_module(module: ModuleNode, qname: str, parent: str | None,
                    crate_name: str, rows: dict[str, list[dict]]) -> None:
    file_path = str(module.file.path) if module.file is not None else None
    rows["modules"].append({
        "qualified_name": qname,
        "name": module.name,
        "crate": crate_name,
        "parent": parent,
        "directory": str(module.path) if module.path is not None else None,
        "file_path": file_path,
    })

    if module.file is not None:
        snap = module.file.snapshot
        rows["files"].append({
            "path": file_path,
            "filename": Path(module.file.path).name,
            "crate": crate_name,
            "module": qname,
            "hash": module.file.hash,
            "parsed": snap is not None,
        })
        if snap is not None:
            for fn in snap.functions:
                rows["functions"].append({
                    "qualified_name": f"{qname}{SEPARATOR}{fn.name}",
                    "name": fn.name,
                    "module": qname,
                    "file_path": file_path,
                    "args": _join(fn.args),
                    "arg_count": len(fn.args),
                    "variables": _join(name for name, _ in fn.variables),
                })
            for s in snap.structs:
                rows["structs"].append({
                    "qualified_name": f"{qname}{SEPARATOR}{s.name}",
                    "name": s.name,
                    "module": qname,
                    "file_path": file_path,
                    "fields": _join(s.fields),
                    "field_count": len(s.fields),
                    "methods": _join(s.methods),
                })
            for e in snap.enums:
                rows["enums"].append({
                    "qualified_name": f"{qname}{SEPARATOR}{e.name}",
                    "name": e.name,
                    "module": qname,
                    "file_path": file_path,
                    "variants": _join(e.variants),
                    "methods": _join(e.methods),
                })
            for t in snap.traits:
                rows["traits"].append({
                    "qualified_name": f"{qname}{SEPARATOR}{t.name}",
                    "name": t.name,
                    "module": qname,
                    "file_path": file_path,
                    "methods": _join(t.methods),
                })
            for impl in snap.impls:
                rows["impls"].append({
                    "for_type": impl.for_type,
                    "trait_name": impl.trait_name,
                    "module": qname,
                    "file_path": file_path,
                    "methods": _join(impl.methods),
                })

    for sub in module.submodules:
        _collect_module(sub, f"{qname}{SEPARATOR}{sub.name}", qname, crate_name, rows)


def graph_frames(graph: ProjectGraph) -> dict[str, pd.DataFrame]:
    """Build one DataFrame per entity kind. Empty kinds get empty frames with columns."""
    rows: dict[str, list[dict]] = {kind: [] for kind in COLUMNS}
    for crate in graph.crates:
        # The root module is addressed by the crate name
        root_qname = crate.name
        rows["crates"].append({
            "name": crate.name,
            "version": crate.version,
            "path": str(crate.path),
            "root_module": root_qname,
        })
        _collect_module(crate.root_module, root_qname, None, crate.name, rows)

    return {
        kind: pd.DataFrame(kind_rows, columns=COLUMNS[kind])
        for kind, kind_rows in rows.items()
    }


def write_csv(frames: dict[str, pd.DataFrame], out_dir: str | Path) -> list[Path]:
    """Write each frame to ``<out_dir>/<kind>.csv``. Returns the written paths."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for kind, df in frames.items():
        path = out_dir / f"{kind}.csv"
        df.to_csv(path, index=False)
        written.append(path)
    return written
