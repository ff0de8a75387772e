"""Text rendering of flattened snapshots in several layouts."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import PurePath

import click

from .parsers.models import EnumDecl, FunctionDecl, Snapshot, StructDecl


class Layout(str, Enum):
    PLAIN = "plain"      # simple list
    TREE = "tree"        # hierarchical
    GRID = "grid"        # table of counts
    COMPACT = "compact"  # one line per file


class Detail(str, Enum):
    MINIMAL = "minimal"
    STANDARD = "standard"
    VERBOSE = "verbose"


class ColorMode(str, Enum):
    NONE = "none"
    STANDARD = "standard"
    BADGES = "badges"


class SymbolSet(str, Enum):
    NONE = "none"
    ASCII = "ascii"
    UNICODE = "unicode"


@dataclass(frozen=True)
class OutputStyle:
    layout: Layout = Layout.PLAIN
    detail: Detail = Detail.STANDARD
    color: ColorMode = ColorMode.NONE
    symbols: SymbolSet = SymbolSet.NONE

    @classmethod
    def preset(cls, name: str) -> OutputStyle:
        """Look up a named preset (see ``PRESETS``)."""
        try:
            return PRESETS[name]
        except KeyError:
            raise ValueError(
                f"Unknown output preset: {name!r}. "
                f"Choose from: {', '.join(PRESETS)}"
            ) from None

    def with_overrides(self, *, layout=None, detail=None, color=None,
                       symbols=None) -> OutputStyle:
        """Return a copy with any non-None component replaced."""
        changes = {}
        if layout is not None:
            changes["layout"] = Layout(layout)
        if detail is not None:
            changes["detail"] = Detail(detail)
        if color is not None:
            changes["color"] = ColorMode(color)
        if symbols is not None:
            changes["symbols"] = SymbolSet(symbols)
        return replace(self, **changes)


PRESETS: dict[str, OutputStyle] = {
    "plain": OutputStyle(),
    "tree": OutputStyle(Layout.TREE, Detail.STANDARD, ColorMode.STANDARD, SymbolSet.UNICODE),
    "compact": OutputStyle(Layout.COMPACT, Detail.MINIMAL, ColorMode.NONE, SymbolSet.NONE),
    "verbose": OutputStyle(Layout.TREE, Detail.VERBOSE, ColorMode.STANDARD, SymbolSet.UNICODE),
    "minimal": OutputStyle(Layout.PLAIN, Detail.MINIMAL, ColorMode.NONE, SymbolSet.NONE),
    "grid": OutputStyle(Layout.GRID, Detail.STANDARD, ColorMode.NONE, SymbolSet.ASCII),
    "markdown": OutputStyle(Layout.PLAIN, Detail.STANDARD, ColorMode.NONE, SymbolSet.ASCII),
    "html": OutputStyle(Layout.TREE, Detail.STANDARD, ColorMode.NONE, SymbolSet.NONE),
    "badges": OutputStyle(Layout.PLAIN, Detail.STANDARD, ColorMode.BADGES, SymbolSet.UNICODE),
    "monochrome": OutputStyle(Layout.TREE, Detail.STANDARD, ColorMode.NONE, SymbolSet.UNICODE),
}

# (branch, continuation) prefixes per symbol set
_TREE_SYMBOLS = {
    SymbolSet.UNICODE: ("├──", "│  "),
    SymbolSet.ASCII: ("|--", "|  "),
    SymbolSet.NONE: ("", "  "),
}

_SECTION_BADGES = {
    "Functions": "🔧",
    "Structs": "🏗️",
    "Enums": "🧩",
}

_GRID_RULE = "+----------------------+----------+----------+----------+\n"


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


class OutputRenderer:

    def __init__(self, style: OutputStyle | None = None):
        self.style = style or OutputStyle()

    def render(self, snapshots: list[Snapshot]) -> str:
        layout = self.style.layout
        if layout is Layout.TREE:
            return self._render_tree(snapshots)
        elif layout is Layout.GRID:
            return self._render_grid(snapshots)
        elif layout is Layout.COMPACT:
            return self._render_compact(snapshots)
        return self._render_plain(snapshots)

    # ── Layouts ─────────────────────────────────────────────────────────

    def _render_plain(self, snapshots: list[Snapshot]) -> str:
        out = []
        for snap in snapshots:
            out.append(self._format_path(snap.path) + "\n")
            if snap.functions:
                out.append(self._format_section_header("Functions"))
                out.extend(self._format_function(fn) for fn in snap.functions)
            if snap.structs:
                out.append(self._format_section_header("Structs"))
                out.extend(self._format_struct(s) for s in snap.structs)
            if snap.enums:
                out.append(self._format_section_header("Enums"))
                out.extend(self._format_enum(e) for e in snap.enums)
            out.append("\n")
        return "".join(out)

    def _render_tree(self, snapshots: list[Snapshot]) -> str:
        branch, cont = _TREE_SYMBOLS[self.style.symbols]
        out = []
        for snap in snapshots:
            out.append(f"{branch} 📄 {self._format_path(snap.path)}\n")
            if snap.functions:
                out.append(f"{cont}  🔧 Functions:\n")
                for fn in snap.functions:
                    out.append(f"{cont}  - {self._function_inline(fn)}\n")
            if snap.structs:
                out.append(f"{cont}  🏗️ Structs:\n")
                for s in snap.structs:
                    out.append(f"{cont}  - {self._struct_inline(s)}\n")
            if snap.enums:
                out.append(f"{cont}  🧩 Enums:\n")
                for e in snap.enums:
                    out.append(f"{cont}  - {self._enum_inline(e)}\n")
        return "".join(out)

    def _render_grid(self, snapshots: list[Snapshot]) -> str:
        out = [_GRID_RULE,
               "| File                 | Functions| Structs  | Enums    |\n",
               _GRID_RULE]
        for snap in snapshots:
            name = _truncate(PurePath(snap.path).name, 20)
            out.append(
                f"| {name:<20} | {len(snap.functions):<8} "
                f"| {len(snap.structs):<8} | {len(snap.enums):<8} |\n"
            )
        out.append(_GRID_RULE)
        return "".join(out)

    def _render_compact(self, snapshots: list[Snapshot]) -> str:
        return "".join(
            f"{PurePath(s.path).name}: f={len(s.functions)} "
            f"s={len(s.structs)} e={len(s.enums)}\n"
            for s in snapshots
        )

    # ── Formatting ──────────────────────────────────────────────────────

    def _format_path(self, path: str) -> str:
        if self.style.color is ColorMode.STANDARD:
            return click.style(path, fg="bright_blue")
        if self.style.color is ColorMode.BADGES:
            return f"📁 {path}"
        return path

    def _format_section_header(self, name: str) -> str:
        if self.style.color is ColorMode.STANDARD:
            return f"  {click.style(name, fg='yellow', bold=True)}:\n"
        if self.style.color is ColorMode.BADGES:
            return f"  {_SECTION_BADGES.get(name, '📦')} {name}:\n"
        return f"  {name}:\n"

    def _format_function(self, fn: FunctionDecl) -> str:
        if self.style.detail is Detail.MINIMAL:
            return f"    {fn.name}\n"
        if self.style.detail is Detail.VERBOSE:
            return f"    {fn.name} (args: {len(fn.args)}, vars: {len(fn.variables)})\n"
        return f"    {fn.name} (args: {len(fn.args)})\n"

    def _function_inline(self, fn: FunctionDecl) -> str:
        if self.style.detail is Detail.MINIMAL:
            return fn.name
        args = ", ".join(fn.args)
        if self.style.detail is Detail.VERBOSE:
            variables = ", ".join(name for name, _ in fn.variables)
            return f"{fn.name}: args [{args}], variables [{variables}]"
        return f"{fn.name}: args [{args}]"

    def _format_struct(self, struct: StructDecl) -> str:
        if self.style.detail is Detail.MINIMAL:
            return f"    {struct.name}\n"
        if self.style.detail is Detail.VERBOSE:
            return (f"    {struct.name} (fields: {len(struct.fields)}, "
                    f"methods: {len(struct.methods)})\n")
        return f"    {struct.name} (fields: {len(struct.fields)})\n"

    def _struct_inline(self, struct: StructDecl) -> str:
        if self.style.detail is Detail.MINIMAL:
            return struct.name
        fields = ", ".join(struct.fields)
        if self.style.detail is Detail.VERBOSE:
            return f"{struct.name}: fields [{fields}], methods [{', '.join(struct.methods)}]"
        return f"{struct.name}: fields [{fields}]"

    def _format_enum(self, enum: EnumDecl) -> str:
        if self.style.detail is Detail.MINIMAL:
            return f"    {enum.name}\n"
        if self.style.detail is Detail.VERBOSE:
            return (f"    {enum.name} (variants: {len(enum.variants)}, "
                    f"methods: {len(enum.methods)})\n")
        return f"    {enum.name} (variants: {len(enum.variants)})\n"

    def _enum_inline(self, enum: EnumDecl) -> str:
        if self.style.detail is Detail.MINIMAL:
            return enum.name
        variants = ", ".join(enum.variants)
        if self.style.detail is Detail.VERBOSE:
            return f"{enum.name}: variants [{variants}], methods [{', '.join(enum.methods)}]"
        return f"{enum.name}: variants [{variants}]"
