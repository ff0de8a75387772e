"""Command-line entry point: ``furnace PATH``."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import click

from .config import load_config
from .engine import scan
from .linting import lint_snapshots
from .output import PRESETS, ColorMode, Detail, Layout, OutputRenderer, SymbolSet


def _choices(enum_cls) -> click.Choice:
    return click.Choice([member.value for member in enum_cls])


def _preset_option(name: str, help_text: str):
    return click.option(f"--{name}", "preset", flag_value=name, default=None,
                        help=help_text)


@click.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--format", "output_format", type=click.Choice(["text", "json", "graph"]),
              default="text", show_default=True,
              help="text: rendered snapshots and lint warnings; json: flattened "
                   "snapshots; graph: the full project graph.")
@_preset_option("plain", "Simple text, no colors (default).")
@_preset_option("tree", "Hierarchical tree view with colors.")
@_preset_option("compact", "One line per file.")
@_preset_option("verbose", "Tree view with extra details.")
@_preset_option("minimal", "Names only.")
@_preset_option("grid", "Table of counts per file.")
@_preset_option("markdown", "Plain layout with ASCII symbols.")
@_preset_option("html", "Uncolored tree layout.")
@_preset_option("badges", "Emoji section badges.")
@_preset_option("monochrome", "Tree view without colors.")
@click.option("--layout", type=_choices(Layout), help="Override the preset's layout.")
@click.option("--detail", type=_choices(Detail), help="Override the preset's detail level.")
@click.option("--color", type=_choices(ColorMode), help="Override the preset's color mode.")
@click.option("--symbols", type=_choices(SymbolSet), help="Override the preset's symbol set.")
@click.option("--output", "output_file", type=click.Path(dir_okay=False, path_type=Path),
              help="Also write the text rendering to this file.")
@click.option("--tables", "tables_dir", type=click.Path(file_okay=False, path_type=Path),
              help="Write one CSV per entity kind into this directory.")
@click.option("--save-graph", type=click.Path(dir_okay=False, path_type=Path),
              help="Save a KGLite knowledge graph (.kgl) of the project.")
@click.option("--progress", is_flag=True, help="Print scan progress.")
def main(path: Path, output_format: str, preset: str, layout, detail, color, symbols,
         output_file: Path | None, tables_dir: Path | None, save_graph: Path | None,
         progress: bool) -> None:
    """Scan the Rust project at PATH and report its structure."""
    config = load_config(path)
    graph = scan(path, verbose=progress)
    snapshots = graph.snapshots(config.ignore)

    if tables_dir is not None:
        from .tables import graph_frames, write_csv
        written = write_csv(graph_frames(graph), tables_dir)
        if progress:
            click.echo(f"Wrote {len(written)} tables to {tables_dir}", err=True)

    if save_graph is not None:
        from .knowledge import build_knowledge_graph
        build_knowledge_graph(graph, save_to=save_graph, verbose=progress)

    if output_format == "json":
        click.echo(json.dumps([asdict(s) for s in snapshots], indent=2))
        return
    if output_format == "graph":
        click.echo(graph.to_json())
        return

    style = PRESETS[preset or "plain"].with_overrides(
        layout=layout, detail=detail, color=color, symbols=symbols,
    )
    rendered = OutputRenderer(style).render(snapshots)
    click.echo(rendered)

    warnings = lint_snapshots(snapshots, config.lints)
    if warnings:
        click.echo(click.style("Linting Warnings:", fg="yellow", bold=True))
        for warning in warnings:
            click.echo(str(warning))

    if output_file is not None:
        output_file.write_text(click.unstyle(rendered), encoding="utf8")
        click.echo(f"\nOutput saved to {output_file}")
