"""
Load a scanned project into a KGLite knowledge graph.

Node types: Crate, Module, File, Function, Struct, Enum, Trait.
Connections: HAS_ROOT_MODULE (Crate -> Module), HAS_SUBMODULE
(Module -> Module), BACKED_BY (Module -> File), DEFINES (File -> item).
"""

from __future__ import annotations

from pathlib import Path

import kglite

from .graph import ProjectGraph
from .tables import graph_frames

# frame name -> graph node type for top-level items
ITEM_NODE_TYPES = {
    "functions": "Function",
    "structs": "Struct",
    "enums": "Enum",
    "traits": "Trait",
}


def _load_graph(frames) -> kglite.KnowledgeGraph:
    graph = kglite.KnowledgeGraph()

    # -- Nodes --
    crates_df = frames["crates"]
    if len(crates_df) > 0:
        graph.add_nodes(data=crates_df, node_type="Crate",
                        unique_id_field="name", node_title_field="name")

    modules_df = frames["modules"].drop_duplicates("qualified_name")
    if len(modules_df) > 0:
        graph.add_nodes(data=modules_df, node_type="Module",
                        unique_id_field="qualified_name", node_title_field="name")

    files_df = frames["files"].drop_duplicates("path")
    if len(files_df) > 0:
        graph.add_nodes(data=files_df, node_type="File",
                        unique_id_field="path", node_title_field="filename")

    for kind, node_type in ITEM_NODE_TYPES.items():
        # cfg-gated duplicates share a qualified name; keep the first
        df = frames[kind].drop_duplicates("qualified_name")
        if len(df) > 0:
            graph.add_nodes(data=df, node_type=node_type,
                            unique_id_field="qualified_name",
                            node_title_field="name")

    # -- Edges --
    if len(crates_df) > 0:
        graph.add_connections(
            data=crates_df[["name", "root_module"]], connection_type="HAS_ROOT_MODULE",
            source_type="Crate", source_id_field="name",
            target_type="Module", target_id_field="root_module",
        )

    children = modules_df[modules_df["parent"].notna()]
    if len(children) > 0:
        graph.add_connections(
            data=children[["parent", "qualified_name"]], connection_type="HAS_SUBMODULE",
            source_type="Module", source_id_field="parent",
            target_type="Module", target_id_field="qualified_name",
        )

    backed = modules_df[modules_df["file_path"].notna()]
    if len(backed) > 0:
        graph.add_connections(
            data=backed[["qualified_name", "file_path"]], connection_type="BACKED_BY",
            source_type="Module", source_id_field="qualified_name",
            target_type="File", target_id_field="file_path",
        )

    for kind, node_type in ITEM_NODE_TYPES.items():
        df = frames[kind].drop_duplicates("qualified_name")
        if len(df) > 0:
            graph.add_connections(
                data=df[["file_path", "qualified_name"]], connection_type="DEFINES",
                source_type="File", source_id_field="file_path",
                target_type=node_type, target_id_field="qualified_name",
            )

    return graph


def build_knowledge_graph(
    project: ProjectGraph,
    *,
    save_to: str | Path | None = None,
    verbose: bool = False,
) -> kglite.KnowledgeGraph:
    """Load a ProjectGraph into a KGLite knowledge graph.

    Args:
        project: Result of :func:`furnace.scan`.
        save_to: Optional path to save the graph as a .kgl file.
        verbose: If True, print progress information.

    Example::

        from furnace import scan
        from furnace.knowledge import build_knowledge_graph

        kg = build_knowledge_graph(scan("/path/to/project"))
        kg.cypher("MATCH (s:Struct) RETURN s.name, s.fields")
    """
    frames = graph_frames(project)
    if verbose:
        print(f"Loading: {len(frames['crates'])} crates, "
              f"{len(frames['modules'])} modules, "
              f"{len(frames['functions'])} functions, "
              f"{len(frames['structs'])} structs, "
              f"{len(frames['enums'])} enums, "
              f"{len(frames['traits'])} traits")

    graph = _load_graph(frames)

    if save_to is not None:
        graph.save(str(save_to))
        if verbose:
            print(f"Graph saved to {save_to}")
    return graph
