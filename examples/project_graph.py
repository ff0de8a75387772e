#!/usr/bin/env python3
"""Scan a Cargo project and load it into a knowledge graph.

Demonstrates: furnace.scan, DataFrame export, KGLite queries.

Generates: Crate, Module, File, Function, Struct, Enum, Trait nodes
           with HAS_ROOT_MODULE, HAS_SUBMODULE, BACKED_BY, DEFINES edges.
"""

import sys
from pathlib import Path

from furnace import scan
from furnace.knowledge import build_knowledge_graph
from furnace.tables import graph_frames

# -- Scan ------------------------------------------------------------------

src_dir = sys.argv[1] if len(sys.argv) > 1 else "."
src_path = Path(src_dir).resolve()

if not src_path.is_dir():
    print(f"Not a directory: {src_path}", file=sys.stderr)
    sys.exit(1)

print(f"Scanning {src_path} ...")
project = scan(src_path, verbose=True)

frames = graph_frames(project)
print("\n--- Widest structs ---")
structs = frames["structs"].sort_values("field_count", ascending=False)
for row in structs.head(10).itertuples():
    print(f"  {row.qualified_name}: {row.field_count} fields")

# -- Graph -----------------------------------------------------------------

graph = build_knowledge_graph(project, verbose=True)
schema = graph.schema()
print(f"\nBuilt: {schema['node_count']} nodes, {schema['edge_count']} edges")
for nt, info in sorted(schema["node_types"].items()):
    print(f"  {nt}: {info['count']}")

output = f"{src_path.name}.kgl"
graph.save(output)
print(f"\nSaved to {output}")

# Modules with the most declarations
print("\n--- Busiest modules ---")
for row in graph.cypher("""
    MATCH (m:Module)-[:BACKED_BY]->(f:File)-[:DEFINES]->(item)
    RETURN m.qualified_name, count(item) AS items
    ORDER BY items DESC LIMIT 10
"""):
    print(f"  {row['m.qualified_name']}: {row['items']} items")
