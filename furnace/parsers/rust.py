"""Rust structural extractor using tree-sitter-rust."""

from tree_sitter import Language, Parser
import tree_sitter_rust as ts_rust

from .base import node_text
from .models import (
    Snapshot, FunctionDecl, StructDecl, TraitDecl, EnumDecl, ImplDecl,
)

RUST_LANGUAGE = Language(ts_rust.language())

SOURCE_EXTENSION = ".rs"

# Patterns that wrap a single binding: `mut x`, `ref x`, `ref mut x`
_WRAPPING_PATTERNS = frozenset({"mut_pattern", "ref_pattern"})


class RustParser:
    """Parses Rust source into a :class:`Snapshot` of its top-level items."""

    def __init__(self):
        self._parser = Parser(RUST_LANGUAGE)

    # ── Helpers ─────────────────────────────────────────────────────────

    def _get_name(self, node, source: bytes) -> str | None:
        name = node.child_by_field_name("name")
        if name is None:
            return None
        return node_text(name, source)

    def _binding_name(self, pattern, source: bytes) -> str | None:
        """Return the bound identifier if the pattern binds exactly one name.

        Destructuring patterns (tuples, structs, slices) yield None.
        """
        if pattern is None:
            return None
        if pattern.type == "identifier":
            return node_text(pattern, source)
        if pattern.type in _WRAPPING_PATTERNS and pattern.named_children:
            return self._binding_name(pattern.named_children[-1], source)
        return None

    def _last_path_segment(self, node, source: bytes) -> str | None:
        """Reduce a trait path to its last segment.

        ``Display`` -> ``Display``, ``fmt::Display`` -> ``Display``,
        ``From<T>`` -> ``From``.
        """
        if node.type == "type_identifier":
            return node_text(node, source)
        if node.type == "scoped_type_identifier":
            name = node.child_by_field_name("name")
            return node_text(name, source) if name is not None else None
        if node.type == "generic_type":
            inner = node.child_by_field_name("type")
            return self._last_path_segment(inner, source) if inner is not None else None
        return None

    def _function_names(self, body, source: bytes,
                        kinds: tuple[str, ...] = ("function_item",)) -> list[str]:
        """Names of the fn items directly inside a declaration_list."""
        names = []
        if body is None:
            return names
        for item in body.named_children:
            if item.type in kinds:
                name = self._get_name(item, source)
                if name:
                    names.append(name)
        return names

    # ── Item parsers ────────────────────────────────────────────────────

    def _parse_function(self, node, source: bytes) -> FunctionDecl:
        fn = FunctionDecl(name=self._get_name(node, source) or "unknown")

        params = node.child_by_field_name("parameters")
        if params is not None:
            for param in params.named_children:
                # self_parameter and variadic_parameter carry no binding
                if param.type != "parameter":
                    continue
                name = self._binding_name(param.child_by_field_name("pattern"), source)
                if name:
                    fn.args.append(name)

        body = node.child_by_field_name("body")
        if body is not None:
            for stmt in body.named_children:
                if stmt.type != "let_declaration":
                    continue
                name = self._binding_name(stmt.child_by_field_name("pattern"), source)
                if name is None:
                    continue
                type_node = stmt.child_by_field_name("type")
                type_text = node_text(type_node, source) if type_node is not None else None
                fn.variables.append((name, type_text))
        return fn

    def _parse_struct(self, node, source: bytes) -> StructDecl:
        struct = StructDecl(name=self._get_name(node, source) or "unknown")
        body = node.child_by_field_name("body")
        # ordered_field_declaration_list (tuple structs) has no names
        if body is not None and body.type == "field_declaration_list":
            for field in body.named_children:
                if field.type == "field_declaration":
                    name = self._get_name(field, source)
                    if name:
                        struct.fields.append(name)
        return struct

    def _parse_trait(self, node, source: bytes) -> TraitDecl:
        return TraitDecl(
            name=self._get_name(node, source) or "unknown",
            methods=self._function_names(
                node.child_by_field_name("body"), source,
                kinds=("function_item", "function_signature_item"),
            ),
        )

    def _parse_enum(self, node, source: bytes) -> EnumDecl:
        enum = EnumDecl(name=self._get_name(node, source) or "unknown")
        body = node.child_by_field_name("body")
        if body is not None:
            for variant in body.named_children:
                if variant.type == "enum_variant":
                    name = self._get_name(variant, source)
                    if name:
                        enum.variants.append(name)
        return enum

    def _parse_impl(self, node, source: bytes) -> ImplDecl | None:
        self_type = node.child_by_field_name("type")
        # Only bare identifiers: Foo<T>, a::Foo, &Foo are dropped
        if self_type is None or self_type.type != "type_identifier":
            return None

        trait = node.child_by_field_name("trait")
        trait_name = self._last_path_segment(trait, source) if trait is not None else None

        return ImplDecl(
            for_type=node_text(self_type, source),
            trait_name=trait_name,
            methods=self._function_names(node.child_by_field_name("body"), source),
        )

    def _parse_items(self, node, source: bytes, snapshot: Snapshot,
                     top_level: bool = True) -> None:
        """Parse item-level children of a node (file root or inline mod body)."""
        for child in node.named_children:
            if child.type == "function_item":
                snapshot.functions.append(self._parse_function(child, source))

            elif child.type == "struct_item":
                snapshot.structs.append(self._parse_struct(child, source))

            elif child.type == "trait_item":
                snapshot.traits.append(self._parse_trait(child, source))

            elif child.type == "enum_item":
                snapshot.enums.append(self._parse_enum(child, source))

            elif child.type == "impl_item":
                impl = self._parse_impl(child, source)
                if impl is not None:
                    snapshot.impls.append(impl)

            elif child.type == "mod_item":
                body = child.child_by_field_name("body")
                if body is not None:
                    # Inline module: its items live in this file
                    self._parse_items(body, source, snapshot, top_level=False)
                elif top_level:
                    name = self._get_name(child, source)
                    if name:
                        snapshot.submodule_declarations.append(name)

    # ── Public API ──────────────────────────────────────────────────────

    def parse(self, source: bytes):
        """Parse source bytes, returning the tree or None on a syntax error."""
        tree = self._parser.parse(source)
        if tree.root_node.has_error:
            return None
        return tree

    def extract(self, tree, source: bytes, path: str) -> Snapshot:
        """Walk a parsed tree once, then fold impl methods into their types."""
        snapshot = Snapshot(path=path)
        self._parse_items(tree.root_node, source, snapshot)
        return snapshot.merge_impls()

    def parse_snapshot(self, source: bytes, path: str) -> Snapshot | None:
        """Parse and extract in one step. Returns None if the source is invalid."""
        tree = self.parse(source)
        if tree is None:
            return None
        return self.extract(tree, source, path)
