"""Structural snapshot models for one parsed Rust source file."""

from dataclasses import dataclass, field


@dataclass
class FunctionDecl:
    name: str
    args: list[str] = field(default_factory=list)
    variables: list[tuple[str, str | None]] = field(default_factory=list)  # (name, declared type)


@dataclass
class StructDecl:
    name: str
    fields: list[str] = field(default_factory=list)   # named fields only
    methods: list[str] = field(default_factory=list)  # filled by Snapshot.merge_impls


@dataclass
class TraitDecl:
    name: str
    methods: list[str] = field(default_factory=list)


@dataclass
class EnumDecl:
    name: str
    variants: list[str] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)


@dataclass
class ImplDecl:
    """An impl block whose self type is a bare identifier."""
    for_type: str
    trait_name: str | None = None  # last path segment, None for inherent impls
    methods: list[str] = field(default_factory=list)


@dataclass
class Snapshot:
    """Top-level declarations extracted from one file."""
    path: str
    functions: list[FunctionDecl] = field(default_factory=list)
    structs: list[StructDecl] = field(default_factory=list)
    traits: list[TraitDecl] = field(default_factory=list)
    enums: list[EnumDecl] = field(default_factory=list)
    impls: list[ImplDecl] = field(default_factory=list)
    submodule_declarations: list[str] = field(default_factory=list)  # `mod x;` items

    def merge_impls(self) -> "Snapshot":
        """Append impl-block methods to the struct or enum they target (mutates self).

        Only types declared in this same file are considered. Structs win over
        enums of the same name, and the first declaration of a name wins.
        """
        owners: dict[str, StructDecl | EnumDecl] = {}
        for decl in [*self.structs, *self.enums]:
            owners.setdefault(decl.name, decl)
        for impl in self.impls:
            owner = owners.get(impl.for_type)
            if owner is not None:
                owner.methods.extend(impl.methods)
        return self
