"""Rule-based lints over flattened file snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from .config import LintConfig
from .parsers.models import Snapshot


@dataclass(frozen=True)
class LintWarning:
    rule: str   # e.g. "max_args", "snake_case_functions"
    path: str
    message: str

    def __str__(self) -> str:
        return f"Warning: {self.message}"


def is_snake_case(name: str) -> bool:
    """Lowercase letters, digits and underscores; leading underscores allowed."""
    return all(c.islower() or c.isdigit() or c == "_" for c in name.lstrip("_"))


def is_pascal_case(name: str) -> bool:
    return bool(name) and name[0].isupper()


def _lint_snapshot(snapshot: Snapshot, config: LintConfig) -> list[LintWarning]:
    warnings: list[LintWarning] = []
    path = snapshot.path

    def warn(rule: str, message: str) -> None:
        warnings.append(LintWarning(rule=rule, path=path, message=message))

    max_args = config.complexity.max_args
    if max_args is not None:
        for fn in snapshot.functions:
            if len(fn.args) > max_args:
                warn("max_args",
                     f"Function '{fn.name}' in '{path}' has {len(fn.args)} "
                     f"arguments (max {max_args} recommended)")

    max_fields = config.complexity.max_fields
    if max_fields is not None:
        for struct in snapshot.structs:
            if len(struct.fields) > max_fields:
                warn("max_fields",
                     f"Struct '{struct.name}' in '{path}' has {len(struct.fields)} "
                     f"fields (max {max_fields} recommended)")

    naming = config.naming
    if naming.enforce_snake_case_functions:
        for fn in snapshot.functions:
            if not is_snake_case(fn.name):
                warn("snake_case_functions",
                     f"Function '{fn.name}' in '{path}' should use snake_case")

    if naming.enforce_snake_case_variables:
        for fn in snapshot.functions:
            for var_name, _ in fn.variables:
                if not is_snake_case(var_name):
                    warn("snake_case_variables",
                         f"Variable '{var_name}' in function '{fn.name}' ('{path}') "
                         f"should use snake_case")

    if naming.enforce_pascal_case_types:
        for struct in snapshot.structs:
            if not is_pascal_case(struct.name):
                warn("pascal_case_types",
                     f"Struct '{struct.name}' in '{path}' should use PascalCase")
        for enum in snapshot.enums:
            if not is_pascal_case(enum.name):
                warn("pascal_case_types",
                     f"Enum '{enum.name}' in '{path}' should use PascalCase")

    if naming.discouraged_names:
        discouraged = set(naming.discouraged_names)
        for fn in snapshot.functions:
            for var_name, _ in fn.variables:
                if var_name in discouraged:
                    warn("discouraged_names",
                         f"Discouraged variable name '{var_name}' in function "
                         f"'{fn.name}' ('{path}')")

    return warnings


def lint_snapshots(snapshots: list[Snapshot], config: LintConfig) -> list[LintWarning]:
    """Run every configured lint over the snapshots, in snapshot order."""
    if config.enabled is False:
        return []
    warnings: list[LintWarning] = []
    for snapshot in snapshots:
        warnings.extend(_lint_snapshot(snapshot, config))
    return warnings
