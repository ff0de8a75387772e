"""Project configuration loaded from ``.furnacerc.toml``.

Example::

    ignore = ["target", "tests/fixtures"]

    [lints]
    enabled = true

    [lints.complexity]
    max_args = 6
    max_fields = 12

    [lints.naming]
    enforce_snake_case_functions = true
    discouraged_names = ["tmp", "foo"]

Every lint is disabled unless configured. Unknown keys are ignored.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .parsers.manifest import load_toml, toml_module

CONFIG_FILENAME = ".furnacerc.toml"


class ConfigError(ValueError):
    """Raised when a configuration file has an invalid shape."""


@dataclass
class ComplexityLints:
    max_args: int | None = None
    max_fields: int | None = None


@dataclass
class NamingLints:
    enforce_snake_case_functions: bool | None = None
    enforce_snake_case_variables: bool | None = None
    enforce_pascal_case_types: bool | None = None
    discouraged_names: list[str] | None = None


@dataclass
class LintConfig:
    enabled: bool | None = True   # master switch
    complexity: ComplexityLints = field(default_factory=ComplexityLints)
    naming: NamingLints = field(default_factory=NamingLints)


@dataclass
class FurnaceConfig:
    lints: LintConfig = field(default_factory=LintConfig)
    ignore: list[str] = field(default_factory=list)  # path substrings


# ── Parsing ───────────────────────────────────────────────────────────


def _table(data: dict, key: str, context: str) -> dict:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"{context}{key}: expected a table, got {type(value).__name__}")
    return value


def _optional(data: dict, key: str, kind: type, context: str) -> Any:
    if key not in data:
        return None
    value = data[key]
    # bool is a subclass of int; `max_args = true` is not a number
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(
            f"{context}{key}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _string_list(data: dict, key: str, context: str) -> list[str] | None:
    value = _optional(data, key, list, context)
    if value is None:
        return None
    if not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{context}{key}: expected a list of strings")
    return value


def parse_config(data: dict) -> FurnaceConfig:
    """Build a FurnaceConfig from a decoded TOML document.

    Raises:
        ConfigError: If a known key has a value of the wrong type.
    """
    lints = _table(data, "lints", "")
    complexity = _table(lints, "complexity", "lints.")
    naming = _table(lints, "naming", "lints.")

    enabled = _optional(lints, "enabled", bool, "lints.")
    return FurnaceConfig(
        lints=LintConfig(
            enabled=True if enabled is None else enabled,
            complexity=ComplexityLints(
                max_args=_optional(complexity, "max_args", int, "lints.complexity."),
                max_fields=_optional(complexity, "max_fields", int, "lints.complexity."),
            ),
            naming=NamingLints(
                enforce_snake_case_functions=_optional(
                    naming, "enforce_snake_case_functions", bool, "lints.naming."),
                enforce_snake_case_variables=_optional(
                    naming, "enforce_snake_case_variables", bool, "lints.naming."),
                enforce_pascal_case_types=_optional(
                    naming, "enforce_pascal_case_types", bool, "lints.naming."),
                discouraged_names=_string_list(naming, "discouraged_names", "lints.naming."),
            ),
        ),
        ignore=_string_list(data, "ignore", "") or [],
    )


def load_config(project_root: str | Path) -> FurnaceConfig:
    """Load ``.furnacerc.toml`` from the project root.

    A missing file gives the default config. A malformed one also gives the
    default config, with a ``UserWarning``.
    """
    config_path = Path(project_root) / CONFIG_FILENAME
    if not config_path.is_file():
        return FurnaceConfig()
    try:
        return parse_config(load_toml(config_path))
    except (OSError, UnicodeDecodeError, toml_module().TOMLDecodeError, ConfigError) as e:
        warnings.warn(f"Failed to parse {CONFIG_FILENAME}: {e}", stacklevel=2)
        return FurnaceConfig()
