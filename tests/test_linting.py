"""Tests for rule-based lints over snapshots."""

import pytest

from furnace.config import ComplexityLints, LintConfig, NamingLints
from furnace.linting import is_pascal_case, is_snake_case, lint_snapshots
from furnace.parsers.models import EnumDecl, FunctionDecl, Snapshot, StructDecl


@pytest.fixture
def snapshot():
    return Snapshot(
        path="src/lib.rs",
        functions=[
            FunctionDecl("process", ["a", "b", "c"], [("tmp", None), ("Total", "u32")]),
            FunctionDecl("DoThing", [], []),
        ],
        structs=[
            StructDecl("config", ["host", "port", "user"]),
            StructDecl("Server", ["addr"]),
        ],
        enums=[EnumDecl("mode", ["On", "Off"])],
    )


def _rules(warnings):
    return [w.rule for w in warnings]


def test_default_config_reports_nothing(snapshot):
    assert lint_snapshots([snapshot], LintConfig()) == []


def test_max_args(snapshot):
    config = LintConfig(complexity=ComplexityLints(max_args=2))
    warnings = lint_snapshots([snapshot], config)
    assert _rules(warnings) == ["max_args"]
    assert str(warnings[0]) == (
        "Warning: Function 'process' in 'src/lib.rs' has 3 arguments (max 2 recommended)"
    )


def test_max_fields(snapshot):
    config = LintConfig(complexity=ComplexityLints(max_fields=2))
    warnings = lint_snapshots([snapshot], config)
    assert _rules(warnings) == ["max_fields"]
    assert "Struct 'config'" in warnings[0].message


def test_naming_rules(snapshot):
    config = LintConfig(naming=NamingLints(
        enforce_snake_case_functions=True,
        enforce_snake_case_variables=True,
        enforce_pascal_case_types=True,
    ))
    warnings = lint_snapshots([snapshot], config)
    assert _rules(warnings) == [
        "snake_case_functions",
        "snake_case_variables",
        "pascal_case_types",
        "pascal_case_types",
    ]
    assert "'DoThing'" in warnings[0].message
    assert "'Total'" in warnings[1].message
    assert "Struct 'config'" in warnings[2].message
    assert "Enum 'mode'" in warnings[3].message


def test_discouraged_names(snapshot):
    config = LintConfig(naming=NamingLints(discouraged_names=["tmp"]))
    warnings = lint_snapshots([snapshot], config)
    assert [w.message for w in warnings] == [
        "Discouraged variable name 'tmp' in function 'process' ('src/lib.rs')"
    ]


def test_master_switch_disables_everything(snapshot):
    config = LintConfig(enabled=False, complexity=ComplexityLints(max_args=0))
    assert lint_snapshots([snapshot], config) == []


@pytest.mark.parametrize("name, expected", [
    ("snake_case", True),
    ("_private", True),
    ("with_2_digits", True),
    ("camelCase", False),
    ("Pascal", False),
])
def test_is_snake_case(name, expected):
    assert is_snake_case(name) is expected


@pytest.mark.parametrize("name, expected", [
    ("Config", True),
    ("config", False),
    ("", False),
])
def test_is_pascal_case(name, expected):
    assert is_pascal_case(name) is expected
