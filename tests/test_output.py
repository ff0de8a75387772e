"""Tests for text rendering of snapshots."""

import pytest

from furnace.output import (
    ColorMode, Detail, Layout, OutputRenderer, OutputStyle, PRESETS, SymbolSet,
)
from furnace.parsers.models import EnumDecl, FunctionDecl, Snapshot, StructDecl


@pytest.fixture
def sample():
    return [Snapshot(
        path="./src/example.rs",
        functions=[
            FunctionDecl("calculate", ["x", "y"], [("result", "i32"), ("temp", None)]),
            FunctionDecl("process_data", ["data"], []),
        ],
        structs=[StructDecl("Config", ["host", "port"], ["new", "validate"])],
        enums=[EnumDecl("Status", ["Active", "Inactive"], ["is_active"])],
    )]


def render(snapshots, preset="plain", **overrides):
    style = OutputStyle.preset(preset).with_overrides(**overrides)
    return OutputRenderer(style).render(snapshots)


class TestLayouts:
    def test_plain_output(self, sample):
        output = render(sample)
        assert "./src/example.rs" in output
        assert "  Functions:\n" in output
        assert "    calculate (args: 2)\n" in output
        assert "    Config (fields: 2)\n" in output
        assert "    Status (variants: 2)\n" in output

    def test_tree_output(self, sample):
        output = render(sample, "tree", color="none")
        assert output.startswith("├── 📄 ./src/example.rs\n")
        assert "│    - calculate: args [x, y]\n" in output
        assert "Config: fields [host, port]" in output

    def test_ascii_tree_symbols(self, sample):
        output = render(sample, "tree", color="none", symbols="ascii")
        assert output.startswith("|-- ")

    def test_grid_output(self, sample):
        output = render(sample, "grid")
        lines = output.splitlines()
        assert lines[1] == "| File                 | Functions| Structs  | Enums    |"
        assert lines[3] == "| example.rs           | 2        | 1        | 1        |"

    def test_grid_truncates_long_names(self):
        snap = Snapshot(path="src/a_really_long_module_name.rs")
        output = render([snap], "grid")
        assert "| a_really_long_mod... |" in output

    def test_compact_output(self, sample):
        assert render(sample, "compact") == "example.rs: f=2 s=1 e=1\n"

    def test_empty_input(self):
        assert render([]) == ""
        assert render([], "compact") == ""


class TestDetailAndColor:
    def test_minimal_names_only(self, sample):
        output = render(sample, "minimal")
        assert "    calculate\n" in output
        assert "args" not in output

    def test_verbose_includes_variables_and_methods(self, sample):
        output = render(sample, "verbose", color="none")
        assert "calculate: args [x, y], variables [result, temp]" in output
        assert "Config: fields [host, port], methods [new, validate]" in output
        assert "Status: variants [Active, Inactive], methods [is_active]" in output

    def test_standard_color_uses_ansi(self, sample):
        assert "\x1b[" in render(sample, "tree")

    def test_badges(self, sample):
        output = render(sample, "badges")
        assert "📁 ./src/example.rs" in output
        assert "🔧 Functions:" in output


class TestStyles:
    def test_presets(self):
        assert PRESETS["plain"] == OutputStyle()
        assert OutputStyle.preset("grid").layout is Layout.GRID
        assert OutputStyle.preset("verbose").detail is Detail.VERBOSE

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown output preset"):
            OutputStyle.preset("fancy")

    def test_overrides(self):
        style = OutputStyle().with_overrides(layout="tree", symbols="unicode")
        assert style == OutputStyle(Layout.TREE, Detail.STANDARD,
                                    ColorMode.NONE, SymbolSet.UNICODE)
