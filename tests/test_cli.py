"""Tests for the ``furnace`` command line."""

import json

import pytest
from click.testing import CliRunner

from furnace.cli import main


@pytest.fixture
def project(make_project, package_manifest):
    return make_project({
        "Cargo.toml": package_manifest("demo"),
        "src/lib.rs": """
            mod util;

            pub fn run(a: i32, b: i32, c: i32) {
                let total = a + b + c;
            }
        """,
        "src/util.rs": """
            pub struct Point { x: f64, y: f64 }
            pub enum Axis { X, Y }
        """,
    })


def invoke(*args):
    result = CliRunner().invoke(main, [str(a) for a in args])
    assert result.exit_code == 0, result.output
    return result.output


def test_default_text_output(project):
    output = invoke(project)
    assert "lib.rs" in output
    assert "    run (args: 3)" in output
    assert "    Point (fields: 2)" in output
    assert "Linting Warnings" not in output


def test_compact_preset(project):
    output = invoke(project, "--compact")
    assert "lib.rs: f=1 s=0 e=0" in output
    assert "util.rs: f=0 s=1 e=1" in output


def test_layout_override(project):
    output = invoke(project, "--plain", "--layout", "grid")
    assert "| File " in output


def test_json_format(project):
    data = json.loads(invoke(project, "--format", "json"))
    assert [s["functions"][0]["name"] for s in data if s["functions"]] == ["run"]
    assert data[1]["structs"][0]["fields"] == ["x", "y"]


def test_graph_format(project):
    data = json.loads(invoke(project, "--format", "graph"))
    crate = data["crates"][0]
    assert crate["name"] == "demo"
    assert crate["root_module"]["name"] == "crate"
    assert crate["root_module"]["submodules"][0]["name"] == "util"


def test_lint_warnings_from_config(project):
    (project / ".furnacerc.toml").write_text("[lints.complexity]\nmax_args = 2\n")
    output = invoke(project)
    assert "Linting Warnings:" in output
    assert "Function 'run'" in output


def test_ignore_from_config(project):
    (project / ".furnacerc.toml").write_text('ignore = ["util"]\n')
    output = invoke(project, "--compact")
    assert "util.rs" not in output


def test_output_file_is_uncolored(project, tmp_path):
    out = tmp_path / "report.txt"
    output = invoke(project, "--tree", "--output", out)
    assert f"Output saved to {out}" in output
    text = out.read_text(encoding="utf8")
    assert "lib.rs" in text
    assert "\x1b[" not in text


def test_tables(project, tmp_path):
    out_dir = tmp_path / "tables"
    invoke(project, "--tables", out_dir)
    assert (out_dir / "modules.csv").is_file()
    assert (out_dir / "structs.csv").is_file()


def test_empty_directory(tmp_path):
    assert invoke(tmp_path, "--compact").strip() == ""


def test_missing_path_fails(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / "nope")])
    assert result.exit_code != 0


def test_path_only_uses_plain_preset(project):
    result = CliRunner().invoke(main, [str(project)])
    assert result.exit_code == 0, result.output
    assert "  Functions:\n" in result.output
    assert "\x1b[" not in result.output
