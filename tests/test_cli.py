"""
Tests for the CLI — arguments, flags, output and exit codes.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from gomodpin.main import cli

GO_MOD = """\
    module example.com/test

    go 1.23.2

    require (
    \tgithub.com/pkg/errors v0.9.1
    \tgithub.com/DataDog/dd-trace-go/v2 v2.0.0
    \tgolang.org/x/sys v0.16.0
    )
"""


class TestCLIArguments:
    """Usage errors exit 2, validation errors exit 1."""

    def test_missing_argument(self):
        runner = CliRunner()
        result = runner.invoke(cli, [])
        assert result.exit_code == 2

    def test_too_many_arguments(self, make_go_mod):
        path = make_go_mod(GO_MOD)
        runner = CliRunner()
        result = runner.invoke(cli, [str(path), str(path)])
        assert result.exit_code == 2

    def test_directory_argument(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [str(tmp_path)])
        assert result.exit_code == 1
        assert "directory" in result.output

    def test_wrong_filename(self, tmp_path: Path):
        other = tmp_path / "go.work"
        other.write_text("go 1.22\n")
        runner = CliRunner()
        result = runner.invoke(cli, [str(other)])
        assert result.exit_code == 1
        assert "go.work" in result.output

    def test_parse_error(self, make_go_mod):
        path = make_go_mod("module example.com/test\nrequire (\n")
        runner = CliRunner()
        result = runner.invoke(cli, [str(path)])
        assert result.exit_code == 1
        assert "block is not closed" in result.output


class TestCLIPin:
    """End-to-end runs through the CLI."""

    def test_pins_and_reports(self, make_go_mod):
        path = make_go_mod(GO_MOD)
        runner = CliRunner()
        result = runner.invoke(cli, [str(path)])
        assert result.exit_code == 0, result.output
        assert "Appended 2 replacements" in result.output
        assert "go.mod.old" in result.output
        content = path.read_text()
        assert "\tgolang.org/x/sys => golang.org/x/sys v0.16.0\n" in content
        assert "dd-trace-go/v2 => " not in content

    def test_repeated_exclude_flags(self, make_go_mod):
        path = make_go_mod(GO_MOD)
        runner = CliRunner()
        result = runner.invoke(cli, [
            "--exclude", "github.com/pkg/errors",
            "--exclude", "golang.org/x/sys",
            str(path),
        ])
        assert result.exit_code == 0
        assert "Nothing to pin" in result.output
        assert "prevent module upgrades" not in path.read_text()
        assert (path.parent / "go.mod.old").is_file()

    def test_no_default_excludes(self, make_go_mod):
        path = make_go_mod(GO_MOD)
        runner = CliRunner()
        result = runner.invoke(cli, ["--no-default-excludes", str(path)])
        assert result.exit_code == 0
        assert "Appended 3 replacements" in result.output

    def test_verbose_lists_entries(self, make_go_mod):
        path = make_go_mod(GO_MOD)
        runner = CliRunner()
        result = runner.invoke(cli, ["-v", str(path)])
        assert result.exit_code == 0
        assert "• github.com/pkg/errors v0.9.1" in result.output

    def test_quiet(self, make_go_mod):
        path = make_go_mod(GO_MOD)
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", str(path)])
        assert result.exit_code == 0
        assert "Appended" not in result.output

    def test_json_output(self, make_go_mod):
        path = make_go_mod(GO_MOD)
        runner = CliRunner()
        result = runner.invoke(cli, ["--json", str(path)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["count"] == 2
        assert [p["path"] for p in data["pinned"]] == [
            "github.com/pkg/errors",
            "golang.org/x/sys",
        ]
        assert data["excluded"] == ["github.com/DataDog/dd-trace-go/v2"]

    def test_json_error_exits_nonzero(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--json", str(tmp_path / "go.mod")])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert "error accessing path" in data["error"]


class TestCLIConfig:
    """Settings file discovery and --config."""

    def test_autodetected_config(self, make_go_mod):
        path = make_go_mod(GO_MOD)
        (path.parent / ".gomodpin.yml").write_text("exclude:\n  - golang.org/x/sys\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--json", str(path)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["count"] == 1

    def test_explicit_config(self, make_go_mod, tmp_path: Path):
        path = make_go_mod(GO_MOD)
        config = tmp_path / "pin.yml"
        config.write_text("use_default_excludes: false\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "--json", str(path)])
        assert result.exit_code == 0
        assert json.loads(result.output)["count"] == 3

    def test_missing_explicit_config(self, make_go_mod, tmp_path: Path):
        path = make_go_mod(GO_MOD)
        original = path.read_bytes()
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(tmp_path / "absent.yml"), str(path)])
        assert result.exit_code == 1
        assert "Config file not found" in result.output
        assert path.read_bytes() == original
        assert not (path.parent / "go.mod.old").exists()
