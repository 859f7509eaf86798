"""CLI tests for dll-push using click's CliRunner."""

import os
import subprocess

import pytest

from dllpush import push as push_module
from dllpush.cli import main
from dllpush.settings import ApiKey, ProjectConfig, config_path, load_config, save_config
from dllpush.testing import create_tree


class FakeProcesses:
    def __init__(self):
        self.commands = []

    def __call__(self, command, **kwargs):
        self.commands.append(command)
        if command[1] == "--version":
            return subprocess.CompletedProcess(command, 0, stdout="Python 3.11.4\n", stderr="")
        return subprocess.CompletedProcess(command, 0, stdout="Pushed Demo\n", stderr="")


@pytest.fixture
def fake_processes(monkeypatch):
    fake = FakeProcesses()
    monkeypatch.setattr(push_module.subprocess, "run", fake)
    return fake


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    return create_tree(root, {"docassemble-Demo": {"docassemble": {"Demo": {}}}})


@pytest.fixture
def script(tmp_path):
    path = tmp_path / "bin" / push_module.SCRIPT_NAME
    path.parent.mkdir()
    path.write_text("# stand-in\n")
    return str(path)


def _push_args(project, script, *extra):
    return ["--cwd", str(project), "push", "--script", script, "--python", "python3", *extra]


def _arg_after(command, flag):
    return command[command.index(flag) + 1]


# ---------------------------------------------------------------------------
# ls
# ---------------------------------------------------------------------------

class TestLs:

    def test_depth_two(self, runner, small_tree):
        result = runner.invoke(main, ["ls", str(small_tree), "--depth", "2"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "a", "b", os.path.join("a", "x"), os.path.join("a", "y"),
        ]

    def test_files_base_names(self, runner, file_tree):
        result = runner.invoke(main, ["ls", str(file_tree), "--type", "file", "--base-only"])
        assert result.exit_code == 0, result.output
        assert sorted(result.output.splitlines()) == ["f1.txt", "f2.txt"]

    def test_root_line_and_exclude(self, runner, small_tree):
        result = runner.invoke(main, [
            "ls", str(small_tree), "--include-root", "--root-label", "ROOT",
            "--exclude", "a",
        ])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["ROOT", "b"]

    def test_defaults_to_cwd_option(self, runner, small_tree):
        result = runner.invoke(main, ["--cwd", str(small_tree), "ls", "--depth", "1"])
        assert result.output.splitlines() == ["a", "b"]

    def test_rejects_zero_depth(self, runner, small_tree):
        result = runner.invoke(main, ["ls", str(small_tree), "--depth", "0"])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# push
# ---------------------------------------------------------------------------

class TestPush:

    def test_non_interactive(self, runner, project, script, fake_processes):
        save_config(ProjectConfig({"dev_api_key": ApiKey("abc123")}, ["Demo"]), str(project))
        folder = str(project / "docassemble-Demo")

        result = runner.invoke(main, _push_args(
            project, script, "--project", "Demo", "--key-name", "dev_api_key",
            "--folder", folder,
        ))

        assert result.exit_code == 0, result.output
        assert "Checking python installation" in result.output
        assert "Pushed Demo" in result.output
        command = fake_processes.commands[1]
        assert _arg_after(command, "--project") == "Demo"
        assert _arg_after(command, "--package") == folder
        assert _arg_after(command, "--secret") == "dev_api_key"

    def test_unknown_key_name(self, runner, project, script, fake_processes):
        save_config(ProjectConfig({"dev_api_key": ApiKey("abc123")}, ["Demo"]), str(project))
        result = runner.invoke(main, _push_args(
            project, script, "--project", "Demo", "--key-name", "missing",
        ))
        assert result.exit_code == 2
        assert fake_processes.commands == []

    def test_invalid_project_option(self, runner, project, script, fake_processes):
        save_config(ProjectConfig({"dev_api_key": ApiKey("abc123")}, ["Demo"]), str(project))
        result = runner.invoke(main, _push_args(project, script, "--project", "bad name"))
        assert result.exit_code == 2

    def test_malformed_config(self, runner, project, script, fake_processes):
        os.makedirs(os.path.dirname(config_path(str(project))))
        with open(config_path(str(project)), "w", encoding="utf-8") as f:
            f.write("{not json")

        result = runner.invoke(main, _push_args(project, script))
        assert result.exit_code == 1
        assert "Could not read" in result.output

    def test_wizard_without_config(self, runner, project, script, fake_processes):
        # decline config, search "Demo" and pick it, type a key, dev root,
        # list all folders and pick docassemble-Demo
        answers = "n\nDemo\n1\nabc123\n1\n\n2\n"
        result = runner.invoke(main, _push_args(project, script), input=answers)

        assert result.exit_code == 0, result.output
        assert load_config(str(project)) is None
        command = fake_processes.commands[1]
        assert _arg_after(command, "--project") == "Demo"
        assert _arg_after(command, "--secret") == "dll_api_key"
        assert _arg_after(command, "--package") == os.path.join(str(project), "docassemble-Demo")

    def test_wizard_creates_config(self, runner, project, script, fake_processes):
        # create config: key, default name, dev root, no more keys,
        # project "Demo" picked from matches, no more projects,
        # use the only key, push the current folder
        answers = "y\nabc123\n\n1\nn\nDemo\n1\nn\n1\ny\n\n1\n"
        result = runner.invoke(main, _push_args(project, script), input=answers)

        assert result.exit_code == 0, result.output
        config = load_config(str(project))
        assert config.api_key_names == ["dev_api_key"]
        assert config.playground_projects == ["Demo"]
        assert "dll_config/**" in (project / ".gitignore").read_text()

        command = fake_processes.commands[1]
        assert _arg_after(command, "--secret") == "dev_api_key"
        assert _arg_after(command, "--package") == str(project)

    def test_wizard_with_stored_choices(self, runner, project, script, fake_processes):
        save_config(ProjectConfig(
            {"dev_api_key": ApiKey("abc123"), "production_api_key": ApiKey("xyz")},
            ["Demo", "Other"],
        ), str(project))

        # second project, first key, blank search, current folder
        result = runner.invoke(main, _push_args(project, script), input="2\n1\n\n1\n")

        assert result.exit_code == 0, result.output
        command = fake_processes.commands[1]
        assert _arg_after(command, "--project") == "Other"
        assert _arg_after(command, "--secret") == "dev_api_key"
        assert _arg_after(command, "--package") == str(project)
