"""Shared fixtures for the file manager tests."""

import pytest

from filemanager.cli import FileManagerCLI


@pytest.fixture
def home_dir(tmp_path):
    """An empty directory standing in for the user's home."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def log_dir(tmp_path):
    return tmp_path / "logs"


@pytest.fixture
def cli(home_dir, log_dir):
    return FileManagerCLI(username="Tester", home=str(home_dir), log_dir=log_dir)


@pytest.fixture
def run_line(cli, capsys):
    """Execute one line and return everything it printed."""

    def _run(line):
        capsys.readouterr()
        cli.execute_line(line)
        return capsys.readouterr().out

    return _run


@pytest.fixture
def cwd_line(cli):
    def _line():
        return f"You are currently in {cli.sandbox.cwd}\n"

    return _line
