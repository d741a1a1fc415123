"""Tests for the interactive loop: startup, termination and completion."""

import pytest

from filemanager.cli import DEFAULT_USERNAME, FileManagerCLI


def feed(monkeypatch, lines):
    """Replace input() with a scripted session that ends in EOF."""
    remaining = iter(lines)

    def fake_input(prompt=""):
        try:
            line = next(remaining)
        except StopIteration:
            raise EOFError
        if isinstance(line, BaseException):
            raise line
        return line

    monkeypatch.setattr("builtins.input", fake_input)


class TestRun:
    def test_banner_and_farewell(self, cli, home_dir, monkeypatch, capsys):
        feed(monkeypatch, [".exit"])
        cli.run()
        out = capsys.readouterr().out
        assert out == (
            "Welcome to the File Manager, Tester!\n"
            f"You are currently in {home_dir}\n"
            "Thank you for using File Manager, Tester, goodbye!\n"
        )

    def test_end_of_input_says_goodbye(self, cli, monkeypatch, capsys):
        feed(monkeypatch, [])
        cli.run()
        assert capsys.readouterr().out.endswith("Thank you for using File Manager, Tester, goodbye!\n")

    def test_interrupt_says_goodbye(self, cli, monkeypatch, capsys):
        feed(monkeypatch, ["ls", KeyboardInterrupt(), "add never.txt"])
        cli.run()
        out = capsys.readouterr().out
        assert out.endswith("Thank you for using File Manager, Tester, goodbye!\n")
        assert not (cli.sandbox.home / "never.txt").exists()

    def test_interrupt_during_command_says_goodbye(self, cli, home_dir, monkeypatch, capsys):
        (home_dir / "big.bin").write_bytes(b"data")

        def interrupted(args):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli.executor, "hash_file", interrupted)
        feed(monkeypatch, ["hash big.bin", "add never.txt"])
        cli.run()
        out = capsys.readouterr().out
        assert out.endswith("Thank you for using File Manager, Tester, goodbye!\n")
        assert not (home_dir / "never.txt").exists()

    def test_loop_survives_errors(self, cli, home_dir, monkeypatch, capsys):
        feed(monkeypatch, ["foo", "cat missing.txt", "cd ..", "add a.txt", ".exit", "add b.txt"])
        cli.run()
        out = capsys.readouterr().out
        assert "Invalid input\n" in out
        assert out.count("Operation failed\n") == 2
        assert (home_dir / "a.txt").exists()
        assert not (home_dir / "b.txt").exists()
        # banner + one report per command before .exit
        assert out.count("You are currently in") == 5

    def test_exit_with_argument_keeps_running(self, cli, home_dir, monkeypatch, capsys):
        feed(monkeypatch, [".exit now", "add still.txt"])
        cli.run()
        assert (home_dir / "still.txt").exists()

    def test_default_username(self, home_dir, log_dir, monkeypatch, capsys):
        feed(monkeypatch, [])
        FileManagerCLI(home=str(home_dir), log_dir=log_dir).run()
        out = capsys.readouterr().out
        assert out.startswith(f"Welcome to the File Manager, {DEFAULT_USERNAME}!\n")
        assert f"Thank you for using File Manager, {DEFAULT_USERNAME}, goodbye!" in out

    def test_log_file_is_created(self, cli, log_dir, monkeypatch):
        feed(monkeypatch, ["ls"])
        cli.run()
        text = (log_dir / "commands.log").read_text(encoding="utf-8")
        assert "CMD: ls" in text
        assert "session ended for Tester" in text


class TestCompletion:
    def test_path_completions(self, cli, home_dir):
        (home_dir / "docs").mkdir()
        (home_dir / "data.csv").write_text("")
        (home_dir / "other.txt").write_text("")
        assert sorted(cli._path_completions("d")) == ["data.csv", "docs/"]

    def test_path_completions_follow_cwd(self, cli, home_dir):
        (home_dir / "sub").mkdir()
        (home_dir / "sub" / "inner.txt").write_text("")
        cli.execute_line("cd sub")
        assert cli._path_completions("") == ["inner.txt"]

    def test_command_name_completion(self, cli, monkeypatch):
        readline = pytest.importorskip("readline")
        monkeypatch.setattr(readline, "get_line_buffer", lambda: "c")
        options = []
        state = 0
        while True:
            option = cli._completer("c", state)
            if option is None:
                break
            options.append(option)
            state += 1
        assert options == ["cat", "cd", "compress", "cp"]


def test_log_setup_failure_falls_back_to_null_handler(tmp_path, home_dir, monkeypatch, capsys):
    import logging

    blocked = tmp_path / "blocked"
    blocked.write_text("")
    feed(monkeypatch, ["ls"])
    cli = FileManagerCLI(username="Tester", home=str(home_dir), log_dir=blocked)
    cli.run()
    handlers = logging.getLogger("filemanager").handlers
    assert [type(h) for h in handlers] == [logging.NullHandler]
    assert "Folders:" in capsys.readouterr().out
