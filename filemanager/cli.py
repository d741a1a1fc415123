# filemanager/cli.py
from typing import Optional

try:
    import readline
except Exception:
    readline = None

from .commands import COMMANDS, CommandsExecutor, InvalidInput
from .sandbox import PathSandbox
from .utils import LOGS_DIR, configure_file_logging, log_failure, log_info

DEFAULT_USERNAME = "User-default-name"
PROMPT = "> "


class FileManagerCLI:
    def __init__(self, username: str = DEFAULT_USERNAME, home: Optional[str] = None,
                 log_dir=LOGS_DIR):
        configure_file_logging(log_dir)
        self.username = username
        self.sandbox = PathSandbox(home)
        self.executor = CommandsExecutor(self.sandbox)
        if readline:
            self._configure_readline()

    def _configure_readline(self):
        readline.set_completer_delims(" \t\n")
        try:
            readline.parse_and_bind("tab: complete")
        except Exception:
            pass
        readline.set_completer(self._completer)

    def _completer(self, text, state):
        try:
            buf = readline.get_line_buffer()
        except Exception:
            buf = ""
        if len(buf.split()) <= 1 and not buf.endswith(" "):
            options = [c for c in COMMANDS if c.startswith(text)]
        else:
            options = self._path_completions(text)
        options = sorted(set(options))
        return options[state] if state < len(options) else None

    def _path_completions(self, text):
        cwd = self.sandbox.cwd
        candidates = []
        try:
            for p in cwd.iterdir():
                if p.name.startswith(text):
                    candidates.append(p.name + "/" if p.is_dir() else p.name)
        except OSError:
            pass
        return candidates

    def report_cwd(self):
        print(f"You are currently in {self.sandbox.cwd}")

    def execute_line(self, line: str):
        """Run one input line; raises EOFError when the session should end."""
        tokens = line.split()
        if not tokens:
            return
        log_info(f"CMD: {line.strip()} | cwd: {self.sandbox.cwd}")
        cmd, args = tokens[0], tokens[1:]
        try:
            entry = COMMANDS.get(cmd)
            if entry is None:
                raise InvalidInput(f"unknown command: {cmd}")
            if len(args) != entry.arity:
                raise InvalidInput(f"{cmd}: expected {entry.arity} argument(s), usage: {entry.usage}")
            for i in entry.path_args:
                args[i] = self.sandbox.resolve(args[i])
            getattr(self.executor, entry.method)(args)
        except EOFError:
            raise
        except InvalidInput as e:
            log_info(f"invalid input: {e}")
            print("Invalid input")
        except Exception as e:
            log_failure(f"{cmd} failed", e)
            print("Operation failed")
        self.report_cwd()

    def farewell(self):
        print(f"Thank you for using File Manager, {self.username}, goodbye!")

    def run(self):
        print(f"Welcome to the File Manager, {self.username}!")
        self.report_cwd()
        while True:
            try:
                line = input(PROMPT)
                self.execute_line(line)
            except KeyboardInterrupt:
                print()
                break
            except EOFError:
                break
        log_info(f"session ended for {self.username}")
        self.farewell()
