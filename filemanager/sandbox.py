# filemanager/sandbox.py
import os
from pathlib import Path
from typing import Optional


class SandboxError(Exception):
    pass


class BoundaryViolation(SandboxError):
    pass


class PathSandbox:
    """Track the session cwd and keep it at or below the home directory."""

    def __init__(self, home: Optional[str] = None):
        if home is None:
            home = Path.home()
        self.home = Path(os.path.abspath(home))
        # session cwd starts at home
        self.cwd = self.home

    def resolve(self, token: str) -> Path:
        """Join token onto the session cwd and normalize (no symlink lookups)."""
        return Path(os.path.normpath(os.path.join(self.cwd, token)))

    def is_within_home(self, path: Path) -> bool:
        try:
            path.relative_to(self.home)
        except ValueError:
            return False
        return True

    def is_really_within_home(self, path: Path) -> bool:
        """Containment after symlinks on both sides are followed."""
        real_home = Path(os.path.realpath(self.home))
        try:
            Path(os.path.realpath(path)).relative_to(real_home)
        except ValueError:
            return False
        return True

    def change_directory(self, token: str):
        target = self.resolve(token)
        if not self.is_within_home(target) or not self.is_really_within_home(target):
            raise BoundaryViolation(f"Access denied: path escapes home: {token}")
        self.cwd = target

    def go_up(self):
        if self.cwd == self.home:
            return
        self.cwd = self.cwd.parent
