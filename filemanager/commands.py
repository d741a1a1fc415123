# filemanager/commands.py
import os
import shutil
from typing import Dict, NamedTuple, Tuple

import brotli

from .sandbox import PathSandbox
from .utils import (
    architecture,
    compress_file,
    cpu_info,
    current_username,
    decompress_file,
    eol_repr,
    home_directory,
    log_failure,
    log_warning,
    sha256_file,
)


class InvalidInput(Exception):
    pass


class CommandSpec(NamedTuple):
    arity: int
    path_args: Tuple[int, ...]
    method: str
    usage: str


COMMANDS: Dict[str, CommandSpec] = {
    ".exit": CommandSpec(0, (), "quit_session", ".exit"),
    "up": CommandSpec(0, (), "up", "up"),
    "cd": CommandSpec(1, (0,), "cd", "cd PATH"),
    "ls": CommandSpec(0, (), "ls", "ls"),
    "cat": CommandSpec(1, (0,), "cat", "cat FILE"),
    "add": CommandSpec(1, (0,), "add", "add FILE"),
    "rn": CommandSpec(2, (0, 1), "rn", "rn OLD NEW"),
    "cp": CommandSpec(2, (0, 1), "cp", "cp SRC DEST_DIR"),
    "mv": CommandSpec(2, (0, 1), "mv", "mv SRC DEST_DIR"),
    "rm": CommandSpec(1, (0,), "rm", "rm FILE"),
    "os": CommandSpec(1, (), "os_info", "os --EOL|--cpus|--homedir|--username|--architecture"),
    "hash": CommandSpec(1, (0,), "hash_file", "hash FILE"),
    "compress": CommandSpec(2, (0, 1), "compress", "compress SRC DEST"),
    "decompress": CommandSpec(2, (0, 1), "decompress", "decompress SRC DEST"),
}

# brotli reports corrupt or truncated streams through brotli.error
CODEC_ERRORS = (OSError, brotli.error)


def format_cpus() -> str:
    cpus = cpu_info()
    lines = [f"Overall amount of CPUS: {len(cpus)}"]
    for i, cpu in enumerate(cpus, start=1):
        lines.append(f"CPU {i}: {cpu['model']}, {cpu['speed']:.2f} GHz")
    return "\n".join(lines)


OS_FLAGS = {
    "--EOL": eol_repr,
    "--cpus": format_cpus,
    "--homedir": home_directory,
    "--username": current_username,
    "--architecture": architecture,
}


class CommandsExecutor:
    """Implements the file manager commands on top of a PathSandbox.

    Path arguments arrive already resolved to absolute paths; everything
    else is passed through as the raw token.
    """

    def __init__(self, sandbox: PathSandbox):
        self.sandbox = sandbox

    def quit_session(self, args):
        raise EOFError

    # ---------- Navigation ----------
    def up(self, args):
        self.sandbox.go_up()

    def cd(self, args):
        target = args[0]
        if not target.is_dir():
            raise NotADirectoryError(f"cd: no such directory: {target}")
        self.sandbox.change_directory(str(target))

    def ls(self, args):
        folders = []
        files = []
        with os.scandir(self.sandbox.cwd) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    folders.append(entry.name)
                elif entry.is_file(follow_symlinks=False):
                    files.append(entry.name)
        print("Folders:")
        for name in sorted(folders):
            print(name)
        print("Files:")
        for name in sorted(files):
            print(name)

    # ---------- Basic FS ops ----------
    def cat(self, args):
        print(args[0].read_text(encoding="utf-8", errors="replace"))

    def add(self, args):
        with open(args[0], "w", encoding="utf-8"):
            pass

    def rn(self, args):
        old, new = args
        os.rename(old, new)

    def rm(self, args):
        os.remove(args[0])

    # ---------- Copy / Move ----------
    def cp(self, args):
        src, dest_dir = args
        shutil.copyfile(src, dest_dir / src.name)

    def mv(self, args):
        """Copy src into dest_dir, then delete src.

        Not atomic: if the delete fails the copy stays behind and both files
        exist.
        """
        src, dest_dir = args
        dest = dest_dir / src.name
        shutil.copyfile(src, dest)
        try:
            os.remove(src)
        except OSError:
            log_warning(f"mv: copied {src} to {dest} but could not remove the source; both files remain")
            raise

    # ---------- OS introspection ----------
    def os_info(self, args):
        query = OS_FLAGS.get(args[0])
        if query is None:
            raise InvalidInput(f"os: unknown flag {args[0]}")
        print(query())

    # ---------- Streams ----------
    def hash_file(self, args):
        print(sha256_file(args[0]))

    def compress(self, args):
        src, dest = args
        self._transform("compress", compress_file, src, dest, "File compressed successfully")

    def decompress(self, args):
        src, dest = args
        self._transform("decompress", decompress_file, src, dest, "File decompressed successfully")

    def _transform(self, name, codec, src, dest, done_message):
        # writing dest would truncate src before it is read
        if os.path.realpath(src) == os.path.realpath(dest):
            log_warning(f"{name}: {src} is both source and destination")
            print("Operation failed")
            return
        try:
            codec(src, dest)
        except CODEC_ERRORS as e:
            log_failure(f"{name} {src} -> {dest}", e)
            print("Operation failed")
            return
        print(done_message)
