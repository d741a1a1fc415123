# filemanager/utils.py
import getpass
import hashlib
import json
import logging
import os
import platform
from pathlib import Path
from typing import Dict, List, Optional

import brotli
import psutil

LOGS_DIR = "logs"
LOG_FILE_NAME = "commands.log"
LOGGER_NAME = "filemanager"
CHUNK_SIZE = 64 * 1024
CPUINFO_PATH = "/proc/cpuinfo"


def configure_file_logging(log_dir=LOGS_DIR) -> Optional[Path]:
    """Send the filemanager logger to <log_dir>/commands.log.

    Returns the log file, or None when it cannot be opened; the session then
    runs without a log.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    # remove handlers left over from a previous session
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    log_file = Path(log_dir) / LOG_FILE_NAME
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        logger.addHandler(logging.NullHandler())
        return None
    fh.setLevel(logging.INFO)
    fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    logger.addHandler(fh)
    return log_file


def log_info(msg: str):
    logging.getLogger(LOGGER_NAME).info(msg)


def log_warning(msg: str):
    logging.getLogger(LOGGER_NAME).warning(msg)


def log_failure(msg: str, exc: BaseException):
    logging.getLogger(LOGGER_NAME).error("%s: %s: %s", msg, type(exc).__name__, exc)


# ---------- Streams ----------
def sha256_file(path: Path) -> str:
    """Hex SHA-256 of a file, read in CHUNK_SIZE blocks."""
    digest = hashlib.sha256()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def compress_file(src: Path, dest: Path):
    compressor = brotli.Compressor()
    with open(src, "rb") as fin, open(dest, "wb") as fout:
        for chunk in iter(lambda: fin.read(CHUNK_SIZE), b""):
            fout.write(compressor.process(chunk))
        fout.write(compressor.finish())


def decompress_file(src: Path, dest: Path):
    decompressor = brotli.Decompressor()
    with open(src, "rb") as fin, open(dest, "wb") as fout:
        for chunk in iter(lambda: fin.read(CHUNK_SIZE), b""):
            fout.write(decompressor.process(chunk))
    if not decompressor.is_finished():
        raise brotli.error("stream ended before the end-of-stream marker")


# ---------- OS introspection ----------
def eol_repr() -> str:
    """Line terminator as a quoted, escaped literal, e.g. "\\n"."""
    return json.dumps(os.linesep)


def cpu_model() -> str:
    # platform.processor() is empty on most Linux systems
    try:
        with open(CPUINFO_PATH, encoding="utf-8", errors="replace") as fh:
            for line in fh:
                key, _, value = line.partition(":")
                if key.strip() == "model name" and value.strip():
                    return value.strip()
    except OSError:
        pass
    return platform.processor() or platform.machine() or "unknown"


def cpu_info() -> List[Dict]:
    count = psutil.cpu_count(logical=True) or 1
    model = cpu_model()
    freqs = psutil.cpu_freq(percpu=True) or []
    if len(freqs) < count:
        overall = psutil.cpu_freq()
        freqs = list(freqs) + [overall] * (count - len(freqs))
    cpus = []
    for freq in freqs[:count]:
        mhz = freq.current if freq is not None else 0.0
        cpus.append({"model": model, "speed": mhz / 1000})
    return cpus


def home_directory() -> str:
    return str(Path.home())


def current_username() -> str:
    return getpass.getuser()


def architecture() -> str:
    return platform.machine()
