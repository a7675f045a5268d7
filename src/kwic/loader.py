# src/kwic/loader.py
"""
Input parsing for the KWIC engine.

Turns raw text into lines of words and appends them to a LineStore:

    1. Strip line terminators
    2. Collapse runs of spaces and tabs into one separator
    3. Split on that separator; a blank line yields zero words

Files are decoded strictly; anything that cannot be read or decoded raises
MalformedInputError naming the path. Sources are fully read and parsed
before the first line is appended, so a failing load leaves the store as it
was.
"""

from __future__ import annotations
import logging
import os
import re
from concurrent.futures import ThreadPoolExecutor
from typing import BinaryIO, Iterable, List, Optional, Sequence

from . import config as CFG
from .errors import MalformedInputError
from .line_store import LineStore

log = logging.getLogger(__name__)

# Regular expression for a run of word separators
_sep_re = re.compile("[" + re.escape(CFG.WORD_SEPARATORS) + "]+")


def parse_line(text: str) -> List[str]:
    """
    Split one physical line into words.

    Example:
        >>> parse_line("  Descriptive\\tnotation,   in \\r\\n")
        ['Descriptive', 'notation,', 'in']
    """
    text = text.rstrip("\r\n")
    return [w for w in _sep_re.split(text) if w]


def split_lines(text: str) -> List[str]:
    """Physical lines of `text`; a trailing newline does not start an extra line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def load_lines(store: LineStore, lines: Iterable[str]) -> int:
    """Append each text line to the store; returns the number of lines appended."""
    parsed = [parse_line(raw) for raw in lines]
    return _append_parsed(store, parsed)


def load_text(store: LineStore, text: str) -> int:
    return load_lines(store, split_lines(text))


def _append_parsed(store: LineStore, parsed: Sequence[List[str]]) -> int:
    for words in parsed:
        if words:
            store.append_line(words)
        else:
            store.append_empty_line()
    return len(parsed)


def _decode_parsed(raw: bytes, source: str) -> List[List[str]]:
    try:
        text = raw.decode(CFG.ENCODING)
    except UnicodeDecodeError as exc:
        raise MalformedInputError(source, f"not valid {CFG.ENCODING} at byte {exc.start}") from exc
    return [parse_line(raw_line) for raw_line in split_lines(text)]


def _read_parsed(path: str) -> List[List[str]]:
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as exc:
        raise MalformedInputError(path, exc.strerror or str(exc)) from exc
    return _decode_parsed(raw, path)


def load_stream(store: LineStore, stream: BinaryIO, name: str = "<stdin>") -> int:
    """Read a binary stream to the end, decode it strictly and append its lines."""
    try:
        raw = stream.read()
    except OSError as exc:
        raise MalformedInputError(name, exc.strerror or str(exc)) from exc
    n = _append_parsed(store, _decode_parsed(raw, name))
    log.info("Loaded %s (%d lines)", name, n)
    return n


def load_file(store: LineStore, path: str) -> int:
    parsed = _read_parsed(str(path))
    n = _append_parsed(store, parsed)
    log.info("Loaded %s (%d lines)", path, n)
    return n


def _iter_dir_files(root: str) -> Iterable[str]:
    """Yield matching files under root recursively, in sorted order for reproducibility."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d.lower() not in CFG.EXCLUDE_DIRS)
        for fn in sorted(filenames):
            if os.path.splitext(fn)[1].lower() in CFG.INCLUDE_EXTS:
                yield os.path.join(dirpath, fn)


def expand_paths(paths: Iterable[str]) -> List[str]:
    """Resolve files and directories into the ordered list of input files."""
    out: List[str] = []
    for p in paths:
        p = str(p)
        if os.path.isdir(p):
            out.extend(_iter_dir_files(p))
        elif os.path.isfile(p):
            out.append(p)
        else:
            raise MalformedInputError(p, "no such file or directory")
    return out


def load_paths(store: LineStore, paths: Iterable[str], *, workers: Optional[int] = None) -> int:
    """
    Load every file named by `paths` (files, or directories walked for
    INCLUDE_EXTS) in order. Files are read in a thread pool when there is more
    than one; lines are appended in input order only after all reads succeed.
    """
    files = expand_paths(paths)
    workers = CFG.READ_WORKERS if workers is None else int(workers)

    if len(files) > 1 and workers > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(files))) as ex:
            per_file = list(ex.map(_read_parsed, files))
    else:
        per_file = [_read_parsed(f) for f in files]

    total = 0
    for path, parsed in zip(files, per_file):
        total += _append_parsed(store, parsed)
        log.info("Loaded %s (%d lines)", path, len(parsed))
    log.info("Loaded %d files, %d lines", len(files), total)
    return total
