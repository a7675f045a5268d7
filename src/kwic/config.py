# src/kwic/config.py
from __future__ import annotations
import os

# input decoding (strict: undecodable files are rejected, not patched)
ENCODING: str = "utf-8"

# file types picked up when a directory is given as input
INCLUDE_EXTS = {".txt"}

# folders to skip while walking input directories
EXCLUDE_DIRS = {".git", ".hg", ".svn", ".idea", ".vscode", "node_modules", "__pycache__"}

# characters that separate words on an input line (runs collapse to one)
WORD_SEPARATORS: str = " \t"

# separator used when a rotation is rendered as a single string
OUTPUT_SEPARATOR: str = " "

# workers
_cpu = os.cpu_count() or 4
READ_WORKERS: int = _cpu * 2   # threads used to read many input files
SORT_WORKERS: int = 1          # >1 sorts line partitions in parallel, then merges

# below this many shifts the parallel sort is not worth the merge
PARALLEL_MIN_SHIFTS: int = 50_000

# web API paging
PAGE_SIZE: int = 100
MAX_PAGE_SIZE: int = 1_000

# Progress logging (set KWIC_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("KWIC_VERBOSE") == "1"
