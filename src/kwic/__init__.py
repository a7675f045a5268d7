"""
KWIC Index Module

This module builds a Key-Word-In-Context index: every circular shift of
every input line, listed in alphabetical order.

The module is designed with a clean separation of concerns:
- Line storage with range-checked (line, word, character) access
- Circular shift generation as (line, offset) references
- Alphabetical ordering with a deterministic tie-break
- A ranked index facade for renderers

Main Functions:
    build_index(lines): Parse text lines and return the ranked KwicIndex
    Engine: Load files, build, and query in explicit phases

Example Usage:
    from kwic import build_index

    index = build_index(["Descriptive notation, in", "expressions for"])
    for line in index.lines():
        print(line)
"""

# src/kwic/__init__.py
from .engine import Engine, Phase, build_index  # re-export
from .errors import KwicError, MalformedInputError, OutOfRangeError, PhaseError
from .index import KwicIndex
from .line_store import LineStore
from .models import IndexEntry, Ranking, ShiftRef

__version__ = "1.0.0"
__all__ = [
    "Engine", "Phase", "build_index",
    "KwicIndex", "LineStore",
    "IndexEntry", "Ranking", "ShiftRef",
    "KwicError", "MalformedInputError", "OutOfRangeError", "PhaseError",
]
