# src/kwic/engine.py
from __future__ import annotations

import enum
import logging
from typing import BinaryIO, Iterable, List, Optional

from . import config as CFG
from .alphabetizer import alphabetize
from .errors import PhaseError
from .index import KwicIndex
from .line_store import LineStore
from .loader import load_lines, load_paths, load_stream, parse_line
from .models import Ranking, ShiftRef
from .shifts import circular_shifts

log = logging.getLogger(__name__)


class Phase(enum.Enum):
    LOADING = "loading"
    INDEXED = "indexed"
    QUERYABLE = "queryable"


class Engine:
    """
    Thin orchestration layer that glues together:
      - the LineStore being filled (LOADING),
      - shift generation + alphabetical ordering (-> INDEXED),
      - the KwicIndex facade handed to renderers (-> QUERYABLE).

    Public API (used by CLI/Flask/GUI):
      * add_line(text) / add_lines(lines) / load_stream(stream) / load(paths): fill the store
      * build(workers=...):  generate and sort all circular shifts
      * index:               the KwicIndex for ranked access
      * reset():             drop everything and start a new run
      * shutdown():          release resources

    Phases only move forward; a new run needs reset().
    """

    # ------------- lifecycle -------------

    def __init__(self, *, verbose: bool = False) -> None:
        if verbose or CFG.VERBOSE:
            logging.basicConfig(level=logging.INFO)
        self._store = LineStore()
        self._shifts: List[ShiftRef] = []
        self._ranking: Optional[Ranking] = None
        self._index: Optional[KwicIndex] = None
        self._phase = Phase.LOADING

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def store(self) -> LineStore:
        return self._store

    # ------------- loading -------------

    def add_line(self, text: str) -> int:
        """Parse one text line and append it; returns the new line index."""
        self._require(Phase.LOADING, "add_line")
        words = parse_line(text)
        if words:
            return self._store.append_line(words)
        return self._store.append_empty_line()

    def add_lines(self, lines: Iterable[str]) -> int:
        self._require(Phase.LOADING, "add_lines")
        return load_lines(self._store, lines)

    def load_stream(self, stream: BinaryIO, name: str = "<stdin>") -> int:
        """Append lines read from a binary stream, decoded strictly."""
        self._require(Phase.LOADING, "load_stream")
        return load_stream(self._store, stream, name)

    def load(self, paths: Iterable[str], *, workers: Optional[int] = None) -> int:
        self._require(Phase.LOADING, "load")
        paths = list(paths)
        log.info("Loading corpus from %s", paths)
        return load_paths(self._store, paths, workers=workers)

    # /* ~~~ Generate every circular shift and fix their alphabetical order ~~~ */
    def build(self, *, workers: Optional[int] = None) -> Ranking:
        self._require(Phase.LOADING, "build")
        log.info("Generating circular shifts for %d lines", self._store.line_count())
        shifts = circular_shifts(self._store)
        ranking = alphabetize(self._store, shifts, workers=workers)

        # Commit engine state only once the ranking is complete
        self._shifts = shifts
        self._ranking = ranking
        self._phase = Phase.INDEXED
        log.info("Engine build() complete: lines=%d shifts=%d",
                 self._store.line_count(), len(ranking))
        return ranking

    # ------------- query -------------

    @property
    def shifts(self) -> List[ShiftRef]:
        """Shift references in generation order, (line, offset)."""
        if self._ranking is None:
            raise PhaseError("Engine not indexed. Call build() first.")
        return list(self._shifts)

    @property
    def ranking(self) -> Ranking:
        if self._ranking is None:
            raise PhaseError("Engine not indexed. Call build() first.")
        return self._ranking

    @property
    def index(self) -> KwicIndex:
        if self._ranking is None:
            raise PhaseError("Engine not indexed. Call build() first.")
        if self._index is None:
            self._index = KwicIndex(self._store, self._ranking)
            self._phase = Phase.QUERYABLE
        return self._index

    def query(self) -> KwicIndex:
        return self.index

    # ------------- teardown -------------

    def reset(self) -> None:
        """Start a new run with a fresh, empty LineStore."""
        self._store = LineStore()
        self._shifts = []
        self._ranking = None
        self._index = None
        self._phase = Phase.LOADING
        log.info("Engine reset: new run")

    def shutdown(self) -> None:
        self._shifts = []
        self._ranking = None
        self._index = None
        log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require(self, phase: Phase, op: str) -> None:
        if self._phase is not phase:
            raise PhaseError(f"{op}() needs phase {phase.value}, engine is {self._phase.value}")


def build_index(lines: Iterable[str], *, workers: Optional[int] = None) -> KwicIndex:
    """One-shot helper: parse `lines`, build, and return the KwicIndex."""
    eng = Engine()
    eng.add_lines(lines)
    eng.build(workers=workers)
    return eng.index
