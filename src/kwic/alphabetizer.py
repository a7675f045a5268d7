# src/kwic/alphabetizer.py
"""
Alphabetical ordering of circular shifts.

Two shifts are compared by the word sequences they denote, word by word,
each word by character code (plain ``str`` ordering, no casefolding or
locale). A rotation that is a strict prefix of another sorts first. Shifts
with identical text are ordered by (line, offset) so the result never
depends on the stability of the sort algorithm.

Sorting works on a snapshot of the LineStore and only ever handles
ShiftRef objects; rotated word sequences are walked with modular indexing
inside the comparator and never materialized.
"""

from __future__ import annotations
import heapq
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import cmp_to_key, partial
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from . import config as CFG
from .errors import OutOfRangeError
from .line_store import LineStore
from .models import Ranking, ShiftRef
from .shifts import circular_shifts

log = logging.getLogger(__name__)

Lines = Sequence[Sequence[str]]


def compare_shifts(lines: Lines, a: ShiftRef, b: ShiftRef) -> int:
    """Three-way comparison of two shifts over `lines`; 0 only for equal refs."""
    wa = lines[a.line]
    wb = lines[b.line]
    na, nb = len(wa), len(wb)
    for i in range(min(na, nb)):
        x = wa[(a.offset + i) % na]
        y = wb[(b.offset + i) % nb]
        if x != y:
            return -1 if x < y else 1
    if na != nb:
        return -1 if na < nb else 1
    # same text: fall back to position in the corpus
    if a.line != b.line:
        return -1 if a.line < b.line else 1
    if a.offset != b.offset:
        return -1 if a.offset < b.offset else 1
    return 0


def _validate(lines: Lines, refs: Iterable[ShiftRef]) -> None:
    n_lines = len(lines)
    for ref in refs:
        if not 0 <= ref.line < n_lines:
            raise OutOfRangeError("line", ref.line, n_lines)
        n_words = len(lines[ref.line])
        if not 0 <= ref.offset < n_words:
            raise OutOfRangeError("offset", ref.offset, n_words)


def _partition(refs: Sequence[ShiftRef], n_lines: int, parts: int) -> List[List[ShiftRef]]:
    """Split refs into `parts` buckets of contiguous line-index ranges."""
    buckets: List[List[ShiftRef]] = [[] for _ in range(parts)]
    for ref in refs:
        buckets[ref.line * parts // n_lines].append(ref)
    return [b for b in buckets if b]


def _parallel_sort(refs: Sequence[ShiftRef], lines: Lines,
                   key: Callable[[ShiftRef], object], workers: int) -> List[ShiftRef]:
    chunks = _partition(refs, len(lines), workers)
    log.info("Sorting %d shifts in %d partitions", len(refs), len(chunks))
    with ThreadPoolExecutor(max_workers=workers) as ex:
        sorted_chunks = list(ex.map(partial(sorted, key=key), chunks))
    return list(heapq.merge(*sorted_chunks, key=key))


def alphabetize(store: LineStore,
                shifts: Optional[Iterable[ShiftRef]] = None,
                *,
                workers: Optional[int] = None) -> Ranking:
    """
    Sort `shifts` (default: every circular shift of `store`) into a Ranking.

    The store is snapshotted first and every ref is validated against the
    snapshot before sorting starts; an invalid ref raises OutOfRangeError and
    no Ranking is produced. Neither the store nor the input refs are modified.
    Running it twice on the same input gives the same Ranking.

    workers > 1 (default: config.SORT_WORKERS) sorts line partitions in a
    thread pool and merges them; the result equals the sequential sort.
    """
    lines: Tuple[Tuple[str, ...], ...] = store.snapshot()
    refs: List[ShiftRef] = list(shifts) if shifts is not None else circular_shifts(store)
    _validate(lines, refs)

    key = cmp_to_key(partial(compare_shifts, lines))
    workers = CFG.SORT_WORKERS if workers is None else int(workers)

    if workers > 1 and len(refs) >= CFG.PARALLEL_MIN_SHIFTS:
        ordered = _parallel_sort(refs, lines, key, workers)
    else:
        ordered = sorted(refs, key=key)

    log.info("Alphabetized %d shifts over %d lines", len(ordered), len(lines))
    return Ranking(tuple(ordered), tuple(lines[r.line][r.offset] for r in ordered))
