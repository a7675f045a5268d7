# src/kwic/index.py
from __future__ import annotations
import bisect
from typing import Iterator, List, Optional, Tuple

from . import config as CFG
from .errors import OutOfRangeError
from .line_store import LineStore
from .models import IndexEntry, Ranking, ShiftRef
from .shifts import resolve


class KwicIndex:
    """
    Ranked, read-only access to a KWIC listing.

    Binds the LineStore that owns the words to the Ranking computed from it.
    Text is resolved on every call (nothing is cached): if the store is mutated
    after ranking, the words returned follow the store but the order does not
    change.
    """

    def __init__(self, store: LineStore, ranking: Ranking) -> None:
        self._store = store
        self._ranking = ranking
        self._first_words: Tuple[str, ...] = ranking.first_words
        if len(self._first_words) != len(ranking):
            self._first_words = tuple(store.word(r.line, r.offset) for r in ranking)

    @property
    def store(self) -> LineStore:
        return self._store

    @property
    def ranking(self) -> Ranking:
        return self._ranking

    # ------------- ranked access -------------

    def rank_count(self) -> int:
        return len(self._ranking)

    def __len__(self) -> int:
        return len(self._ranking)

    def ref_at(self, rank: int) -> ShiftRef:
        n = len(self._ranking)
        if not 0 <= rank < n:
            raise OutOfRangeError("rank", rank, n)
        return self._ranking[rank]

    def text_at(self, rank: int) -> Tuple[str, ...]:
        return resolve(self._store, self.ref_at(rank))

    def text_at_as_string(self, rank: int) -> str:
        return CFG.OUTPUT_SEPARATOR.join(self.text_at(rank))

    def entry_at(self, rank: int) -> IndexEntry:
        ref = self.ref_at(rank)
        words = resolve(self._store, ref)
        return IndexEntry(
            rank=rank,
            line=ref.line,
            offset=ref.offset,
            words=words,
            text=CFG.OUTPUT_SEPARATOR.join(words),
        )

    def entries(self, start: int = 0, stop: Optional[int] = None) -> Iterator[IndexEntry]:
        """Entries for ranks in [start, stop), clipped to the listing like a slice."""
        for rank in range(len(self._ranking))[start:stop]:
            yield self.entry_at(rank)

    def __iter__(self) -> Iterator[IndexEntry]:
        return self.entries()

    def lines(self) -> Iterator[str]:
        for rank in range(len(self._ranking)):
            yield self.text_at_as_string(rank)

    # ------------- keyword lookup -------------

    def keyword_range(self, keyword: str, *, prefix: bool = False) -> range:
        """
        Ranks whose rotation starts with `keyword` (or with a word starting
        with `keyword` when prefix=True). The ranking is sorted by first word,
        so the matches form one contiguous block found by bisection.

        Matching uses the first words the order was computed from; later
        store mutations do not change which ranks are found.
        """
        if prefix:
            n = len(keyword)
            key = lambda word: word[:n]
        else:
            key = None
        lo = bisect.bisect_left(self._first_words, keyword, key=key)
        hi = bisect.bisect_right(self._first_words, keyword, lo=lo, key=key)
        return range(lo, hi)

    def lookup(self, keyword: str, *, prefix: bool = False) -> List[IndexEntry]:
        return [self.entry_at(rank) for rank in self.keyword_range(keyword, prefix=prefix)]

    def __repr__(self) -> str:
        return f"KwicIndex(lines={self._store.line_count()}, ranks={len(self._ranking)})"
