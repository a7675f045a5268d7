# src/kwic/line_store.py
from __future__ import annotations
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import OutOfRangeError


def _check(what: str, index: int, bound: int) -> int:
    """Return index if 0 <= index < bound, else raise OutOfRangeError (no wraparound)."""
    if not 0 <= index < bound:
        raise OutOfRangeError(what, index, bound)
    return index


def _as_word(text: str) -> str:
    if not isinstance(text, str):
        raise TypeError(f"word must be str, got {type(text).__name__}")
    return text


def _as_char(ch: str) -> str:
    if not isinstance(ch, str) or len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    return ch


class LineStore:
    """
    Owns the corpus as an ordered list of lines, each an ordered list of words.

    Every accessor is range-checked by (line, word, character) coordinates and
    raises OutOfRangeError instead of clamping or wrapping negative indices.
    Appending never changes the index of an existing line.
    """

    def __init__(self, lines: Optional[Iterable[Iterable[str]]] = None) -> None:
        self._lines: List[List[str]] = []
        if lines is not None:
            for words in lines:
                self.append_line(words)

    # ------------- lines -------------

    def line_count(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def append_line(self, words: Iterable[str]) -> int:
        """Add a line at the end and return its index."""
        self._lines.append([_as_word(w) for w in words])
        return len(self._lines) - 1

    def append_empty_line(self) -> int:
        self._lines.append([])
        return len(self._lines) - 1

    def insert_line(self, line: int, words: Iterable[str]) -> None:
        """Insert before `line`; `line` may equal line_count(). Later lines move up by one."""
        _check("line", line, len(self._lines) + 1)
        self._lines.insert(line, [_as_word(w) for w in words])

    def set_line(self, line: int, words: Iterable[str]) -> None:
        _check("line", line, len(self._lines))
        self._lines[line] = [_as_word(w) for w in words]

    def delete_line(self, line: int) -> None:
        _check("line", line, len(self._lines))
        del self._lines[line]

    def line_as_words(self, line: int) -> Tuple[str, ...]:
        return tuple(self._line(line))

    def line_as_text(self, line: int) -> str:
        return " ".join(self._line(line))

    def iter_lines(self) -> Iterator[Tuple[str, ...]]:
        for words in self._lines:
            yield tuple(words)

    def snapshot(self) -> Tuple[Tuple[str, ...], ...]:
        """Immutable view of the current contents; word strings are shared, not copied."""
        return tuple(tuple(words) for words in self._lines)

    # ------------- words -------------

    def word_count(self, line: int) -> int:
        return len(self._line(line))

    def word_total(self) -> int:
        """Sum of word counts over all lines (the number of circular shifts)."""
        return sum(len(words) for words in self._lines)

    def word(self, line: int, word: int) -> str:
        words = self._line(line)
        return words[_check("word", word, len(words))]

    def set_word(self, line: int, word: int, text: str) -> None:
        words = self._line(line)
        words[_check("word", word, len(words))] = _as_word(text)

    def add_word(self, line: int, text: str, word: Optional[int] = None) -> None:
        """Append `text` to the line, or insert it before position `word` (which may equal the word count)."""
        words = self._line(line)
        text = _as_word(text)
        if word is None:
            words.append(text)
        else:
            words.insert(_check("word", word, len(words) + 1), text)

    def add_empty_word(self, line: int) -> None:
        self._line(line).append("")

    def delete_word(self, line: int, word: int) -> None:
        """Remove a word; subsequent word indices in the line shift down by one."""
        words = self._line(line)
        del words[_check("word", word, len(words))]

    # ------------- characters -------------

    def char_count(self, line: int, word: int) -> int:
        return len(self.word(line, word))

    def char(self, line: int, word: int, position: int) -> str:
        text = self.word(line, word)
        return text[_check("character", position, len(text))]

    def set_char(self, line: int, word: int, position: int, ch: str) -> None:
        text = self.word(line, word)
        _check("character", position, len(text))
        self._lines[line][word] = text[:position] + _as_char(ch) + text[position + 1:]

    def add_char(self, line: int, word: int, ch: str) -> None:
        """Append a character to the end of the word."""
        text = self.word(line, word)
        self._lines[line][word] = text + _as_char(ch)

    def delete_char(self, line: int, word: int, position: int) -> None:
        text = self.word(line, word)
        _check("character", position, len(text))
        self._lines[line][word] = text[:position] + text[position + 1:]

    # ------------- internals -------------

    def _line(self, line: int) -> List[str]:
        return self._lines[_check("line", line, len(self._lines))]

    def __repr__(self) -> str:
        return f"LineStore(lines={len(self._lines)}, words={self.word_total()})"
