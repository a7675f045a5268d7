# src/kwic/errors.py
"""Exception types raised by the KWIC engine and its loader."""
from __future__ import annotations


class KwicError(Exception):
    """Base class for every error raised by this package."""


class OutOfRangeError(KwicError, IndexError):
    """A line, word, character or rank index is outside its current bounds."""

    def __init__(self, what: str, index: int, bound: int) -> None:
        self.what = what
        self.index = index
        self.bound = bound
        super().__init__(f"{what} index {index} out of range [0, {bound})")


class MalformedInputError(KwicError, ValueError):
    """An input source could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path!r}: {reason}")


class PhaseError(KwicError, RuntimeError):
    """An engine operation was called in the wrong phase."""
