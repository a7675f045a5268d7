# src/tests/test_line_store.py

import pytest

from kwic.errors import OutOfRangeError
from kwic.line_store import LineStore


@pytest.fixture
def store():
    s = LineStore()
    s.append_line(["Descriptive", "notation,", "in"])
    s.append_line(["expressions", "for"])
    return s


def test_counts_and_access(store):
    assert store.line_count() == 2
    assert len(store) == 2
    assert store.word_count(0) == 3
    assert store.word(1, 1) == "for"
    assert store.word_total() == 5
    assert store.line_as_words(0) == ("Descriptive", "notation,", "in")
    assert store.line_as_text(1) == "expressions for"


def test_append_returns_new_index_and_keeps_prior_lines(store):
    assert store.append_empty_line() == 2
    assert store.append_line(["x"]) == 3
    assert store.word_count(2) == 0
    assert store.line_as_text(0) == "Descriptive notation, in"


@pytest.mark.parametrize("line", [-1, 2, 10])
def test_invalid_line_raises(store, line):
    with pytest.raises(OutOfRangeError):
        store.word_count(line)


@pytest.mark.parametrize("word", [-1, 3])
def test_invalid_word_raises(store, word):
    with pytest.raises(OutOfRangeError) as info:
        store.word(0, word)
    assert info.value.what == "word"
    assert info.value.bound == 3


def test_out_of_range_is_an_index_error(store):
    with pytest.raises(IndexError):
        store.line_as_words(5)


def test_word_mutations(store):
    store.set_word(1, 0, "statements")
    assert store.line_as_text(1) == "statements for"

    store.add_word(1, "all")
    assert store.line_as_words(1) == ("statements", "for", "all")

    store.add_word(1, "first", 0)
    assert store.line_as_words(1) == ("first", "statements", "for", "all")

    store.delete_word(1, 1)
    assert store.line_as_words(1) == ("first", "for", "all")
    assert store.word(1, 1) == "for"

    store.add_empty_word(1)
    assert store.word(1, 3) == ""

    with pytest.raises(OutOfRangeError):
        store.add_word(1, "x", 5)
    with pytest.raises(OutOfRangeError):
        store.delete_word(1, 4)


def test_words_must_be_strings(store):
    with pytest.raises(TypeError):
        store.append_line(["ok", 3])
    with pytest.raises(TypeError):
        store.set_word(0, 0, None)


def test_char_access_and_mutations(store):
    assert store.char_count(1, 1) == 3
    assert store.char(1, 1, 0) == "f"

    store.set_char(1, 1, 0, "F")
    assert store.word(1, 1) == "For"

    store.add_char(1, 1, "m")
    assert store.word(1, 1) == "Form"

    store.delete_char(1, 1, 1)
    assert store.word(1, 1) == "Frm"

    with pytest.raises(OutOfRangeError) as info:
        store.char(1, 1, 3)
    assert info.value.what == "character"
    with pytest.raises(OutOfRangeError):
        store.set_char(1, 1, -1, "x")
    with pytest.raises(ValueError):
        store.add_char(1, 1, "xy")


def test_line_mutations(store):
    store.set_line(0, ["a", "b"])
    assert store.line_as_text(0) == "a b"

    store.insert_line(0, ["zero"])
    assert store.line_as_text(0) == "zero"
    assert store.line_as_text(1) == "a b"

    store.insert_line(store.line_count(), ["tail"])
    assert store.line_as_text(3) == "tail"

    store.delete_line(0)
    assert store.line_count() == 3
    assert store.line_as_text(0) == "a b"

    with pytest.raises(OutOfRangeError):
        store.delete_line(3)


def test_snapshot_is_detached_from_later_mutation(store):
    snap = store.snapshot()
    store.set_word(0, 0, "changed")
    store.append_line(["new"])
    assert snap[0][0] == "Descriptive"
    assert len(snap) == 2


def test_constructor_accepts_lines():
    s = LineStore([["a", "b"], [], ["c"]])
    assert s.line_count() == 3
    assert list(s.iter_lines()) == [("a", "b"), (), ("c",)]
