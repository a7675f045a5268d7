# src/tests/test_index.py

import pytest

from kwic.alphabetizer import alphabetize
from kwic.errors import OutOfRangeError
from kwic.index import KwicIndex
from kwic.line_store import LineStore


@pytest.fixture
def index():
    store = LineStore(line.split() for line in [
        "Descriptive notation, in",
        "",
        "expressions for",
        "in the beginning",
    ])
    return KwicIndex(store, alphabetize(store))


def test_rank_count_is_total_word_count(index):
    assert index.rank_count() == len(index) == 8


def test_text_at_and_string(index):
    assert index.text_at(0) == ("Descriptive", "notation,", "in")
    assert index.text_at_as_string(1) == "beginning in the"
    assert list(index.lines()) == [
        "Descriptive notation, in",
        "beginning in the",
        "expressions for",
        "for expressions",
        "in Descriptive notation,",
        "in the beginning",
        "notation, in Descriptive",
        "the beginning in",
    ]


@pytest.mark.parametrize("rank", [-1, 8, 100])
def test_invalid_rank_raises(index, rank):
    with pytest.raises(OutOfRangeError) as info:
        index.text_at(rank)
    assert info.value.what == "rank"


def test_entries(index):
    e = index.entry_at(4)
    assert (e.rank, e.line, e.offset) == (4, 0, 2)
    assert e.text == "in Descriptive notation,"
    assert e.to_dict()["words"] == ["in", "Descriptive", "notation,"]
    assert [x.rank for x in index.entries(6)] == [6, 7]
    assert [x.rank for x in index.entries(2, 4)] == [2, 3]
    assert len(list(index)) == 8


def test_keyword_lookup(index):
    assert index.keyword_range("in") == range(4, 6)
    assert [e.line for e in index.lookup("in")] == [0, 3]
    assert index.lookup("missing") == []
    assert index.lookup("In") == []


def test_prefix_lookup(index):
    texts = [e.text for e in index.lookup("e", prefix=True)]
    assert texts == ["expressions for"]
    assert len(index.lookup("", prefix=True)) == 8


def test_resolution_follows_store_but_order_does_not(index):
    index.store.set_word(2, 0, "zzz")
    assert index.text_at_as_string(2) == "zzz for"
    assert index.text_at_as_string(3) == "for zzz"


def test_lookup_uses_words_the_order_was_built_from(index):
    index.store.set_word(2, 0, "zzz")
    assert [e.text for e in index.lookup("expressions")] == ["zzz for"]
    assert index.lookup("zzz") == []
    assert index.keyword_range("for") == range(3, 4)


def test_lookup_ignores_mutation_before_index_is_created():
    s = LineStore()
    s.append_line(["x", "y"])
    ranking = alphabetize(s)
    s.set_word(0, 0, "z")
    index = KwicIndex(s, ranking)
    assert index.text_at_as_string(0) == "z y"
    assert [e.rank for e in index.lookup("x")] == [0]
    assert index.lookup("z") == []
