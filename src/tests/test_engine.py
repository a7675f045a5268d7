# src/tests/test_engine.py

import io
from pathlib import Path

import pytest

from kwic import Engine, Phase, PhaseError, build_index
from kwic.models import ShiftRef


def test_phases_move_forward():
    eng = Engine()
    assert eng.phase is Phase.LOADING
    eng.add_line("expressions for")
    eng.add_lines(["Descriptive notation, in"])
    with pytest.raises(PhaseError):
        _ = eng.index

    eng.build()
    assert eng.phase is Phase.INDEXED
    with pytest.raises(PhaseError):
        eng.add_line("too late")
    with pytest.raises(PhaseError):
        eng.build()

    index = eng.index
    assert eng.phase is Phase.QUERYABLE
    assert eng.query() is index
    assert index.text_at_as_string(0) == "Descriptive notation, in"
    eng.shutdown()


def test_shifts_in_generation_order():
    eng = Engine()
    eng.add_lines(["a b", "", "c"])
    with pytest.raises(PhaseError):
        _ = eng.shifts
    eng.build()
    assert eng.shifts == [ShiftRef(0, 0), ShiftRef(0, 1), ShiftRef(2, 0)]
    assert len(eng.ranking) == 3


def test_reset_starts_a_new_run():
    eng = Engine()
    eng.add_line("old line")
    eng.build()
    old_store = eng.store
    eng.reset()
    assert eng.phase is Phase.LOADING
    assert eng.store is not old_store
    assert eng.store.line_count() == 0
    eng.add_line("new")
    eng.build()
    assert list(eng.index.lines()) == ["new"]


def test_load_from_paths(tmp_path: Path):
    (tmp_path / "t.txt").write_text("to be or not\nnot to be\n", encoding="utf-8")
    eng = Engine()
    try:
        assert eng.load([str(tmp_path)]) == 2
        eng.build()
        assert eng.index.rank_count() == 7
    finally:
        eng.shutdown()


def test_build_index_helper_with_duplicates():
    index = build_index(["same line", "", "same line"])
    assert index.rank_count() == 4
    assert [(e.line, e.offset) for e in index] == [(0, 1), (2, 1), (0, 0), (2, 0)]
    assert list(index.lines()) == ["line same", "line same", "same line", "same line"]


def test_shutdown_drops_the_ranking():
    eng = Engine()
    eng.add_line("a b")
    eng.build()
    assert eng.index.rank_count() == 2
    eng.shutdown()
    with pytest.raises(PhaseError):
        _ = eng.shifts
    with pytest.raises(PhaseError):
        _ = eng.ranking
    with pytest.raises(PhaseError):
        _ = eng.index


def test_load_stream_only_while_loading():
    eng = Engine()
    assert eng.load_stream(io.BytesIO(b"a b\n")) == 1
    eng.build()
    with pytest.raises(PhaseError):
        eng.load_stream(io.BytesIO(b"c\n"))
