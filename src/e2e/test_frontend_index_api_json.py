from pathlib import Path
import pytest
from kwic.engine import Engine
from frontend.web import app as flask_app

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "h.txt").write_text("To be, or not to be: that is the question.\n", encoding="utf-8")
    return str(root)

@pytest.fixture
def client(tmp_path: Path):
    eng = Engine(); eng.load([_seed(tmp_path)]); eng.build()

    import frontend.web as webmod
    webmod._engine = eng
    try:
        yield flask_app.test_client()
    finally:
        webmod._engine = None
        eng.shutdown()

@pytest.mark.e2e
def test_frontend_index_pages(client):
    rv = client.get("/api/index?offset=2&limit=3")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["total"] == 10
    assert data["offset"] == 2
    assert [r["rank"] for r in data["items"]] == [2, 3, 4]
    for key in ("rank", "line", "offset", "words", "text"):
        assert key in data["items"][0]

@pytest.mark.e2e
def test_frontend_lookup(client):
    rows = client.get("/api/lookup?q=to").get_json()
    assert [r["text"] for r in rows] == ["to be: that is the question. To be, or not"]
    rows = client.get("/api/lookup?q=t&prefix=1").get_json()
    assert {r["words"][0] for r in rows} == {"that", "the", "to"}
    assert client.get("/api/lookup?q=").get_json() == []

@pytest.mark.e2e
def test_frontend_bad_params(client):
    assert client.get("/api/index?offset=abc").status_code == 400
    assert client.get("/api/index?limit=-1").status_code == 400
