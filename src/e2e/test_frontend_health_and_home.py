from pathlib import Path
import pytest
from kwic.engine import Engine
from frontend.web import app as flask_app

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "y.txt").write_text("health check line\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_frontend_health_and_home(tmp_path: Path):
    eng = Engine(); eng.load([_seed(tmp_path)]); eng.build()

    import frontend.web as webmod
    webmod._engine = eng
    client = flask_app.test_client()
    try:
        r = client.get("/api/health")
        assert r.status_code == 200
        assert r.get_json() == {"ok": True, "ranks": 3}

        r = client.get("/")
        assert r.status_code == 200
        assert "kwic" in r.data.decode("utf-8", errors="ignore").lower()
    finally:
        webmod._engine = None
        eng.shutdown()

@pytest.mark.e2e
def test_frontend_without_engine():
    import frontend.web as webmod
    webmod._engine = None
    client = flask_app.test_client()
    assert client.get("/api/health").status_code == 503
    assert client.get("/api/index").status_code == 503

@pytest.mark.e2e
def test_frontend_engine_not_built_yet():
    import frontend.web as webmod
    eng = Engine(); eng.add_line("a b")
    webmod._engine = eng
    client = flask_app.test_client()
    try:
        r = client.get("/api/health")
        assert r.status_code == 503
        assert r.get_json() == {"ok": False, "ranks": 0}
        r = client.get("/api/index")
        assert r.status_code == 503
        assert r.get_json() == {"error": "index not built"}
        assert client.get("/api/lookup?q=a").status_code == 503
    finally:
        webmod._engine = None
