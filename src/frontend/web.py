from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from kwic import config as CFG
from kwic.engine import Engine
from kwic.errors import MalformedInputError, PhaseError
from kwic.index import KwicIndex

app = Flask(__name__)
_engine: Engine | None = None


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name, None, type=str)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def _bad_request(msg: str):
    return jsonify({"error": msg}), 400


def _no_engine():
    return jsonify({"error": "index not built"}), 503


def _current_index() -> KwicIndex | None:
    if _engine is None:
        return None
    try:
        return _engine.index
    except PhaseError:
        return None


# ---------- API ----------
@app.get("/api/index")
def api_index():
    index = _current_index()
    if index is None:
        return _no_engine()
    try:
        offset = _int_arg("offset", 0)
        limit = min(_int_arg("limit", CFG.PAGE_SIZE), CFG.MAX_PAGE_SIZE)
    except ValueError as exc:
        return _bad_request(str(exc))
    items = [e.to_dict() for e in index.entries(offset, offset + limit)]
    return jsonify({"total": index.rank_count(), "offset": offset, "items": items})


@app.get("/api/lookup")
def api_lookup():
    index = _current_index()
    if index is None:
        return _no_engine()
    q = request.args.get("q", "", type=str).strip()
    prefix = request.args.get("prefix", "0", type=str).lower() in ("1", "true", "yes", "on")
    if not q:
        return jsonify([])
    rows = index.lookup(q, prefix=prefix)
    return jsonify([e.to_dict() for e in rows])


@app.get("/api/health")
def api_health():
    index = _current_index()
    if index is None:
        return jsonify({"ok": False, "ranks": 0}), 503
    return jsonify({"ok": True, "ranks": index.rank_count()})


# ---------- UI ----------
@app.get("/")
def home():
    # A tiny SPA: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>KWIC Index • Flask UI</title>
<style>
:root{
  --bg:#0b0f14;
  --panel:#0f141b;
  --ink:#cfd8e3;
  --muted:#8a94a6;
  --accent:#6ee7ff;
  --accent-2:#22d3ee;
  --border:#1c2530;
  --danger:#ff5d5d;
  --mark-bg:rgba(110,231,255,.2);
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:980px; margin:24px auto; padding:0 16px; }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; padding:18px; box-shadow:0 10px 30px rgba(0,0,0,.25);
}
h1{ font-size:20px; margin:0 0 8px 0; letter-spacing:.3px; }
.controls{ display:flex; gap:12px; align-items:center; margin:12px 0 4px 0; flex-wrap:wrap; }
.input{ flex:1; min-width:240px; }
.input input{
  width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px;
}
.input input:focus{ border-color:var(--accent) }
.btn{
  padding:10px 14px; border-radius:10px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); cursor:pointer;
}
.btn:hover{ border-color:var(--accent-2) }
.meta{ display:flex; justify-content:space-between; color:var(--muted); font-size:13px; margin:8px 0; }
.err{ display:none; color:var(--danger); margin:8px 0; }
.row{ display:grid; grid-template-columns:64px 64px 64px 1fr; gap:8px; padding:8px 10px; border-top:1px solid var(--border); }
.head{ background:#0d131a; font-weight:600; color:var(--muted) }
.small{ color:var(--muted); font-variant-numeric:tabular-nums }
.kw{ background:var(--mark-bg); border-bottom:1px solid var(--accent-2) }
.mono{ font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, "Liberation Mono", monospace }
.empty{ padding:16px 10px; color:var(--muted) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>KWIC Index</h1>
      <div class="controls">
        <div class="input">
          <input id="q" type="text" placeholder="Filter by keyword…" autocomplete="off" autofocus />
        </div>
        <label class="small"><input id="prefix" type="checkbox" checked /> prefix</label>
        <button id="prev" class="btn">&larr;</button>
        <button id="next" class="btn">&rarr;</button>
      </div>
      <div class="meta"><div id="stats">Loading…</div><div>Keyword first, shifted context after.</div></div>
      <div id="err" class="err"></div>
      <div class="row head"><div>#</div><div>Line</div><div>Shift</div><div>Text</div></div>
      <div id="out" class="empty">…</div>
    </div>
  </div>

<script>
const $ = (sel) => document.querySelector(sel);
const q = $("#q"), out = $("#out"), err = $("#err"), stats = $("#stats"), prefix = $("#prefix");
const PAGE = 100;
let offset = 0, total = 0, t;

function esc(s){ return String(s).replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
function render(rows){
  if(!rows.length){ out.className = "empty"; out.innerHTML = "No entries."; return; }
  out.className = "";
  out.innerHTML = rows.map(r => {
    const [kw, ...rest] = r.words;
    return `<div class="row"><div class="small mono">${r.rank}</div><div class="small mono">${r.line}</div>`
         + `<div class="small mono">${r.offset}</div><div><span class="kw">${esc(kw)}</span> ${esc(rest.join(" "))}</div></div>`;
  }).join("");
}
async function load(){
  err.style.display = "none";
  const kw = q.value.trim();
  try{
    if(kw){
      const resp = await fetch(`/api/lookup?q=${encodeURIComponent(kw)}&prefix=${prefix.checked ? 1 : 0}`);
      if(!resp.ok) throw new Error(`HTTP ${resp.status}`);
      const rows = await resp.json();
      stats.textContent = `Matches: ${rows.length}`;
      render(rows);
    }else{
      const resp = await fetch(`/api/index?offset=${offset}&limit=${PAGE}`);
      if(!resp.ok) throw new Error(`HTTP ${resp.status}`);
      const data = await resp.json();
      total = data.total;
      stats.textContent = `Ranks ${Math.min(offset + 1, total)}–${Math.min(offset + PAGE, total)} of ${total}`;
      render(data.items);
    }
  }catch(e){
    err.style.display = "block";
    err.textContent = `Error: ${e.message ?? e}`;
  }
}
q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(load, 150); });
prefix.addEventListener("change", load);
$("#prev").addEventListener("click", () => { offset = Math.max(0, offset - PAGE); load(); });
$("#next").addEventListener("click", () => { if(offset + PAGE < total){ offset += PAGE; load(); } });
load();
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of a KWIC Engine")
    ap.add_argument("paths", nargs="+", help="Input files or folders (scanned for .txt)")
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    eng = Engine(verbose=args.verbose)
    try:
        eng.load(args.paths)
    except MalformedInputError as exc:
        ap.exit(1, f"error: {exc}\n")
    eng.build(workers=args.workers)
    _engine = eng

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
        _engine = None
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
