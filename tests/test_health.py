from fastapi.testclient import TestClient
from memobook.main import app

def test_health():
    c = TestClient(app)
    r = c.get("/healthz")
    assert r.status_code == 200 and r.json()["ok"] is True

def test_routes_mounted():
    paths = {r.path for r in app.routes}
    assert "/memos" in paths
    assert "/memos/{memo_id}" in paths
    assert "/api/summarize" in paths
