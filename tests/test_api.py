from __future__ import annotations

from fastapi.testclient import TestClient

from channel_uri.api import uri_api


client = TestClient(uri_api.app)


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_parse():
    resp = client.post("/parse", json={"uri": "aeron:udp?endpoint=224.10.9.8:777|add|ress=x"})
    assert resp.status_code == 200
    assert resp.json() == {
        "scheme": "aeron",
        "media": "udp",
        "params": {"endpoint": "224.10.9.8:777", "add|ress": "x"},
        "canonical": "aeron:udp?endpoint=224.10.9.8:777|add|ress=x",
    }


def test_parse_rejects_malformed():
    before = client.get("/metrics").json()["rejected"]
    resp = client.post("/parse", json={"uri": "aeron:udp:"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "colon inside media segment"
    assert client.get("/metrics").json()["rejected"] == before + 1


def test_parse_batch_reports_each_item():
    resp = client.post("/parse/batch", json=[{"uri": "aeron:ipc"}, {"uri": "aeron:udp?"}])
    assert resp.status_code == 200
    first, second = resp.json()
    assert first["ok"] is True and first["canonical"] == "aeron:ipc"
    assert second["ok"] is False
    assert second["error"] == "unterminated parameter key, expected '='"


def test_parse_batch_limit(monkeypatch):
    monkeypatch.setattr(uri_api, "CONFIG", {"api": {"max_batch": 1}})
    resp = client.post("/parse/batch", json=[{"uri": "aeron:ipc"}, {"uri": "aeron:udp"}])
    assert resp.status_code == 413


def test_serialize():
    resp = client.post("/serialize", json={"media": "udp", "params": {"endpoint": "224.10.9.8:777", "ttl": "16"}})
    assert resp.status_code == 200
    assert resp.json() == {"canonical": "aeron:udp?endpoint=224.10.9.8:777|ttl=16"}


def test_serialize_rejects_unparseable_components():
    resp = client.post("/serialize", json={"media": "udp", "params": {"a": "1|2"}})
    assert resp.status_code == 400
    assert "must not contain '|'" in resp.json()["detail"]
