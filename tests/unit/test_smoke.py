from fastapi.testclient import TestClient

from api_server import app


def test_app_serves_health_and_catalog():
    with TestClient(app) as client:
        assert client.get("/healthz").json() == {"status": "ok"}
        scenarios = client.get("/api/scenarios").json()
    assert {s["id"] for s in scenarios} == {"limite", "cobranca", "cartao", "credito"}
    cartao = next(s for s in scenarios if s["id"] == "cartao")
    assert [p["label"] for p in cartao["profiles"]] == ["Cliente Calmo", "Cliente com Urgência", "Cliente Frustrado"]
