from fastapi.testclient import TestClient
from prometheus_client import REGISTRY


def test_request_id_header(client: TestClient):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.headers.get("x-request-id")


def test_metrics_endpoint_exposed(client: TestClient):
    client.get("/api/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "dashboard_http_requests_total" in resp.text


def _outliers(kind: str) -> float:
    value = REGISTRY.get_sample_value("dashboard_outlier_points_total", {"region": "TX", "kind": kind})
    return value or 0.0


def test_outlier_counter_tracks_chart_requests(client: TestClient):
    actual_before, comparison_before = _outliers("actual"), _outliers("comparison")
    client.get(
        "/api/demand/chart",
        params={"state": "TX", "primary_date": "2026-02-13", "comparison_date": "2026-02-10"},
    )
    assert _outliers("actual") - actual_before == 1
    assert _outliers("comparison") - comparison_before == 1


def test_latency_health_stats(client: TestClient):
    for _ in range(3):
        client.get("/api/health")
    resp = client.get("/api/health/latency")
    assert resp.status_code == 200
    data = resp.json()
    assert "paths" in data and isinstance(data["paths"], list)
    entries = {p["path"]: p for p in data["paths"]}
    assert "/api/health" in entries
    row = entries["/api/health"]
    assert row["p95_ms"] >= row["p50_ms"]
    assert row["sample_size"] >= 1
