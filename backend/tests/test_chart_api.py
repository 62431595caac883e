from __future__ import annotations

from _helpers import unwrap

WINDOW = {"state": "TX", "start": "2026-02-10", "end": "2026-02-15"}
PINNED = {**WINDOW, "primary_date": "2026-02-13", "comparison_date": "2026-02-10"}


def _points(body):
    return {p["date"]: p for p in unwrap(body)["points"]}


def test_chart_pinned_with_comparison(client):
    r = client.get("/api/demand/chart", params=PINNED)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["ok"] is True
    data = unwrap(body)

    points = _points(body)
    assert list(points) == ["2026-02-10", "2026-02-11", "2026-02-12", "2026-02-13", "2026-02-14", "2026-02-15"]

    p12 = points["2026-02-12"]
    assert p12["actual"] == 1200
    assert p12["predicted"] == 1000
    assert p12["isOutlier"] is True
    assert p12["comparisonPredicted"] == 950
    assert p12["comparisonOutlier"] is False
    assert p12["confidenceHigh"] == 1100
    assert p12["confidenceLow"] == 900

    # 6% gap on a future date crosses the tighter threshold
    p14 = points["2026-02-14"]
    assert p14["isFuture"] is True
    assert p14["actual"] is None
    assert p14["comparisonOutlier"] is True
    assert p14["predictedFuture"] == 1000
    assert p14["predictedPast"] is None

    boundary = points["2026-02-13"]
    assert boundary["isFuture"] is False
    assert boundary["predictedPast"] == 1000
    assert boundary["predictedFuture"] == 1000
    assert boundary["temperatureFuture"] == 41

    assert points["2026-02-10"]["predicted"] is None
    assert points["2026-02-10"]["isOutlier"] is False

    assert data["metrics"] == {"rmse": 141, "mae": 100, "maxError": 200, "overallErrorRate": 8.3}
    assert all(isinstance(data["metrics"][k], int) for k in ("rmse", "mae", "maxError"))
    assert data["yDomain"] == [984, 1216]

    meta = data["metadata"]
    assert meta["state"] == "TX"
    assert meta["mode"] == "pinned"
    assert meta["primaryDate"] == "2026-02-13"
    assert meta["comparisonDate"] == "2026-02-10"
    assert meta["energySources"] == []
    assert meta["vintages"] == ["2026-02-09", "2026-02-10", "2026-02-13"]
    assert meta["dateRange"] == {"start": "2026-02-10", "end": "2026-02-15"}


def test_chart_latest_mode_uses_newest_vintage_per_date(client):
    r = client.get("/api/demand/chart", params={**WINDOW, "mode": "latest"})
    assert r.status_code == 200, r.text
    points = _points(r.json())
    assert points["2026-02-10"]["predicted"] == 1000
    assert points["2026-02-11"]["predicted"] == 900
    assert points["2026-02-11"]["isOutlier"] is True
    assert points["2026-02-12"]["predicted"] == 1000

    metrics = unwrap(r.json())["metrics"]
    assert metrics == {"rmse": 112, "mae": 75, "maxError": 200, "overallErrorRate": 6.7}


def test_chart_energy_source_filter(client):
    r = client.get("/api/demand/chart", params=[*PINNED.items(), ("energy_sources", "gas")])
    assert r.status_code == 200, r.text
    points = _points(r.json())
    assert points["2026-02-12"]["actual"] == 700
    assert points["2026-02-12"]["predicted"] == 600
    assert points["2026-02-12"]["isOutlier"] is True
    assert points["2026-02-13"]["isOutlier"] is False
    assert unwrap(r.json())["metadata"]["energySources"] == ["Gas"]


def test_all_sources_equals_no_filter(client):
    none = client.get("/api/demand/chart", params=PINNED).json()
    every = client.get("/api/demand/chart", params={**PINNED, "energy_sources": "Gas,Nuclear,Solar,Wind"}).json()
    assert unwrap(none)["points"] == unwrap(every)["points"]
    assert unwrap(none)["metrics"] == unwrap(every)["metrics"]


def test_chart_without_matching_vintage_has_no_predictions(client):
    r = client.get("/api/demand/chart", params={**WINDOW, "primary_date": "2026-01-01"})
    data = unwrap(r.json())
    assert all(p["predicted"] is None for p in data["points"])
    assert data["metrics"] == {"rmse": 0, "mae": 0, "maxError": 0, "overallErrorRate": 0}


def test_chart_errors(client):
    r = client.get("/api/demand/chart", params={**WINDOW, "energy_sources": "coal"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "UNKNOWN_ENERGY_SOURCE"

    r = client.get("/api/demand/chart", params={**WINDOW, "mode": "oldest"})
    assert r.status_code == 422

    r = client.get("/api/demand/chart", params={**WINDOW, "state": "ZZ"})
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "UNKNOWN_REGION"


def test_point_projection(client):
    r = client.get("/api/demand/point", params={**PINNED, "date": "2026-02-12"})
    assert r.status_code == 200, r.text
    point = unwrap(r.json())
    assert point["actual"] == 1200
    assert point["predicted"] == 1000
    assert point["isOutlier"] is True
    assert point["deviationPercent"] == 20.0
    assert point["temperature"] == 40
    assert point["isComparisonPoint"] is False
    assert point["daysDifference"] == 3


def test_point_projection_for_comparison_series(client):
    r = client.get("/api/demand/point", params={**PINNED, "date": "2026-02-14", "comparison": "true"})
    assert r.status_code == 200, r.text
    point = unwrap(r.json())
    assert point["actual"] is None
    assert point["deviationPercent"] is None
    assert point["comparisonPredicted"] == 940
    assert abs(point["comparisonDeviationPercent"] - (-6.0)) < 1e-9
    assert point["daysDifference"] == 3
    assert point["isComparisonPoint"] is True


def test_point_without_comparison_date_is_never_a_comparison_point(client):
    r = client.get("/api/demand/point", params={**WINDOW, "date": "2026-02-14", "comparison": "true"})
    point = unwrap(r.json())
    assert point["isComparisonPoint"] is False
    assert point["comparisonPredicted"] is None
    assert point["daysDifference"] is None


def test_point_not_found(client):
    r = client.get("/api/demand/point", params={**PINNED, "date": "2026-03-01"})
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "POINT_NOT_FOUND"


def test_refresh_returns_row_counts(client):
    r = client.post("/api/demand/refresh")
    assert r.status_code == 200, r.text
    assert unwrap(r.json()) == {"historical": 11, "forecast": 21, "weather": 7}
