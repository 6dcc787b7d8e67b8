"""Tests for the HTTP API: trade CRUD, settings and analytics routes."""


def _trade(**overrides):
    payload = {"date": "2024-01-02", "symbol": "NQ", "realised_r": 1.0}
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# 1. Trades
# ---------------------------------------------------------------------------

class TestTradeCrud:
    def test_create_defaults_max_r_and_id(self, client):
        resp = client.post("/api/trades", json=_trade(realised_r=2.5, mistakes=["Trapped OF"]))
        assert resp.status_code == 201
        body = resp.json()
        assert body["id"]
        assert body["max_r"] == 2.5
        assert body["mistakes"] == ["Trapped OF"]
        assert body["created_at"] > 0

    def test_create_invalid_is_400_with_details(self, client):
        resp = client.post("/api/trades", json={"date": "2024-01-02", "symbol": "NQ"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["details"]
        assert any("realised_r" in err["loc"] for err in body["details"])

    def test_create_rejects_malformed_date(self, client):
        resp = client.post("/api/trades", json=_trade(date="02/01/2024"))
        assert resp.status_code == 400

    def test_list_sorted_by_date_then_created_at(self, client):
        client.post("/api/trades", json=_trade(date="2024-02-01", created_at=1, symbol="A"))
        client.post("/api/trades", json=_trade(date="2024-01-15", created_at=9, symbol="B"))
        client.post("/api/trades", json=_trade(date="2024-01-15", created_at=3, symbol="C"))
        symbols = [t["symbol"] for t in client.get("/api/trades").json()]
        assert symbols == ["C", "B", "A"]

    def test_get_unknown_is_404(self, client):
        resp = client.get("/api/trades/nope")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Trade not found"

    def test_patch(self, client):
        trade_id = client.post("/api/trades", json=_trade()).json()["id"]
        resp = client.patch(f"/api/trades/{trade_id}", json={"realised_r": -1, "session": "NY"})
        assert resp.status_code == 200
        assert resp.json()["realised_r"] == -1
        assert resp.json()["session"] == "NY"
        assert resp.json()["symbol"] == "NQ"

    def test_patch_unknown_is_404(self, client):
        assert client.patch("/api/trades/nope", json={"realised_r": 1}).status_code == 404

    def test_patch_invalid_is_400(self, client):
        trade_id = client.post("/api/trades", json=_trade()).json()["id"]
        assert client.patch(f"/api/trades/{trade_id}", json={"position": "Sideways"}).status_code == 400

    def test_patch_null_required_field_is_400(self, client):
        trade_id = client.post("/api/trades", json=_trade()).json()["id"]
        for field in ("realised_r", "date", "symbol", "mistakes"):
            resp = client.patch(f"/api/trades/{trade_id}", json={field: None})
            assert resp.status_code == 400
            assert resp.json()["details"]
        assert client.get(f"/api/trades/{trade_id}").json()["realised_r"] == 1.0

    def test_patch_null_clears_optional_field(self, client):
        trade_id = client.post("/api/trades", json=_trade(risk_percent=0.5)).json()["id"]
        resp = client.patch(f"/api/trades/{trade_id}", json={"risk_percent": None})
        assert resp.status_code == 200
        assert resp.json()["risk_percent"] is None

    def test_delete(self, client):
        trade_id = client.post("/api/trades", json=_trade()).json()["id"]
        assert client.delete(f"/api/trades/{trade_id}").status_code == 204
        assert client.delete(f"/api/trades/{trade_id}").status_code == 404

    def test_delete_all(self, client):
        client.post("/api/trades", json=_trade())
        client.post("/api/trades", json=_trade())
        assert client.delete("/api/trades").status_code == 204
        assert client.get("/api/trades").json() == []


# ---------------------------------------------------------------------------
# 2. Settings
# ---------------------------------------------------------------------------

class TestSettings:
    def test_defaults_when_nothing_saved(self, client):
        body = client.get("/api/settings").json()
        assert "NY" in body["sessions"]
        assert body["tilt_threshold"] == 2

    def test_save_then_read(self, client):
        resp = client.post("/api/settings", json={"sessions": ["Asia"], "tilt_threshold": 3})
        assert resp.status_code == 200
        body = client.get("/api/settings").json()
        assert body["sessions"] == ["Asia"]
        assert body["tilt_threshold"] == 3
        assert "Continuation Model" in body["models"]

    def test_save_twice_replaces(self, client):
        client.post("/api/settings", json={"sessions": ["Asia"]})
        client.post("/api/settings", json={"sessions": ["London"]})
        assert client.get("/api/settings").json()["sessions"] == ["London"]

    def test_invalid_is_400(self, client):
        assert client.post("/api/settings", json={"sessions": "NY"}).status_code == 400


# ---------------------------------------------------------------------------
# 3. Analytics
# ---------------------------------------------------------------------------

class TestAnalytics:
    def test_summary_empty(self, client):
        body = client.get("/api/analytics/summary").json()
        assert body["n"] == 0
        assert body["profit_factor"] == 0
        assert body["profit_factor_unbounded"] is False
        assert body["current_streak"] == {"type": "none", "count": 0}

    def test_summary_unbounded_profit_factor(self, client):
        client.post("/api/trades", json=_trade(realised_r=1))
        client.post("/api/trades", json=_trade(realised_r=2))
        body = client.get("/api/analytics/summary").json()
        assert body["profit_factor"] is None
        assert body["profit_factor_unbounded"] is True
        assert body["current_streak"] == {"type": "win", "count": 2}

    def test_summary_custom_filter(self, client):
        client.post("/api/trades", json=_trade(date="2024-01-05", realised_r=1))
        client.post("/api/trades", json=_trade(date="2024-03-05", realised_r=-1))
        body = client.get(
            "/api/analytics/summary",
            params={"filter": "custom", "from": "2024-02-01", "to": "2024-01-01"},
        ).json()
        assert body["n"] == 1
        assert body["total_r"] == 1

    def test_year_filter(self, client):
        client.post("/api/trades", json=_trade(date="2023-12-29"))
        client.post("/api/trades", json=_trade(date="2024-01-05"))
        assert client.get("/api/analytics/summary", params={"year": "2023"}).json()["n"] == 1
        assert client.get("/api/analytics/summary", params={"year": "soon"}).status_code == 400

    def test_unknown_filter_is_400(self, client):
        assert client.get("/api/analytics/summary", params={"filter": "decade"}).status_code == 400

    def test_streak_follows_chronological_order(self, client):
        client.post("/api/trades", json=_trade(date="2024-01-03", realised_r=-1))
        client.post("/api/trades", json=_trade(date="2024-01-01", realised_r=1))
        body = client.get("/api/analytics/summary").json()
        assert body["current_streak"] == {"type": "loss", "count": 1}

    def test_performance_tables(self, client):
        client.post("/api/trades", json=_trade(date="2024-01-01", session="NY", model="Cont"))
        dow = client.get("/api/analytics/performance/day-of-week").json()
        assert len(dow) == 7
        assert dow[1]["label"] == "Monday" and dow[1]["trades"] == 1
        assert client.get("/api/analytics/performance/month").json()[0]["label"] == "Jan 2024"
        assert client.get("/api/analytics/performance/session").json()[0]["label"] == "NY"
        strategy = client.get("/api/analytics/performance/strategy").json()
        assert strategy[0]["name"] == "Cont"
        assert strategy[0]["profit_factor_unbounded"] is True
        assert client.get("/api/analytics/performance/hourly").status_code == 404

    def test_distribution_and_equity_curve(self, client):
        client.post("/api/trades", json=_trade(date="2024-01-02", realised_r=-1.5))
        client.post("/api/trades", json=_trade(date="2024-01-01", realised_r=2))
        dist = client.get("/api/analytics/distribution").json()
        assert sum(row["count"] for row in dist) == 2
        curve = client.get("/api/analytics/equity-curve").json()
        assert [p["cumulative_r"] for p in curve] == [2, 0.5]
        assert curve[0]["label"] == "Trade 1: +2.00R"

    def test_day_stats_mistakes_and_heat_map(self, client):
        client.post("/api/trades", json=_trade(realised_r=-1, mistakes=["A", "B"]))
        days = client.get("/api/analytics/day-stats").json()
        assert days["2024-01-02"]["losses"] == 1
        mistakes = client.get("/api/analytics/mistakes").json()
        assert [m["mistake"] for m in mistakes] == ["A", "B"]
        cells = client.get("/api/analytics/heat-map").json()
        assert len(cells) == 168

    def test_calendar_month(self, client):
        client.post("/api/trades", json=_trade(date="2024-01-02", realised_r=2))
        client.post("/api/trades", json=_trade(date="2024-01-09", realised_r=-1))
        body = client.get("/api/analytics/calendar/2024/1").json()
        assert body["total_r"] == 1
        assert body["active_days"] == 2
        assert body["best_day"] == {"date": "2024-01-02", "total_r": 2}
        assert body["worst_day"] == {"date": "2024-01-09", "total_r": -1}
        assert [d["date"] for d in body["days"]] == ["2024-01-02", "2024-01-09"]
        assert client.get("/api/analytics/calendar/2024/13").status_code == 400


def test_health(client):
    assert client.get("/api/system/health").json() == {"status": "ok"}
