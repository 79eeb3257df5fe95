"""End-to-end page flows through the HTTP API."""

from __future__ import annotations

import httpx
import pytest

import config
from tests.conftest import forecast_payload, mock_weather_client

pytestmark = pytest.mark.asyncio


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------

class TestTasks:
    async def test_empty_title_rejected(self, client: httpx.AsyncClient) -> None:
        r = await client.post("/api/v1/tasks", json={"title": "   "})
        assert r.status_code == 400
        assert r.json()["detail"] == "Task title is required."
        assert (await client.get("/api/v1/tasks")).json() == []

    async def test_minimal_task_gets_defaults(self, client: httpx.AsyncClient) -> None:
        r = await client.post("/api/v1/tasks", json={"title": "Renew car tax"})
        assert r.status_code == 200
        task = r.json()["data"]
        assert task["status"] == "Inbox"
        assert task["priority"] == "Normal"
        assert task["notes"] == ""
        assert task["assignedTo"] == ""
        assert task["dueDate"] == ""
        assert task["id"] and task["createdAt"]

        tasks = (await client.get("/api/v1/tasks")).json()
        assert [t["id"] for t in tasks] == [task["id"]]

    async def test_invalid_status_rejected(self, client: httpx.AsyncClient) -> None:
        r = await client.post("/api/v1/tasks", json={"title": "x", "status": "Someday"})
        assert r.status_code == 400

    async def test_update_status_and_board(self, client: httpx.AsyncClient) -> None:
        tid = (await client.post("/api/v1/tasks", json={"title": "Book NCT"})).json()["data"]["id"]
        await client.post("/api/v1/tasks", json={"title": "Find policy", "status": "Waiting"})

        r = await client.put(f"/api/v1/tasks/{tid}", json={"status": "Today", "assignedTo": "Will"})
        assert r.status_code == 200
        assert r.json()["data"]["status"] == "Today"

        board = (await client.get("/api/v1/tasks/board")).json()
        assert list(board) == ["Inbox", "Today", "This Week", "Later", "Waiting", "Done"]
        assert [t["title"] for t in board["Today"]] == ["Book NCT"]
        assert board["Inbox"] == []
        assert sum(len(v) for v in board.values()) == 2

        filtered = (await client.get("/api/v1/tasks", params={"assigned_to": "Unassigned"})).json()
        assert [t["title"] for t in filtered] == ["Find policy"]

        stats = (await client.get("/api/v1/tasks/stats")).json()
        assert stats == {"total": 2, "today": 1, "done": 0}

    async def test_update_missing_task(self, client: httpx.AsyncClient) -> None:
        r = await client.put("/api/v1/tasks/nope", json={"status": "Done"})
        assert r.status_code == 404

    async def test_delete_requires_confirmation(self, client: httpx.AsyncClient) -> None:
        tid = (await client.post("/api/v1/tasks", json={"title": "Temp"})).json()["data"]["id"]

        r = await client.delete(f"/api/v1/tasks/{tid}")
        assert r.status_code == 400
        assert len((await client.get("/api/v1/tasks")).json()) == 1

        r = await client.delete(f"/api/v1/tasks/{tid}", params={"confirm": "true"})
        assert r.status_code == 200
        assert (await client.get("/api/v1/tasks")).json() == []

    async def test_tasks_partitioned_by_profile(self, client: httpx.AsyncClient) -> None:
        will = (await client.post("/api/v1/profiles", json={"name": "Will"})).json()["data"]
        await client.post("/api/v1/tasks", json={"title": "Will's task"})

        michelle = (await client.post("/api/v1/profiles", json={"name": "Michelle"})).json()["data"]
        # creating a profile switches to it
        assert (await client.get("/api/v1/tasks")).json() == []

        r = await client.get("/api/v1/tasks", headers={"X-Profile-Id": will["id"]})
        assert [t["title"] for t in r.json()] == ["Will's task"]
        r = await client.get("/api/v1/tasks", headers={"X-Profile-Id": michelle["id"]})
        assert r.json() == []

    async def test_unknown_profile_header(self, client: httpx.AsyncClient) -> None:
        r = await client.get("/api/v1/tasks", headers={"X-Profile-Id": "ghost"})
        assert r.status_code == 401


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

class TestOrders:
    async def test_required_fields(self, client: httpx.AsyncClient) -> None:
        r = await client.post("/api/v1/orders", json={"customerName": "Aoife", "item": ""})
        assert r.status_code == 400
        assert r.json()["detail"] == "Customer name and item are required."

    async def test_price_validation(self, client: httpx.AsyncClient) -> None:
        r = await client.post("/api/v1/orders", json={"customerName": "Aoife", "item": "Sign", "price": "twenty"})
        assert r.status_code == 400
        assert "Price" in r.json()["detail"]

        r = await client.post("/api/v1/orders", json={"customerName": "Aoife", "item": "Sign", "price": "25.50"})
        assert r.json()["data"]["price"] == 25.5

        r = await client.post("/api/v1/orders", json={"customerName": "Sean", "item": "Coasters", "price": ""})
        assert r.json()["data"]["price"] is None

        r = await client.post("/api/v1/orders", json={"customerName": "Sean", "item": "Coasters", "price": "1e999"})
        assert r.status_code == 400

    async def test_lifecycle_and_overview(self, client: httpx.AsyncClient) -> None:
        a = (await client.post("/api/v1/orders", json={"customerName": "Aoife", "item": "Oak sign", "channel": "Etsy"})).json()["data"]
        b = (await client.post("/api/v1/orders", json={"customerName": "Sean", "item": "Coasters"})).json()["data"]
        assert a["status"] == "Enquiry" and a["fulfilment"] == "Collection"

        await client.put(f"/api/v1/orders/{a['id']}", json={"status": "Completed", "fulfilment": "Shipped"})
        r = await client.post(f"/api/v1/orders/{b['id']}/toggle-deposit")
        assert r.json()["data"]["depositPaid"] is True

        overview = (await client.get("/api/v1/orders/overview")).json()
        assert overview == {"open": 1, "total": 2, "completed": 1, "waitingOnCustomer": 0}

        etsy = (await client.get("/api/v1/orders", params={"channel": "Etsy", "search": "oak"})).json()
        assert [o["id"] for o in etsy] == [a["id"]]

        board = (await client.get("/api/v1/orders/board")).json()
        assert len(board) == 6
        assert [o["id"] for o in board["Completed"]] == [a["id"]]

    async def test_delete_order(self, client: httpx.AsyncClient) -> None:
        oid = (await client.post("/api/v1/orders", json={"customerName": "A", "item": "B"})).json()["data"]["id"]
        assert (await client.delete(f"/api/v1/orders/{oid}")).status_code == 400
        assert (await client.delete(f"/api/v1/orders/{oid}", params={"confirm": "true"})).status_code == 200
        assert (await client.delete(f"/api/v1/orders/{oid}", params={"confirm": "true"})).status_code == 404


# ---------------------------------------------------------------------------
# Reminders
# ---------------------------------------------------------------------------

class TestReminders:
    async def test_required_title(self, client: httpx.AsyncClient) -> None:
        r = await client.post("/api/v1/reminders", json={"title": ""})
        assert r.status_code == 400
        assert r.json()["detail"] == "Reminder text is required."

    async def test_flags_and_filters(self, client: httpx.AsyncClient) -> None:
        late = (await client.post("/api/v1/reminders", json={"title": "Bins out", "dueDate": "2000-01-01", "assignedTo": "Will"})).json()["data"]
        await client.post("/api/v1/reminders", json={"title": "School note"})

        listed = (await client.get("/api/v1/reminders")).json()
        flags = {r["title"]: r["overdue"] for r in listed}
        assert flags == {"Bins out": True, "School note": False}

        unassigned = (await client.get("/api/v1/reminders", params={"assigned_to": "Unassigned"})).json()
        assert [r["title"] for r in unassigned] == ["School note"]

        await client.post(f"/api/v1/reminders/{late['id']}/toggle")
        active = (await client.get("/api/v1/reminders", params={"status": "Active"})).json()
        assert [r["title"] for r in active] == ["School note"]

        board = (await client.get("/api/v1/reminders/board")).json()
        assert [len(board["Active"]), len(board["Completed"])] == [1, 1]
        assert board["Completed"][0]["overdue"] is False

        assert (await client.get("/api/v1/reminders/overview")).json() == {"active": 1, "completed": 1}

    async def test_update_assignee(self, client: httpx.AsyncClient) -> None:
        rid = (await client.post("/api/v1/reminders", json={"title": "Dentist"})).json()["data"]["id"]
        r = await client.put(f"/api/v1/reminders/{rid}", json={"assignedTo": "Michelle"})
        assert r.json()["data"]["assignedTo"] == "Michelle"
        r = await client.put(f"/api/v1/reminders/{rid}", json={"assignedTo": "Stranger"})
        assert r.status_code == 400


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

class TestProfiles:
    async def test_guest_by_default(self, client: httpx.AsyncClient) -> None:
        assert (await client.get("/api/v1/profiles/current")).json() == {"id": None, "name": "Guest"}

    async def test_pin_format(self, client: httpx.AsyncClient) -> None:
        r = await client.post("/api/v1/profiles", json={"name": "Will", "pin": "12a4"})
        assert r.status_code == 400
        for pin in ("1234\n", "12345", "\u0661\u0662\u0663\u0664"):
            r = await client.post("/api/v1/profiles", json={"name": "Will", "pin": pin})
            assert r.status_code == 400
        assert (await client.get("/api/v1/profiles")).json() == []
        r = await client.post("/api/v1/profiles", json={"name": " "})
        assert r.json()["detail"] == "Profile name is required."

    async def test_login_with_pin(self, client: httpx.AsyncClient) -> None:
        will = (await client.post("/api/v1/profiles", json={"name": "Will", "pin": "1234"})).json()["data"]
        assert will["hasPin"] is True
        assert "pin" not in will
        await client.post("/api/v1/profiles", json={"name": "Kids"})

        r = await client.post("/api/v1/profiles/login", json={"profileId": will["id"], "pin": "0000"})
        assert r.status_code == 401
        assert (await client.get("/api/v1/profiles/current")).json()["name"] == "Kids"

        r = await client.post("/api/v1/profiles/login", json={"profileId": will["id"], "pin": "1234"})
        assert r.status_code == 200
        assert (await client.get("/api/v1/profiles/current")).json() == {"id": will["id"], "name": "Will"}

        await client.post("/api/v1/profiles/logout")
        assert (await client.get("/api/v1/profiles/current")).json()["name"] == "Guest"

    async def test_login_errors(self, client: httpx.AsyncClient) -> None:
        assert (await client.post("/api/v1/profiles/login", json={"profileId": ""})).status_code == 400
        assert (await client.post("/api/v1/profiles/login", json={"profileId": "ghost"})).status_code == 404

    async def test_profiles_sorted(self, client: httpx.AsyncClient) -> None:
        for name in ("Will", "Michelle", "Luke"):
            await client.post("/api/v1/profiles", json={"name": name})
        names = [p["name"] for p in (await client.get("/api/v1/profiles")).json()]
        assert names == ["Will", "Michelle", "Luke"]


# ---------------------------------------------------------------------------
# Daily log, history, dashboard
# ---------------------------------------------------------------------------

class TestDailyLog:
    async def _log_day(self, client: httpx.AsyncClient, day: str, **fields) -> None:
        await client.put("/api/v1/today", json={"date": day, **fields})
        r = await client.post("/api/v1/today/save")
        assert r.status_code == 200

    async def test_today_defaults_to_current_date(self, client: httpx.AsyncClient) -> None:
        today = (await client.get("/api/v1/today")).json()
        assert len(today["date"]) == 10
        assert today["smoothieDone"] is False

    async def test_save_requires_date(self, client: httpx.AsyncClient) -> None:
        await client.put("/api/v1/today", json={"date": ""})
        r = await client.post("/api/v1/today/save")
        assert r.status_code == 400
        assert (await client.get("/api/v1/history")).json() == []

    async def test_same_date_replaces(self, client: httpx.AsyncClient) -> None:
        await self._log_day(client, "2025-11-01", weightKg="80")
        await self._log_day(client, "2025-11-01", weightKg="79.5")
        history = (await client.get("/api/v1/history")).json()
        assert len(history) == 1
        assert history[0]["weightKg"] == "79.5"
        assert history[0]["savedAt"]

    async def test_history_sorted_and_chart(self, client: httpx.AsyncClient) -> None:
        await self._log_day(client, "2025-11-03", weightKg="82")
        await self._log_day(client, "2025-11-02", weightKg="n/a")

        chart = (await client.get("/api/v1/history/weight-chart")).json()
        assert chart["hasData"] is False

        await self._log_day(client, "2025-11-02", weightKg="84")
        await self._log_day(client, "2025-11-01", weightKg="80")
        dates = [h["date"] for h in (await client.get("/api/v1/history")).json()]
        assert dates == ["2025-11-01", "2025-11-02", "2025-11-03"]

        chart = (await client.get("/api/v1/history/weight-chart")).json()
        assert chart["hasData"] is True
        assert len(chart["points"]) == 3

    async def test_streaks_and_dashboard(self, client: httpx.AsyncClient) -> None:
        for i, done in enumerate([True, True, True, False], start=1):
            await self._log_day(client, f"2025-11-0{i}", workoutDone=done, smoothieDone=True)
        await client.put("/api/v1/today", json={
            "date": "2025-11-05", "workoutDone": True, "smoothieDone": True, "hydrationLitres": "1.5",
        })

        streaks = (await client.get("/api/v1/stats/streaks")).json()
        assert streaks["workout"] == {"current": 1, "best": 3}
        assert streaks["smoothie"] == {"current": 5, "best": 5}
        assert streaks["badge"]["label"] == "Streak warming up"

        await client.post("/api/v1/tasks", json={"title": "Call bank", "status": "Today"})
        await client.post("/api/v1/orders", json={"customerName": "A", "item": "B"})
        await client.post("/api/v1/reminders", json={"title": "Bins"})

        dash = (await client.get("/api/v1/dashboard")).json()
        assert dash["profile"] == "Guest"
        assert dash["todayTaskCount"] == 1
        assert dash["openOrders"] == 1
        assert dash["activeReminders"] == 1
        assert dash["hydrationPercent"] == 75
        assert dash["weeklySummary"]["days"] == 5
        assert dash["weeklySummary"]["workoutDays"] == 4
        assert dash["openOps"] == ["Prep food for tomorrow"]

    async def test_overflowing_weight_is_ignored(self, client: httpx.AsyncClient) -> None:
        await self._log_day(client, "2025-11-01", weightKg="1e999", sleepHours="7")
        await self._log_day(client, "2025-11-02", weightKg="80")

        r = await client.get("/api/v1/stats/weekly")
        assert r.status_code == 200
        assert r.json()["avgWeight"] == 80.0
        assert r.json()["avgSleep"] == 7.0

        chart = (await client.get("/api/v1/history/weight-chart")).json()
        assert chart["hasData"] is False
        assert (await client.get("/api/v1/dashboard")).status_code == 200

    async def test_weekly_stats_empty(self, client: httpx.AsyncClient) -> None:
        assert (await client.get("/api/v1/stats/weekly")).json() is None


# ---------------------------------------------------------------------------
# E-paper
# ---------------------------------------------------------------------------

class TestEpaper:
    async def test_live_summary_no_store(self, client: httpx.AsyncClient, monkeypatch) -> None:
        from main import app
        from routes.epaper_routes import get_weather_client

        monkeypatch.setattr(config, "EPAPER_MODE", "live")

        async def fake_client():
            async with mock_weather_client(lambda r: httpx.Response(200, json=forecast_payload())) as c:
                yield c

        app.dependency_overrides[get_weather_client] = fake_client
        r = await client.get("/api/epaper-summary")
        assert r.status_code == 200
        assert r.headers["cache-control"] == "no-store"
        assert r.headers["content-type"].startswith("application/json")
        body = r.json()
        assert body["weather"]["desc"] == "Rain"
        assert body["profile"] == config.EPAPER_PROFILE_NAME

    async def test_weather_down_still_serves(self, client: httpx.AsyncClient, monkeypatch) -> None:
        from main import app
        from routes.epaper_routes import get_weather_client

        monkeypatch.setattr(config, "EPAPER_MODE", "live")

        async def failing_client():
            async with mock_weather_client(lambda r: httpx.Response(502)) as c:
                yield c

        app.dependency_overrides[get_weather_client] = failing_client
        r = await client.get("/api/epaper-summary")
        assert r.status_code == 200
        assert "weather" not in r.json()

    async def test_demo_mode_public_cache(self, client: httpx.AsyncClient, monkeypatch) -> None:
        from main import app
        from routes.epaper_routes import get_weather_client

        async def unused_client():
            async with mock_weather_client(lambda r: httpx.Response(500)) as c:
                yield c

        app.dependency_overrides[get_weather_client] = unused_client
        monkeypatch.setattr(config, "EPAPER_MODE", "demo")
        r = await client.get("/api/epaper-summary")
        assert r.headers["cache-control"] == "public, max-age=60"
        assert "time" not in r.json()


async def test_health_check(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/v1/health-check")
    assert r.json()["status"] == "ok"
