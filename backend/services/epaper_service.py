"""
epaper_service.py — Summary document for the e-paper display
Fixed-shape JSON the display firmware polls. Task, reminder and event lists
are static placeholders for now; weather is live but optional.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

import httpx

import config
from services.weather_service import WeatherService

LIVE_CACHE_CONTROL = "no-store"
DEMO_CACHE_CONTROL = "public, max-age=60"

STATIC_TASKS = [
    {"title": "Treadmill – 20 mins", "priority": "Normal"},
    {"title": "Order materials", "priority": "High"},
    {"title": "Weekly food shop"},
]

STATIC_REMINDERS = [
    {"title": "Bins out – General waste", "dueDate": "Tue"},
    {"title": "School note for Luke", "dueDate": "Today"},
]

# Empty list renders as "No events today" on the display
STATIC_EVENTS: list[dict] = []

DEMO_TASKS = [
    {"title": "Walk 20 mins", "priority": "Normal"},
    {"title": "Pack orders for courier", "priority": "High"},
]
DEMO_REMINDERS = [{"title": "Pay electricity bill", "dueDate": "Fri"}]
DEMO_EVENTS = [{"title": "CP Clinic", "time": "14:00"}]


def format_date_time(now: datetime | None = None, tz_name: str | None = None) -> dict:
    """Local {date: "Tue, 18 Nov 2025", time: "08:37"}."""
    tz = ZoneInfo(tz_name or config.EPAPER_TIMEZONE)
    now = now.astimezone(tz) if now else datetime.now(tz)
    return {"date": now.strftime("%a, %d %b %Y"), "time": now.strftime("%H:%M")}


class EpaperService:
    @staticmethod
    async def build_summary(client: httpx.AsyncClient | None = None, now: datetime | None = None) -> dict:
        stamp = format_date_time(now)
        weather = await WeatherService.fetch(client)

        payload = {
            "profile": config.EPAPER_PROFILE_NAME,
            "date": stamp["date"],
            "time": stamp["time"],
            "quote": config.EPAPER_QUOTE,
            "openOrders": 0,
            "todayTaskCount": len(STATIC_TASKS),
            "tasks": STATIC_TASKS,
            "reminders": STATIC_REMINDERS,
            "events": STATIC_EVENTS,
        }
        if weather:
            payload["weather"] = weather
        return payload

    @staticmethod
    def build_demo_summary(now: datetime | None = None) -> dict:
        """Earlier revision: hardcoded demo data with a single combined date string."""
        stamp = format_date_time(now)
        return {
            "profile": config.EPAPER_PROFILE_NAME,
            "date": f"{stamp['date']} {stamp['time']}",
            "quote": config.EPAPER_QUOTE,
            "openOrders": 2,
            "todayTaskCount": len(DEMO_TASKS),
            "tasks": DEMO_TASKS,
            "reminders": DEMO_REMINDERS,
            "events": DEMO_EVENTS,
        }
