import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

import config
from services.epaper_service import EpaperService, LIVE_CACHE_CONTROL, DEMO_CACHE_CONTROL

router = APIRouter(tags=["E-paper"])

async def get_weather_client():
    """FastAPI dependency — one short-lived HTTP client per request."""
    async with httpx.AsyncClient(timeout=config.WEATHER_TIMEOUT_SECONDS) as client:
        yield client

@router.get("/api/epaper-summary")
async def epaper_summary(client: httpx.AsyncClient = Depends(get_weather_client)):
    if config.EPAPER_MODE == "demo":
        payload = EpaperService.build_demo_summary()
        return JSONResponse(payload, headers={"Cache-Control": DEMO_CACHE_CONTROL})

    payload = await EpaperService.build_summary(client)
    return JSONResponse(payload, headers={"Cache-Control": LIVE_CACHE_CONTROL})
