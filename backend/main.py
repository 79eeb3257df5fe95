import os
import sys

# Ensure this directory is in the path for uvicorn and other runners
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.append(current_dir)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS
from database import init_db
from routes.daily_routes import router as daily_router
from routes.epaper_routes import router as epaper_router
from routes.order_routes import router as order_router
from routes.profile_routes import router as profile_router
from routes.reminder_routes import router as reminder_router
from routes.task_routes import router as task_router

# Initialize db configuration
init_db()

app = FastAPI(title="LifeOS Dashboard")

@app.get("/api/v1/health-check")
async def health():
    return {"status": "ok", "message": "Backend is alive!"}

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profile_router)
app.include_router(task_router)
app.include_router(order_router)
app.include_router(reminder_router)
app.include_router(daily_router)
app.include_router(epaper_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
