import os
from dotenv import load_dotenv

load_dotenv()

# --- Database ---
# Default to local SQLite; the key-value slots live in a single table
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/lifeos.db")

# --- Storage slots ---
STORAGE_KEY_PREFIX = os.getenv("STORAGE_KEY_PREFIX", "lifeOS")

# --- Household (comma-separated, used for assignee fields) ---
HOUSEHOLD_MEMBERS = [m.strip() for m in os.getenv("HOUSEHOLD_MEMBERS", "Will,Michelle").split(",") if m.strip()]

# --- Daily targets ---
HYDRATION_TARGET_LITRES = float(os.getenv("HYDRATION_TARGET_LITRES", "2.0"))

# --- E-paper summary ---
EPAPER_MODE = os.getenv("EPAPER_MODE", "live")  # live / demo
EPAPER_PROFILE_NAME = os.getenv("EPAPER_PROFILE_NAME", "Will")
EPAPER_QUOTE = os.getenv(
    "EPAPER_QUOTE",
    "Discipline is doing what needs to be done, even when you don’t feel like it.",
)
EPAPER_LATITUDE = float(os.getenv("EPAPER_LATITUDE", "53.8"))
EPAPER_LONGITUDE = float(os.getenv("EPAPER_LONGITUDE", "-9.5"))
EPAPER_TIMEZONE = os.getenv("EPAPER_TIMEZONE", "Europe/Dublin")

# --- Weather (Open-Meteo, no key required) ---
WEATHER_API_URL = os.getenv("WEATHER_API_URL", "https://api.open-meteo.com/v1/forecast")
WEATHER_TIMEOUT_SECONDS = float(os.getenv("WEATHER_TIMEOUT_SECONDS", "5"))

# --- Server ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
