import os
from dotenv import load_dotenv

load_dotenv()

TESTING = os.getenv("TESTING") == "1"
DATABASE_URL = os.getenv("DATABASE_URL")
DB_STATEMENT_TIMEOUT_MS = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000"))

SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Civil time zone of the trading locations, used to decide what "today" is
BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "Europe/London")

SCHEDULE_HORIZON_DAYS = int(os.getenv("SCHEDULE_HORIZON_DAYS", "14"))
SCHEDULE_MAX_HORIZON_DAYS = int(os.getenv("SCHEDULE_MAX_HORIZON_DAYS", "90"))
SCHEDULE_MAX_RESULTS = int(os.getenv("SCHEDULE_MAX_RESULTS", "30"))
SEED_HORIZON_DAYS = int(os.getenv("SEED_HORIZON_DAYS", "92"))

RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "3600"))
RATE_LIMIT_SWEEP_INTERVAL = int(os.getenv("RATE_LIMIT_SWEEP_INTERVAL", "1000"))
RATE_LIMITS = {
    "contact": int(os.getenv("RATE_LIMIT_CONTACT", "5")),
    "events": int(os.getenv("RATE_LIMIT_EVENTS", "3")),
}

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
