"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    HOST                 — Bind address for the API server (default: 127.0.0.1)
    PORT                 — Bind port for the API server (default: 8000)
    CORS_ORIGINS         — Comma-separated frontend origins allowed by CORS
    LOG_LEVEL            — Root log level name (default: INFO)
    LOG_DIR              — Directory for the daily log file (default: logs)
    ENABLE_FILE_LOGGING  — Write logs to LOG_DIR as well as stderr (default: true)
    WEEKLY_RESOLVED_BY   — Date used to place Closed bugs in the weekly
                           series: "created" or "closed" (default: created)

Weekly Series:
    The dashboard counts a Closed bug as "resolved" on the day it was
    created unless WEEKLY_RESOLVED_BY=closed, in which case its closure
    date is used.  The creation-date mode keeps both series on the same
    population of records.
"""
import os
from dotenv import load_dotenv

load_dotenv()

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", 8000))

CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")
ENABLE_FILE_LOGGING = os.getenv("ENABLE_FILE_LOGGING", "true").lower() == "true"

# Dashboard
WEEKLY_RESOLVED_BY = os.getenv("WEEKLY_RESOLVED_BY", "created").lower()
