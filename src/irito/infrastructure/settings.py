import os
from pathlib import Path

from dotenv import load_dotenv

# --- Base Directory ---
# src/irito/infrastructure/settings.py -> project root
BASE_DIR = Path(__file__).resolve().parents[3]

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Storage ---
DATA_DIR = Path(os.getenv("IRITO_DATA_DIR", str(BASE_DIR / "data")))

# --- Logging ---
LOG_LEVEL = os.getenv("IRITO_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("IRITO_LOG_FILE") or None

# --- Query limits ---
TRANSACTION_LIMIT = int(os.getenv("IRITO_TRANSACTION_LIMIT", "50"))
DASHBOARD_RECENT_LIMIT = int(os.getenv("IRITO_DASHBOARD_RECENT_LIMIT", "10"))

# --- Voice ---
# Actor recorded when a voice command arrives without an explicit user.
VOICE_USER = os.getenv("IRITO_VOICE_USER", "voice_user")
