# env vars + constants
import os

PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# one database per API version
CHOOSER_DB_V1 = os.getenv("CHOOSER_DB_V1", "sqlite:///./chooser_v1.db")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

PUBLIC_ID_LENGTH = int(os.getenv("PUBLIC_ID_LENGTH", "8"))
ADMIN_TOKEN_LENGTH = int(os.getenv("ADMIN_TOKEN_LENGTH", "16"))
DEFAULT_SELECTION_LABELS = ["no", "ok", "ideal"]

UNPUBLISHED_TTL_HOURS = float(os.getenv("UNPUBLISHED_TTL_HOURS", "24"))
IDLE_TTL_DAYS = float(os.getenv("IDLE_TTL_DAYS", "180"))
# 0 disables the in-process sweep (cron runs `python -m chooser.manage sweep`)
RETENTION_INTERVAL = float(os.getenv("RETENTION_INTERVAL", "0"))

CHOOSER_API_URL = os.getenv("CHOOSER_API_URL", "http://localhost:8000")
