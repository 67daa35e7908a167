"""
Application settings read from environment variables
"""
import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma separated list, "*" allows every origin
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# Timezone used for timestamps shown to operators
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Manila")

# Deal wizard sessions live only in memory; this bounds how long an abandoned one is kept
DEAL_SESSION_TTL_HOURS = int(os.getenv("DEAL_SESSION_TTL_HOURS", "8"))

# When true the Available -> Reserved update only matches rows still marked available
RESERVATION_GUARD = os.getenv("RESERVATION_GUARD", "false").lower() == "true"

API_VERSION = "1.0.0"
