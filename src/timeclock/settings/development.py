import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock"),
}

DEFAULT_BUSINESS_HOURS = {
    "start_time": os.getenv("BUSINESS_START", "09:00"),
    "end_time": os.getenv("BUSINESS_END", "17:00"),
    "break_duration": int(os.getenv("BUSINESS_BREAK_MINUTES", "60")),
    "late_threshold": int(os.getenv("BUSINESS_LATE_THRESHOLD", "15")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also insert default employees and business hours on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
