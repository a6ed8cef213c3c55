import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "timeclock"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock"),
}

DEFAULT_BUSINESS_HOURS = {
    "start_time": os.getenv("BUSINESS_START", "09:00"),
    "end_time": os.getenv("BUSINESS_END", "17:00"),
    "break_duration": int(os.getenv("BUSINESS_BREAK_MINUTES", "60")),
    "late_threshold": int(os.getenv("BUSINESS_LATE_THRESHOLD", "15")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
