import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_SECRET = os.getenv("JWT_SECRET", "dev_secret_change_me")
JWT_ALGORITHM = "HS256"

# "mysql" or "memory"
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql").lower()
STORE_TIMEOUT_SECONDS = int(os.getenv("STORE_TIMEOUT_SECONDS", "5"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

# Apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

SESSION_CODE_MAX_ATTEMPTS = 5
SESSION_MAX_DURATION_SECONDS = 24 * 60 * 60

LOGS_DEFAULT_PAGE_SIZE = 25
LOGS_MAX_PAGE_SIZE = 100
EXPORT_MAX_ROWS = 100_000

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
