import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
JWT_SECRET = os.getenv("JWT_SECRET", "please-set-JWT_SECRET")
JWT_ALGORITHM = "HS256"

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql").lower()
STORE_TIMEOUT_SECONDS = int(os.getenv("STORE_TIMEOUT_SECONDS", "5"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

SESSION_CODE_MAX_ATTEMPTS = int(os.getenv("SESSION_CODE_MAX_ATTEMPTS", "5"))
SESSION_MAX_DURATION_SECONDS = int(os.getenv("SESSION_MAX_DURATION_SECONDS", str(24 * 60 * 60)))

LOGS_DEFAULT_PAGE_SIZE = 25
LOGS_MAX_PAGE_SIZE = 100
EXPORT_MAX_ROWS = int(os.getenv("EXPORT_MAX_ROWS", "100000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False
