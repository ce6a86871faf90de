SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"
JWT_ALGORITHM = "HS256"

STORE_BACKEND = "memory"
STORE_TIMEOUT_SECONDS = 5

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "attendance_tracker_test",
}

AUTO_INIT_DB = False

SESSION_CODE_MAX_ATTEMPTS = 5
SESSION_MAX_DURATION_SECONDS = 24 * 60 * 60

LOGS_DEFAULT_PAGE_SIZE = 25
LOGS_MAX_PAGE_SIZE = 100
EXPORT_MAX_ROWS = 100_000

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
