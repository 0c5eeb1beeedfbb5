import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_test"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_FILE = None

SELFIE_STORAGE_DIR = os.getenv("SELFIE_STORAGE_DIR", "/tmp/timeclock-test")
SELFIE_BUCKET = "selfies"

RECONCILE_MAX_ATTEMPTS = 1
RECONCILE_BACKOFF_SECONDS = 0.0
RECONCILE_WORKERS = 0

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
