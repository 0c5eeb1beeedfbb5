import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None

# Selfies are written under SELFIE_STORAGE_DIR/SELFIE_BUCKET
SELFIE_STORAGE_DIR = os.getenv("SELFIE_STORAGE_DIR", "storage")
SELFIE_BUCKET = os.getenv("SELFIE_BUCKET", "selfies")

RECONCILE_MAX_ATTEMPTS = int(os.getenv("RECONCILE_MAX_ATTEMPTS", "3"))
RECONCILE_BACKOFF_SECONDS = float(os.getenv("RECONCILE_BACKOFF_SECONDS", "0.5"))
# 0 = reconcile inline on the request thread
RECONCILE_WORKERS = int(os.getenv("RECONCILE_WORKERS", "0"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
