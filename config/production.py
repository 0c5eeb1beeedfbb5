import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "timeclock"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/timeclock.log")

SELFIE_STORAGE_DIR = os.getenv("SELFIE_STORAGE_DIR", "/var/lib/timeclock")
SELFIE_BUCKET = os.getenv("SELFIE_BUCKET", "selfies")

RECONCILE_MAX_ATTEMPTS = int(os.getenv("RECONCILE_MAX_ATTEMPTS", "3"))
RECONCILE_BACKOFF_SECONDS = float(os.getenv("RECONCILE_BACKOFF_SECONDS", "0.5"))
RECONCILE_WORKERS = int(os.getenv("RECONCILE_WORKERS", "2"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
