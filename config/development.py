import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "student_attendance"),
}

# "mysql" or "memory" (in-process store, nothing persisted)
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
MEMORY_SEED = bool(int(os.getenv("MEMORY_SEED", "1")))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

SYSTEM_NAME = os.getenv("SYSTEM_NAME", "LINKCODE ATTENDANCE MANAGEMENT SYSTEM")
SYSTEM_SHORT_NAME = os.getenv("SYSTEM_SHORT_NAME", "LINKCODE")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
