import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "student_attendance_test"),
}

STORE_BACKEND = "memory"
MEMORY_SEED = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SYSTEM_NAME = "LINKCODE ATTENDANCE MANAGEMENT SYSTEM"
SYSTEM_SHORT_NAME = "LINKCODE"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
