import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "student_attendance"),
}

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
MEMORY_SEED = False

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SYSTEM_NAME = os.getenv("SYSTEM_NAME", "LINKCODE ATTENDANCE MANAGEMENT SYSTEM")
SYSTEM_SHORT_NAME = os.getenv("SYSTEM_SHORT_NAME", "LINKCODE")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
