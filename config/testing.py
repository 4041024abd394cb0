import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_board_test"),
}

DEBUG = False
TESTING = True

COOKIE_SECURE = False
ADMIN_SESSION_SLIDING = True

SUPABASE_BUCKET = "member-photos-test"

LOG_LEVEL = "WARNING"
LOG_DIR = None

AUTO_INIT_DB = False
AUTO_SEED_DB = False
