import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./campus.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    SLOW_REQUEST_THRESHOLD_SECONDS = float(data.get("SLOW_REQUEST_THRESHOLD_SECONDS", 2.0))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    MEMBER_LOCK_TIMEOUT_SECONDS = float(data.get("MEMBER_LOCK_TIMEOUT_SECONDS", 5.0))
    RECENT_JOIN_WINDOW_DAYS = int(data.get("RECENT_JOIN_WINDOW_DAYS", 30))
    HISTORY_QUERY_MAX_LIMIT = int(data.get("HISTORY_QUERY_MAX_LIMIT", 200))
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", 1))
