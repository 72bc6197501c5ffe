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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")

    # Base64 HMAC keys, at least 32 bytes each once decoded
    ACCESS_TOKEN_SECRET = data.get(
        "ACCESS_TOKEN_SECRET", "ZGV2LWFjY2Vzcy10b2tlbi1zZWNyZXQtY2hhbmdlLWluLXByb2R1Y3Rpb24="
    )
    REFRESH_TOKEN_SECRET = data.get(
        "REFRESH_TOKEN_SECRET", "ZGV2LXJlZnJlc2gtdG9rZW4tc2VjcmV0LWNoYW5nZS1pbi1wcm9kdWN0aW9u"
    )
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_TTL_MINUTES = data.get("ACCESS_TOKEN_TTL_MINUTES", 15)
    REFRESH_TOKEN_TTL_DAYS = data.get("REFRESH_TOKEN_TTL_DAYS", 7)
    ACCESS_COOKIE_NAME = data.get("ACCESS_COOKIE_NAME", "access_token")
    REFRESH_COOKIE_NAME = data.get("REFRESH_COOKIE_NAME", "refresh_token")

    USER_SERVICE_URL = data.get("USER_SERVICE_URL", "http://localhost:8081")
    USER_SERVICE_TIMEOUT_SECONDS = data.get("USER_SERVICE_TIMEOUT_SECONDS", 5.0)

    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    REDIS_TIMEOUT_SECONDS = data.get("REDIS_TIMEOUT_SECONDS", 5.0)
    NOTIFICATION_QUEUE = data.get("NOTIFICATION_QUEUE", "platform-emails")
    CREATE_CREDENTIALS_QUEUE = data.get("CREATE_CREDENTIALS_QUEUE", "create-credentials")
    RESET_PASSCODE_QUEUE = data.get("RESET_PASSCODE_QUEUE", "reset-passcode")
    DELETE_USER_DATA_QUEUE = data.get("DELETE_USER_DATA_QUEUE", "delete-user-data")
    ENABLE_CONSUMER = bool(data.get("ENABLE_CONSUMER", True))

    ENABLE_SWEEPER = bool(data.get("ENABLE_SWEEPER", True))
    SWEEPER_INTERVAL_MINUTES = data.get("SWEEPER_INTERVAL_MINUTES", 5)
    CREATE_TABLES = bool(data.get("CREATE_TABLES", True))
