import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./principals.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    LICENSE_SERVICE_URL = data.get("LICENSE_SERVICE_URL", "http://localhost:8101")
    TENANT_SERVICE_URL = data.get("TENANT_SERVICE_URL", "http://localhost:8102")
    EMAIL_SERVICE_URL = data.get("EMAIL_SERVICE_URL", "http://localhost:8103")
    UPSTREAM_TIMEOUT_SECONDS = float(data.get("UPSTREAM_TIMEOUT_SECONDS", 10))
    # Provisioning-only tenants on on-prem deployments
    PROTECTED_TENANT_IDS = data.get(
        "PROTECTED_TENANT_IDS",
        [
            "2d907264-8797-4666-a8bb-72fe98733385",
            "dbae315b-6abf-4a8b-886e-c9cc0e1d16b3",
        ],
    )
    DEFAULT_LICENSE_TIER = data.get("DEFAULT_LICENSE_TIER", "default")
