from functools import lru_cache
from pathlib import Path
from typing import List
from urllib.parse import urlparse
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(ENV_FILE), case_sensitive=False)

    APP_NAME: str = "Visitor Kiosk Backend"
    ENVIRONMENT: str = "development"
    # FastAPI debug mode renders tracebacks for unexpected errors instead of the {"error": ...} body.
    DEBUG: bool = False
    API_PREFIX: str = ""
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 3001

    DATABASE_URL: str = "sqlite:///./visitor_kiosk.db"

    CORS_ORIGINS: str = (
        "http://localhost:5173,"
        "http://127.0.0.1:5173,"
        "http://localhost:3000"
    )
    # Kiosk tablets and the security desk usually sit on the same LAN as the API.
    CORS_ALLOW_ORIGIN_REGEX: str = (
        r"^https?://("
        r"localhost|127\.0\.0\.1|"
        r"192\.168\.\d{1,3}\.\d{1,3}|"
        r"10\.\d{1,3}\.\d{1,3}\.\d{1,3}|"
        r"172\.(1[6-9]|2\d|3[0-1])\.\d{1,3}\.\d{1,3}"
        r")(\:\d+)?$"
    )

    SOCKET_PATH: str = "/socket.io"
    SECURITY_NAMESPACE: str = "/realtime/security"

    CSV_EXPORT_FILENAME: str = "visitor_logs.csv"
    LEGACY_EXPORT_ROUTE: bool = True

    DEMO_HOSTS: str = "Front Desk <frontdesk@example.com>,Facilities <facilities@example.com>"

    @property
    def cors_origins(self) -> List[str]:
        origins: list[str] = []
        for raw in self.CORS_ORIGINS.split(","):
            value = raw.strip()
            if not value:
                continue
            parsed = urlparse(value)
            if parsed.scheme and parsed.netloc:
                value = f"{parsed.scheme}://{parsed.netloc}"
            origins.append(value.rstrip("/"))
        return origins

    @property
    def demo_hosts(self) -> list[tuple[str, str]]:
        hosts: list[tuple[str, str]] = []
        for raw in self.DEMO_HOSTS.split(","):
            value = raw.strip()
            if "<" not in value or not value.endswith(">"):
                continue
            name, _, email = value[:-1].partition("<")
            if name.strip() and email.strip():
                hosts.append((name.strip(), email.strip()))
        return hosts


@lru_cache
def get_settings() -> Settings:
    return Settings()
