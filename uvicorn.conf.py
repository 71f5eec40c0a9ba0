from app.core.config import get_settings

settings = get_settings()

app = "app.main:app"
host = settings.BACKEND_HOST
port = settings.BACKEND_PORT
log_level = "debug" if settings.DEBUG else "info"
# SQLite serialises writers; more workers only help on a server database.
workers = 1 if settings.DEBUG or settings.DATABASE_URL.startswith("sqlite") else 2
