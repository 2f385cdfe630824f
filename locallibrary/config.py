import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Application
    app_name: str = os.getenv("APP_NAME", "Local Library")
    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    # Database
    database_file: str = os.getenv("LIBRARY_DB_FILE", "locallibrary.db")


settings = Settings()
