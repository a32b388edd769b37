"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "SmartPass"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite par défaut pour le développement
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./smartpass.db"

    # CORS - origines autorisées / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:3001", "http://localhost:3002"]

    # Rate Limiting
    RATE_LIMIT_VERIFY: str = "120/minute"
    RATE_LIMIT_ENABLED: bool = True

    # Fenetres de trajet / Trip windows
    # Heure locale de bascule Matin -> Apres-midi / Local hour switching Morning -> Afternoon
    TIMEZONE: str = "UTC"
    TRIP_WINDOW_SPLIT_HOUR: int = 13

    # Scanner (appareil conducteur) / Scanner (conductor device)
    SERVER_URL: str = "http://localhost:8000"
    VERIFY_TIMEOUT_SECONDS: float = 8.0
    LOCAL_DUPLICATE_WINDOW_SECONDS: int = 300
    FEEDBACK_DISMISS_SECONDS: float = 3.0
    SNAPSHOT_PATH: str | None = None

    # Donnees de demo au demarrage / Demo data on startup
    SEED_DEMO_DATA: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
