"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Telemetry tick interval in milliseconds
    UPDATE_INTERVAL_MS: int = int(os.getenv("UPDATE_INTERVAL_MS", "5000"))

    # Service scheduling
    SERVICE_INTERVAL_MONTHS: int = int(os.getenv("SERVICE_INTERVAL_MONTHS", "6"))
    METRIC_HISTORY_LIMIT: int = int(os.getenv("METRIC_HISTORY_LIMIT", "50"))

    # Simulation
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))
    HISTORY_DAYS: int = int(os.getenv("HISTORY_DAYS", "30"))

    # Role-switcher default (seeded manager)
    DEFAULT_USER_ID: str = os.getenv("DEFAULT_USER_ID", "user-1")


settings = Settings()
