"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else None


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    PORT: int = int(os.getenv("PORT", "4000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    CORS_ORIGIN: str = os.getenv("CORS_ORIGIN", "*")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Simulation
    TICK_INTERVAL_S: float = float(os.getenv("TICK_INTERVAL_S", "3.0"))
    WEAR_RATE: float = float(os.getenv("WEAR_RATE", "0.02"))
    SIMULATION_SEED: int | None = _optional_int("SIMULATION_SEED")

    # Retention
    WINDOW_CAPACITY: int = int(os.getenv("WINDOW_CAPACITY", "20"))
    LOG_CAPACITY: int = int(os.getenv("LOG_CAPACITY", "50"))

    # Push delivery
    SUBSCRIBER_QUEUE_SIZE: int = int(os.getenv("SUBSCRIBER_QUEUE_SIZE", "256"))
    SSE_KEEPALIVE_S: float = float(os.getenv("SSE_KEEPALIVE_S", "15.0"))

    # Operator console refresh in milliseconds
    CONSOLE_REFRESH_MS: int = int(os.getenv("CONSOLE_REFRESH_MS", "3000"))


settings = Settings()
