"""Application configuration, overridable through environment variables."""

import os
from typing import List


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    CORS_ORIGINS = _split(
        os.environ.get(
            "WEALTH_ODYSSEY_CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173",
        )
    )
    LOG_LEVEL = os.environ.get("WEALTH_ODYSSEY_LOG_LEVEL", "INFO")
    # fixed display rate, approximate as of July 2025
    USD_TO_IDR_RATE = float(os.environ.get("WEALTH_ODYSSEY_USD_TO_IDR_RATE", "16348"))
    FIRE_MULTIPLE = float(os.environ.get("WEALTH_ODYSSEY_FIRE_MULTIPLE", "25"))
    MAX_SWEEP_RATES = int(os.environ.get("WEALTH_ODYSSEY_MAX_SWEEP_RATES", "25"))


class TestingConfig(Config):
    TESTING = True
