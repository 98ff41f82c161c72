# backend/almacen/config.py
from __future__ import annotations
import os


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # In-memory SQLite: every restart starts from an empty (or seeded) store
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",  # optional file-backed location for local inspection
        "sqlite:///:memory:",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Load the demo catalog (3 products, their inventory and 2 movements) on startup
    SEED_SAMPLE_DATA = _env_flag("ALMACEN_SEED_SAMPLE_DATA", True)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Dev client origins allowed by the CORS hook
    CORS_ALLOWED_ORIGINS = {
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:4173",
        "http://127.0.0.1:4173",
    }


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SEED_SAMPLE_DATA = False
    LOG_LEVEL = "DEBUG"
