"""
Modulo di configurazione per l'applicazione Flask del bottin DAM.
"""

import os
import tempfile
from datetime import timedelta
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Configurazione base, comune a tutti gli ambienti."""

    # Chiave segreta: firma il cookie di sessione, in produzione va sovrascritta
    SECRET_KEY = os.environ.get("SECRET_KEY", "bottin-dam-secret-change-me")

    # --- CONFIGURAZIONE DATABASE MYSQL --------------------------------------
    DB_USER = os.environ.get("DB_USER", "bottin")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "bottin")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = os.environ.get("DB_PORT", "3306")
    DB_NAME = os.environ.get("DB_NAME", "bottin_dam")

    DEFAULT_DB_URL = (
        f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    )

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", DEFAULT_DB_URL)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- STORAGE ------------------------------------------------------------
    # "sql" -> DatabaseStorage (MySQL/SQLite tramite SQLAlchemy)
    # "memory" -> MemoryStorage (sviluppo locale e test)
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "sql")

    # --- SESSIONE -----------------------------------------------------------
    SESSION_LIFETIME = timedelta(days=int(os.environ.get("SESSION_LIFETIME_DAYS", "7")))
    PERMANENT_SESSION_LIFETIME = SESSION_LIFETIME
    SESSION_COOKIE_NAME = "dam_session"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = False

    # --- ACCOUNT AMMINISTRATORE INIZIALE -------------------------------------
    # Usato da `manage.py create-admin` e dal seed dello storage in memoria
    ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@dam.org")

    # --- LOGGING -------------------------------------------------------------
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE_NAME = os.environ.get("LOG_FILE_NAME", "app.log")


class DevConfig(Config):
    """Configurazione per ambiente di sviluppo."""
    DEBUG = True
    ENV = "development"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "memory")


class ProdConfig(Config):
    """Configurazione per ambiente di produzione."""
    DEBUG = False
    ENV = "production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    SESSION_COOKIE_SECURE = True


class TestConfig(Config):
    """Configurazione per la suite pytest (SQLite in memoria, niente MySQL)."""
    TESTING = True
    DEBUG = False
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    STORAGE_BACKEND = "memory"
    ADMIN_USERNAME = None
    ADMIN_PASSWORD = None
    LOG_DIR = str(Path(tempfile.gettempdir()) / "bottin-test-logs")
    LOG_LEVEL = "WARNING"
