import os

from .config import Config

SECRET_KEY = Config.SECRET_KEY
LOG_LEVEL = "DEBUG"

ZONE = Config.ZONE
LOCATION_OPTIONS = Config.LOCATION_OPTIONS

STORAGE_BACKEND = Config.STORAGE_BACKEND
STORAGE_PATH = Config.STORAGE_PATH
DB_CONFIG = Config.DB_CONFIG

DEBUG = True

# If enabled (mysql backend only), schema.sql is applied on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
