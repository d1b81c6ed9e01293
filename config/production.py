import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
LOG_LEVEL = Config.LOG_LEVEL

ZONE = Config.ZONE
LOCATION_OPTIONS = Config.LOCATION_OPTIONS

STORAGE_BACKEND = Config.STORAGE_BACKEND
STORAGE_PATH = Config.STORAGE_PATH
DB_CONFIG = Config.DB_CONFIG

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
