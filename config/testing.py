from .config import Config

SECRET_KEY = "test-secret"
LOG_LEVEL = "WARNING"

ZONE = Config.ZONE
LOCATION_OPTIONS = Config.LOCATION_OPTIONS

STORAGE_BACKEND = "memory"
STORAGE_PATH = None
DB_CONFIG = Config.DB_CONFIG

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
