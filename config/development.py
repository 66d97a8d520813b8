import os

from .config import Config, claim_settings_from_env, db_config_from_env

SECRET_KEY = Config.SECRET_KEY

DB_CONFIG = db_config_from_env()

CLAIM_SETTINGS = claim_settings_from_env()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo lecturers and one account per role
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
