from .config import claim_settings_from_env, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env("cmcs_test_db")

CLAIM_SETTINGS = claim_settings_from_env()

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
