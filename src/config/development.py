import os

from .config import Config, store_config

SECRET_KEY = Config.SECRET_KEY

# memory keeps everything in-process; set STORE_BACKEND=firestore to use a project
STORE_CONFIG = store_config(Config.STORE_BACKEND)

DEBUG = bool(int(os.getenv("DEBUG", "1")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

STREAM_HEARTBEAT_SECONDS = Config.STREAM_HEARTBEAT_SECONDS
