import os

from .config import Config, store_config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORE_CONFIG = store_config(os.getenv("STORE_BACKEND", "firestore"))

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

STREAM_HEARTBEAT_SECONDS = Config.STREAM_HEARTBEAT_SECONDS
