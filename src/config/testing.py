SECRET_KEY = "test-secret"

STORE_CONFIG = {"backend": "memory"}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STREAM_HEARTBEAT_SECONDS = 0.05
