import json
import os


def _credentials_json():
    raw = os.environ.get("FIREBASE_SERVICE_ACCOUNT_JSON")
    return json.loads(raw) if raw else None


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Document store
    STORE_BACKEND = os.environ.get("STORE_BACKEND", "memory")
    FIREBASE_SERVICE_ACCOUNT_FILE = os.environ.get("FIREBASE_SERVICE_ACCOUNT_FILE")
    FIREBASE_PROJECT_ID = os.environ.get("FIREBASE_PROJECT_ID")

    # Seconds between SSE keepalive comments on an idle attendance stream
    STREAM_HEARTBEAT_SECONDS = float(os.environ.get("STREAM_HEARTBEAT_SECONDS", "15"))


def store_config(backend: str) -> dict:
    return {
        "backend": backend,
        "credentials_file": Config.FIREBASE_SERVICE_ACCOUNT_FILE,
        "credentials_json": _credentials_json(),
        "project_id": Config.FIREBASE_PROJECT_ID,
    }
