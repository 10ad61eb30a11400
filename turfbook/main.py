import logging

from fastapi import FastAPI

from .config import get_settings
from .middleware.role_guard import role_guard_middleware
from .redis_client import get_redis_client

settings = get_settings()
logging.basicConfig(level=settings.log_level)

app = FastAPI(title="Turfbook")

app.middleware("http")(role_guard_middleware)


@app.get("/health")
def health():
    client = get_redis_client()
    return {"status": "ok", "redis": client.ping() if client is not None else None}
