"""ASGI entrypoint, served with ``uvicorn ecoconnect.api.asgi:app``."""

from ecoconnect.api.app import create_app
from ecoconnect.config import Settings
from ecoconnect.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
