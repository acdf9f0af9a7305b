"""ASGI entrypoint for the nutrition engine API."""

from nutrition_engine.api.app import create_app
from nutrition_engine.containers import build_container

app = create_app(build_container())
