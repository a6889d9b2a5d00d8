"""ASGI entrypoint for the food analyzer API."""

from food_analyzer.api.app import create_app
from food_analyzer.containers import build_container

app = create_app(build_container())
