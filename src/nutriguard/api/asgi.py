"""ASGI entrypoint for the NutriGuard menu API."""

from nutriguard.api.app import create_app
from nutriguard.containers import build_container

app = create_app(build_container())
