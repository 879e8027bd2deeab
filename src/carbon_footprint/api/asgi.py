"""ASGI entrypoint for the carbon footprint API."""

from carbon_footprint.api.app import create_app
from carbon_footprint.containers import build_container

app = create_app(build_container())
