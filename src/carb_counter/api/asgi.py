"""ASGI entrypoint for the carb counter API."""

from carb_counter.api.app import create_app
from carb_counter.containers import build_container

app = create_app(build_container())
