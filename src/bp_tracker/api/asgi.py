"""ASGI entrypoint for the blood pressure tracker API."""

from bp_tracker.api.app import create_app
from bp_tracker.containers import build_container

app = create_app(build_container())
