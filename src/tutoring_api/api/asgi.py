"""ASGI entrypoint for the tutoring API."""

from tutoring_api.api.app import create_app
from tutoring_api.containers import build_container

app = create_app(build_container())
