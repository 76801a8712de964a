"""ASGI entrypoint for the nutrition API."""

from nutrimom.api.app import create_app
from nutrimom.containers import build_container

app = create_app(build_container())
