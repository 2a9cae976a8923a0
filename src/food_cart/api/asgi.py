"""ASGI entrypoint for the food cart API."""

from food_cart.api.app import create_app
from food_cart.containers import build_container

app = create_app(build_container())
