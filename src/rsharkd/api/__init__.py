"""HTTP control surface for the radio."""

from .app import create_app, error_payload, serve

__all__ = ["create_app", "error_payload", "serve"]
