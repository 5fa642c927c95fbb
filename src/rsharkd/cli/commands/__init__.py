"""CLI commands for rsharkd."""

from .config import config_group
from .devices import devices_group
from .serve import serve

__all__ = ["config_group", "devices_group", "serve"]
