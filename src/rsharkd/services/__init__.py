"""Services for rsharkd."""

from rsharkd.services.radio_service import RadioService, create_service
from rsharkd.services.validator import check_config, validate_config

__all__ = [
    "RadioService",
    "check_config",
    "create_service",
    "validate_config",
]
