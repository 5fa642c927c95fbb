"""HTTP routes for reading, validating and applying the radio configuration."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse

from rsharkd.models import RadioConfig
from rsharkd.services import RadioService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_service(request: Request) -> RadioService:
    """Dependency returning the service stored on the application."""
    return request.app.state.radio_service


@router.get("/get")
def get_config(service: RadioService = Depends(get_service)) -> JSONResponse:
    """Current configuration."""
    return JSONResponse(service.get().to_record())


@router.put("/apply")
def apply_config(
    config: RadioConfig,
    service: RadioService = Depends(get_service),
) -> JSONResponse:
    """Replace the whole configuration with the JSON body."""
    service.apply(config)
    logger.info(f"Applied configuration {config.to_record()}")
    return JSONResponse(config.to_record())


@router.post("/apply")
def apply_form(
    modulation: Optional[str] = Form(None),
    frequency: Optional[str] = Form(None),
    blue_led_intensity: Optional[int] = Form(None, alias="blue-led-intensity"),
    blue_led_pulse_rate: Optional[int] = Form(None, alias="blue-led-pulse-rate"),
    red_led: Optional[bool] = Form(None, alias="red-led"),
    service: RadioService = Depends(get_service),
) -> JSONResponse:
    """Overlay the submitted form fields onto the current configuration."""
    submitted: dict[str, Any] = {
        "modulation": modulation,
        "frequency": frequency,
        "blue_led_intensity": blue_led_intensity,
        "blue_led_pulse_rate": blue_led_pulse_rate,
        "red_led": red_led,
    }
    values = {key: value for key, value in submitted.items() if value is not None}
    applied = service.apply_partial(values)
    logger.info(f"Applied form fields {sorted(values)}")
    return JSONResponse(applied.to_record())


@router.put("/validate")
def validate_config(
    config: RadioConfig,
    service: RadioService = Depends(get_service),
) -> JSONResponse:
    """Check a configuration without applying it."""
    service.validate(config)
    return JSONResponse({"valid": True})
