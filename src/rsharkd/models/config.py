"""Radio and daemon configuration models."""

import re
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .enums import CommitPolicy, Modulation

DEFAULT_CONFIG_DIR = Path("/etc")
DEFAULT_STATIC_ROOT = Path("/usr/share/rsharkd")


class RadioConfig(BaseModel):
    """
    Tunable state of one radio: band, frequency and both LED channels.

    Field names on disk and over HTTP are the hyphenated aliases
    (``blue-led-intensity``...). Python code may use either form.

    Model-level bounds only describe what the record can hold (LED values
    are bytes); the tighter device limits are checked by
    ``rsharkd.services.validator``.
    """

    model_config = ConfigDict(populate_by_name=True)

    modulation: str = Field(
        default="FM",
        description="Band, AM or FM (case-insensitive, stored as given)",
    )
    frequency: str = Field(
        default="88.0",
        description="MHz with one decimal for FM, integer kHz for AM",
    )
    blue_led_intensity: int = Field(
        default=127, ge=0, le=255, alias="blue-led-intensity",
        description="Blue LED brightness (0-127)",
    )
    blue_led_pulse_rate: int = Field(
        default=0, ge=0, le=255, alias="blue-led-pulse-rate",
        description="Blue LED pulse rate, 0 for steady (0-127)",
    )
    red_led: bool = Field(default=False, alias="red-led", description="Red LED on/off")

    @property
    def band(self) -> Optional[Modulation]:
        """Parsed modulation, None when it isn't a known band."""
        return Modulation.parse(self.modulation)

    def to_record(self) -> dict[str, Any]:
        """Plain dict using the persisted key names."""
        return self.model_dump(by_alias=True)

    def overlay(self, values: dict[str, Any]) -> "RadioConfig":
        """
        Return a copy with the given fields replaced.

        Args:
            values: Field values keyed by Python name or alias

        Raises:
            AttributeError: If a key isn't a RadioConfig field
            ValidationError: If a value fails model validation
        """
        data = self.to_record()
        for key, value in values.items():
            data[_field_alias(key)] = value
        return type(self).model_validate(data)


def _field_alias(key: str) -> str:
    for name, info in RadioConfig.model_fields.items():
        alias = info.alias or name
        if key in (name, alias):
            return alias
    raise AttributeError(f"'RadioConfig' has no field '{key}'")


class ServerSettings(BaseModel):
    """Process-wide settings, built once at startup from the command line."""

    device: str = Field(min_length=1, description="Identifier of the radio to manage")
    address: str = Field(default=":8080", description="Address on which to listen (host:port)")
    config_file: Optional[Path] = Field(
        default=None,
        description="Configuration file location (default: /etc/rsharkd.<device>.conf)",
    )
    static_root: Path = Field(default=DEFAULT_STATIC_ROOT, description="Path to the web UI files")
    commit_policy: CommitPolicy = Field(
        default=CommitPolicy.OPTIMISTIC,
        description="Whether a partially failed apply still becomes the current configuration",
    )
    usb_timeout_ms: int = Field(default=1000, gt=0, description="USB write timeout")

    @field_validator("address")
    @classmethod
    def validate_address(cls, value: str) -> str:
        """Require host:port with a numeric port."""
        host, sep, port = value.rpartition(":")
        if not sep or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"invalid listen address {value!r}, expected host:port")
        return value

    @field_serializer("config_file", "static_root")
    def serialize_path(self, path: Optional[Path]) -> Optional[str]:
        """Serialize Path to string."""
        return str(path) if path is not None else None

    @property
    def host(self) -> str:
        host = self.address.rpartition(":")[0].strip("[]")
        return host or "0.0.0.0"

    @property
    def port(self) -> int:
        return int(self.address.rpartition(":")[2])

    @property
    def config_path(self) -> Path:
        """Explicit config file, or the per-device default under /etc."""
        if self.config_file is not None:
            return self.config_file
        return DEFAULT_CONFIG_DIR / f"rsharkd.{default_config_name(self.device)}.conf"


def default_config_name(device: str) -> str:
    """Turn a device identifier into something usable in a file name."""
    return re.sub(r"[^A-Za-z0-9_.-]+", "-", device).strip("-") or "default"
