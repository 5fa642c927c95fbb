"""RadioSHARK hardware layer: frequency codec, control packets, USB handle."""

from .codec import parse_am, parse_fm, parse_frequency
from .handle import DeviceHandle, UsbDeviceHandle, list_devices, open_device
from .packets import (
    CommandPacket,
    Opcode,
    encode_blue_intensity,
    encode_blue_pulse,
    encode_frequency,
    encode_red_led,
)

__all__ = [
    "CommandPacket",
    "DeviceHandle",
    "Opcode",
    "UsbDeviceHandle",
    "encode_blue_intensity",
    "encode_blue_pulse",
    "encode_frequency",
    "encode_red_led",
    "list_devices",
    "open_device",
    "parse_am",
    "parse_fm",
    "parse_frequency",
]
