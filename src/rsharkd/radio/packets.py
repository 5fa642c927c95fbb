"""
Control packet encoder for the RadioSHARK.

Every command is a fixed 6-byte HID report written to the interrupt
OUT endpoint::

    [opcode] [payload ...........................]
     byte 0   bytes 1-5 (unused bytes are zero)

Opcodes
-------

- **0xC0**: Tune. Bytes 2-3 hold the big-endian tuning value from
  ``rsharkd.radio.codec``. Byte 1 is ``0x12`` for AM, ``0x00`` for FM.
- **0xA0**: Blue LED intensity, byte 1 = 0-127.
- **0xA1**: Blue LED pulse rate, byte 1 = 0-127 (0 = steady).
- **0xA9**: Red LED on, byte 1 = 1.
- **0xA8**: Red LED off, byte 1 = 0.

Example: tune FM 101.1 MHz (tuning value 8947 = 0x22F3)::

    [0xC0, 0x00, 0x22, 0xF3, 0x00, 0x00]

This is the lowest layer of hardware knowledge: it deals in opcodes and
bytes, not configurations. Nothing here validates; callers run the
validator first.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from rsharkd.models.enums import Modulation

PACKET_LENGTH = 6
AM_DISCRIMINATOR = 0x12


class Opcode(IntEnum):
    """Command opcodes (byte 0)."""

    FREQUENCY = 0xC0
    BLUE_INTENSITY = 0xA0
    BLUE_PULSE = 0xA1
    RED_ON = 0xA9
    RED_OFF = 0xA8


@dataclass(frozen=True)
class CommandPacket:
    """One immutable 6-byte control packet."""

    data: bytes

    def __post_init__(self):
        if len(self.data) != PACKET_LENGTH:
            raise ValueError(f"control packets are {PACKET_LENGTH} bytes, got {len(self.data)}")

    @classmethod
    def build(cls, opcode: int, *payload: int) -> "CommandPacket":
        """Build a packet from an opcode and leading payload bytes."""
        raw = bytearray(PACKET_LENGTH)
        raw[0] = opcode
        raw[1:1 + len(payload)] = bytes(payload)
        return cls(bytes(raw))

    @property
    def opcode(self) -> int:
        return self.data[0]

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return PACKET_LENGTH

    def __getitem__(self, index):
        return self.data[index]

    def hex(self) -> str:
        return self.data.hex(" ")


def encode_frequency(tuning_value: int, band: Union[str, Modulation]) -> CommandPacket:
    """Tune packet; the AM variant carries the band discriminator in byte 1."""
    discriminator = AM_DISCRIMINATOR if Modulation.parse(band) is Modulation.AM else 0x00
    return CommandPacket.build(
        Opcode.FREQUENCY,
        discriminator,
        (tuning_value >> 8) & 0xFF,
        tuning_value & 0xFF,
    )


def encode_blue_intensity(value: int) -> CommandPacket:
    return CommandPacket.build(Opcode.BLUE_INTENSITY, value)


def encode_blue_pulse(value: int) -> CommandPacket:
    return CommandPacket.build(Opcode.BLUE_PULSE, value)


def encode_red_led(on: bool) -> CommandPacket:
    if on:
        return CommandPacket.build(Opcode.RED_ON, 1)
    return CommandPacket.build(Opcode.RED_OFF, 0)
