"""USB device handle for the RadioSHARK.

The radio is a HID device with a single interrupt OUT endpoint. Every
command is one 6-byte write (see ``rsharkd.radio.packets``); the device
never answers, so the handle only exposes ``send`` and ``close``.

Devices are addressed by a ``"bus:address"`` identifier such as
``"001:004"``, the form printed by ``rsharkd devices list``.
"""

import logging
from typing import Optional, Protocol

import usb.core
import usb.util

from rsharkd.exceptions import (
    DeviceClosedError,
    DeviceIOError,
    DeviceNotFoundError,
    wrap_usb_error,
)
from .packets import CommandPacket

logger = logging.getLogger(__name__)

VENDOR_ID = 0x077D
PRODUCT_ID = 0x627A
ENDPOINT = 0x05
INTERFACE = 0
DEFAULT_TIMEOUT_MS = 1000


class DeviceHandle(Protocol):
    """Protocol for an open channel to one radio."""

    identifier: str

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        ...

    def send(self, packet: CommandPacket) -> None:
        """
        Transmit one control packet.

        Raises:
            DeviceIOError: On any transport failure
            DeviceClosedError: If the handle was closed
        """
        ...

    def close(self) -> None:
        """Release the channel. Safe to call more than once."""
        ...


class UsbDeviceHandle:
    """DeviceHandle backed by a pyusb device."""

    def __init__(self, device: usb.core.Device, identifier: str, timeout_ms: int = DEFAULT_TIMEOUT_MS):
        """
        Wrap an already configured and claimed pyusb device.

        Args:
            device: pyusb device with INTERFACE claimed
            identifier: "bus:address" identifier used in messages
            timeout_ms: Timeout for each interrupt write
        """
        self._device = device
        self.identifier = identifier
        self._timeout_ms = timeout_ms
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, packet: CommandPacket) -> None:
        if self._closed:
            raise DeviceClosedError(self.identifier)

        data = bytes(packet)
        try:
            written = self._device.write(ENDPOINT, data, self._timeout_ms)
        except usb.core.USBError as e:
            raise wrap_usb_error(e, identifier=self.identifier) from e

        if written != len(data):
            raise DeviceIOError(
                f"short write to device: {written} of {len(data)} bytes",
                identifier=self.identifier,
            )
        logger.debug(f"Sent packet to {self.identifier}: {packet.hex()}")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        try:
            usb.util.release_interface(self._device, INTERFACE)
        except usb.core.USBError as e:
            logger.error(f"Error releasing radio interface: {e}")
        usb.util.dispose_resources(self._device)
        logger.info(f"Closed radio {self.identifier}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def device_identifier(device: usb.core.Device) -> str:
    """Identifier for a pyusb device ("bus:address")."""
    return f"{device.bus:03d}:{device.address:03d}"


def parse_identifier(identifier: str) -> tuple[int, int]:
    """
    Split a "bus:address" identifier.

    Raises:
        DeviceNotFoundError: If the identifier isn't in that form
    """
    bus, sep, address = identifier.strip().partition(":")
    if not sep or not bus.isdigit() or not address.isdigit():
        error = DeviceNotFoundError(identifier)
        error.recovery_hint = (
            "Device identifiers look like 001:004. "
            "Run 'rsharkd devices list' to see attached radios."
        )
        raise error
    return int(bus), int(address)


def list_devices(backend=None) -> list[str]:
    """Identifiers of every attached RadioSHARK."""
    try:
        devices = usb.core.find(
            find_all=True, idVendor=VENDOR_ID, idProduct=PRODUCT_ID, backend=backend
        )
    except usb.core.NoBackendError as e:
        raise DeviceIOError("no USB backend available", original_error=str(e)) from e
    return sorted(device_identifier(d) for d in devices)


def _detach_kernel_driver(device: usb.core.Device) -> bool:
    # Not supported on every platform (pyusb raises NotImplementedError on Windows)
    try:
        if not device.is_kernel_driver_active(INTERFACE):
            return False
    except NotImplementedError:
        logger.debug("Kernel driver query not supported on this platform")
        return False
    device.detach_kernel_driver(INTERFACE)
    return True


def open_device(
    identifier: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    backend=None,
) -> UsbDeviceHandle:
    """
    Open the radio with the given identifier.

    Detaches the kernel's radio driver if it has bound the interface,
    selects the default configuration and claims the control interface.

    Args:
        identifier: "bus:address" identifier
        timeout_ms: Timeout for each write
        backend: Optional pyusb backend (tests)

    Raises:
        DeviceNotFoundError: If no radio has that identifier
        DeviceIOError: If the device could not be opened
    """
    bus, address = parse_identifier(identifier)

    try:
        device: Optional[usb.core.Device] = usb.core.find(
            idVendor=VENDOR_ID,
            idProduct=PRODUCT_ID,
            bus=bus,
            address=address,
            backend=backend,
        )
    except usb.core.NoBackendError as e:
        raise DeviceIOError("no USB backend available", identifier=identifier,
                            original_error=str(e)) from e

    if device is None:
        raise DeviceNotFoundError(identifier)

    try:
        if _detach_kernel_driver(device):
            logger.info(f"Detached kernel driver from radio {identifier}")
        device.set_configuration()
        usb.util.claim_interface(device, INTERFACE)
    except usb.core.USBError as e:
        raise wrap_usb_error(e, identifier=identifier, action="open device") from e

    logger.info(f"Opened radio {identifier}")
    return UsbDeviceHandle(device, identifier, timeout_ms=timeout_ms)
