"""Pytest fixtures for tests."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from rsharkd.exceptions import DeviceIOError
from rsharkd.models import CommitPolicy, RadioConfig
from rsharkd.services import RadioService
from rsharkd.utils import JsonConfigStore


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Location of a per-test configuration file."""
    return tmp_path / "rsharkd.001-004.conf"


@pytest.fixture
def mock_device():
    """Create a mock device handle that accepts every packet."""
    device = Mock()
    device.identifier = "001:004"
    device.closed = False
    device.send = Mock(return_value=None)
    device.close = Mock()
    return device


@pytest.fixture
def mock_store():
    """Create a mock config store."""
    store = Mock()
    store.load = Mock(return_value=RadioConfig())
    store.save = Mock()
    return store


@pytest.fixture
def json_store(config_path):
    """Config store writing to a temporary file."""
    return JsonConfigStore(config_path)


@pytest.fixture
def default_config():
    """The documented default configuration."""
    return RadioConfig()


@pytest.fixture
def started_service(mock_device, mock_store, default_config):
    """Service that has pushed the default configuration, mocks reset."""
    service = RadioService(mock_device, mock_store)
    service.start(default_config)
    mock_device.send.reset_mock()
    mock_store.save.reset_mock()
    return service


@pytest.fixture
def confirmed_service(mock_device, mock_store, default_config):
    """Started service using the confirmed commit policy, mocks reset."""
    service = RadioService(mock_device, mock_store, commit_policy=CommitPolicy.CONFIRMED)
    service.start(default_config)
    mock_device.send.reset_mock()
    mock_store.save.reset_mock()
    return service


def _sent_packets(device) -> list[bytes]:
    return [bytes(call.args[0]) for call in device.send.call_args_list]


def _fail_on_opcodes(*opcodes: int):
    def send(packet):
        if packet.opcode in opcodes:
            raise DeviceIOError(f"failed to write to device: opcode {packet.opcode:#x} rejected")
    return send


@pytest.fixture
def sent_packets():
    """Raw bytes of every packet sent to a mock device, in order."""
    return _sent_packets


@pytest.fixture
def fail_on_opcodes():
    """Build a send() side effect raising DeviceIOError for the given opcodes."""
    return _fail_on_opcodes
