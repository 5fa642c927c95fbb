"""Radio service: the validate -> apply -> persist workflow."""

import logging
from collections.abc import Callable
from threading import Lock
from typing import Any, Optional

from rsharkd.exceptions import ErrorContext, RadioSharkError, collect_errors
from rsharkd.models import CommitPolicy, RadioConfig, ServerSettings
from rsharkd.radio.codec import parse_frequency
from rsharkd.radio.handle import DeviceHandle, open_device
from rsharkd.radio.packets import (
    encode_blue_intensity,
    encode_blue_pulse,
    encode_frequency,
    encode_red_led,
)
from rsharkd.utils.persistence import ConfigStore, JsonConfigStore

from .validator import validate_config

logger = logging.getLogger(__name__)


class RadioService:
    """
    Owns the radio and its current configuration.

    Applying a configuration validates it, writes the changed frequency
    and every LED channel to the device, and persists it once every write
    succeeded.

    Design Notes:
        - Validation failures have no side effects at all.
        - Device writes are independent: a failed write is recorded and
          the remaining writes still run. Nothing is retried.
        - LED channels are re-sent on every apply; the device can't be
          asked for its LED state, so known values are re-asserted.
        - The frequency is only re-sent when modulation or frequency
          differ from the held configuration.

    Commit Policy:
        ``CommitPolicy.OPTIMISTIC`` (default) makes the candidate the held
        configuration before any write, so ``get()`` returns it even when
        a write failed. ``CommitPolicy.CONFIRMED`` only holds it once
        every write succeeded. Under both, ``get_last_applied()`` returns
        the last configuration the device fully accepted.

    Threading:
        One lock guards the held configuration and the device. ``get``,
        ``validate`` and ``apply`` each hold it for the whole call, so
        readers never see a half-applied configuration and device writes
        from two applies never interleave. A slow device write blocks
        readers until it returns.
    """

    def __init__(
        self,
        device: DeviceHandle,
        store: ConfigStore,
        commit_policy: CommitPolicy = CommitPolicy.OPTIMISTIC,
    ):
        """
        Initialize the service. Nothing is sent until start() or apply().

        Args:
            device: Open handle to the radio (owned from here on)
            store: Where applied configurations are persisted
            commit_policy: When a requested configuration becomes current
        """
        self._device = device
        self._store = store
        self._commit_policy = commit_policy
        self._config: Optional[RadioConfig] = None
        self._last_applied: Optional[RadioConfig] = None
        self._lock = Lock()

        logger.info(f"RadioService initialized (commit policy: {commit_policy.value})")

    @property
    def commit_policy(self) -> CommitPolicy:
        return self._commit_policy

    # =================================================================
    # Lifecycle
    # =================================================================

    def start(self, config: RadioConfig) -> None:
        """
        Push a configuration to the device unconditionally.

        Used once at startup: every channel, frequency included, is
        written regardless of what the device currently does.

        Raises:
            AggregateError: If the configuration is invalid or a write failed
            PersistenceError: If the configuration could not be saved
        """
        with self._lock:
            self._config = None
            self._apply_locked(config)
        logger.info(f"Radio started at {config.modulation} {config.frequency}")

    def close(self) -> None:
        """Close the device handle."""
        with self._lock:
            self._device.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # =================================================================
    # Configuration access
    # =================================================================

    def get(self) -> RadioConfig:
        """
        Get a copy of the current configuration.

        Raises:
            RuntimeError: If start() hasn't pushed a configuration yet
        """
        with self._lock:
            return self._current().model_copy(deep=True)

    def get_last_applied(self) -> Optional[RadioConfig]:
        """Copy of the last configuration whose device writes all succeeded."""
        with self._lock:
            if self._last_applied is None:
                return None
            return self._last_applied.model_copy(deep=True)

    def _current(self) -> RadioConfig:
        if self._config is None:
            raise RuntimeError("RadioService has no configuration; call start() first")
        return self._config

    # =================================================================
    # Validate / apply
    # =================================================================

    def validate(self, candidate: RadioConfig) -> None:
        """
        Validate a candidate without applying it.

        Raises:
            AggregateError: Listing every failed check
        """
        with self._lock:
            validate_config(candidate)

    def apply(self, candidate: RadioConfig) -> None:
        """
        Validate, apply and persist a configuration.

        Raises:
            AggregateError: Validation failures (nothing happened), or the
                failed device writes (configuration not persisted)
            PersistenceError: All writes succeeded but saving failed
        """
        with self._lock:
            self._apply_locked(candidate)

    def apply_partial(self, values: dict[str, Any]) -> RadioConfig:
        """
        Overlay some fields onto the current configuration and apply it.

        Args:
            values: Field values keyed by name or alias

        Returns:
            The configuration that was applied

        Raises:
            AttributeError: If a key isn't a configuration field
            ValidationError: If a value doesn't fit the model
            AggregateError, PersistenceError: As for apply()
        """
        with self._lock:
            candidate = self._current().overlay(values)
            self._apply_locked(candidate)
            return candidate.model_copy(deep=True)

    def _apply_locked(self, candidate: RadioConfig) -> None:
        validate_config(candidate)

        candidate = candidate.model_copy(deep=True)
        previous = self._config
        if self._commit_policy is CommitPolicy.OPTIMISTIC:
            self._config = candidate

        collector = collect_errors("apply configuration")

        if (
            previous is None
            or previous.modulation != candidate.modulation
            or previous.frequency != candidate.frequency
        ):
            with collector.try_operation("set frequency", field="frequency"):
                tuning_value = parse_frequency(candidate.modulation, candidate.frequency)
                self._device.send(encode_frequency(tuning_value, candidate.modulation))

        with collector.try_operation("set blue LED intensity", field="blue-led-intensity"):
            self._device.send(encode_blue_intensity(candidate.blue_led_intensity))

        with collector.try_operation("set blue LED pulse rate", field="blue-led-pulse-rate"):
            self._device.send(encode_blue_pulse(candidate.blue_led_pulse_rate))

        with collector.try_operation("set red LED", field="red-led"):
            self._device.send(encode_red_led(candidate.red_led))

        if collector.has_errors:
            logger.error(collector.get_summary())
            raise collector.to_exception()

        self._config = candidate
        self._last_applied = candidate
        logger.debug(f"Applied configuration: {candidate.to_record()}")

        self._store.save(candidate)


def create_service(
    settings: ServerSettings,
    opener: Callable[..., DeviceHandle] = open_device,
    store: Optional[ConfigStore] = None,
) -> RadioService:
    """
    Build and start the radio service from the daemon settings.

    Loads the persisted configuration (default when absent or corrupt),
    opens the device and pushes the configuration to it.

    Args:
        settings: Daemon settings
        opener: Callable returning a DeviceHandle for an identifier
        store: Config store (defaults to the settings' config file)

    Raises:
        ConfigurationError: If the config file exists but can't be read
        DeviceNotFoundError, DeviceIOError: If the device can't be opened
        AggregateError, PersistenceError: If the initial apply fails
    """
    store = store or JsonConfigStore(settings.config_path)
    config = store.load()

    with ErrorContext(f"open radio {settings.device}", logger_instance=logger):
        device = opener(settings.device, timeout_ms=settings.usb_timeout_ms)

    service = RadioService(device, store, commit_policy=settings.commit_policy)
    try:
        with ErrorContext("apply initial configuration", logger_instance=logger):
            service.start(config)
    except RadioSharkError:
        service.close()
        raise
    return service
