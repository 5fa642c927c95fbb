"""Configuration validator.

Checks that each field of a candidate RadioConfig is well formed,
without touching hardware or service state. All checks run; failures
are reported together so a client can fix everything in one go.
"""

from rsharkd.exceptions import AggregateError, ConfigValueError, RangeError, UnknownModulationError
from rsharkd.models import RadioConfig
from rsharkd.radio.codec import parse_frequency

LED_MAX = 127


def check_modulation(config: RadioConfig) -> None:
    if config.band is None:
        raise UnknownModulationError(config.modulation)


def check_frequency(config: RadioConfig) -> None:
    # Unknown bands are reported by check_modulation only
    if config.band is None:
        return
    parse_frequency(config.band, config.frequency)


def check_blue_led_intensity(config: RadioConfig) -> None:
    if config.blue_led_intensity > LED_MAX:
        raise RangeError(
            f"intensity must be at most {LED_MAX}",
            field="blue-led-intensity",
            value=config.blue_led_intensity,
        )


def check_blue_led_pulse_rate(config: RadioConfig) -> None:
    if config.blue_led_pulse_rate > LED_MAX:
        raise RangeError(
            f"rate must be at most {LED_MAX}",
            field="blue-led-pulse-rate",
            value=config.blue_led_pulse_rate,
        )


CHECKS = (
    check_modulation,
    check_frequency,
    check_blue_led_intensity,
    check_blue_led_pulse_rate,
)


def check_config(config: RadioConfig) -> list[ConfigValueError]:
    """Run every check and return the failures in check order."""
    failures: list[ConfigValueError] = []
    for check in CHECKS:
        try:
            check(config)
        except ConfigValueError as e:
            failures.append(e)
    return failures


def validate_config(config: RadioConfig) -> None:
    """
    Validate a candidate configuration.

    Raises:
        AggregateError: Listing every failed check, if any failed
    """
    failures = check_config(config)
    if failures:
        raise AggregateError(failures, operation="validate configuration")
