"""
Frequency codec: human-readable frequencies to hardware tuning values.

The radio is tuned with a 16-bit value whose meaning depends on the band:

FM (MHz, one decimal)::

    tuning = round((mhz * 1000 + 10701) / 12.5) + 3

    88.0 MHz  -> 7899
    108.0 MHz -> 9499

The tuner steps in 12.5 kHz increments and the 10.7 MHz intermediate
frequency is folded into the offset, so every 0.1 MHz moves the value
by 8.

AM (kHz, integer)::

    tuning = khz + 450

    535 kHz  -> 985
    1705 kHz -> 2155

The functions here are pure: no device access, no logging.
"""

import math
from typing import Union

from rsharkd.exceptions import FormatError, RangeError, UnknownModulationError
from rsharkd.models.enums import Modulation

FM_MIN_MHZ = 88.0
FM_MAX_MHZ = 108.0
AM_MIN_KHZ = 535
AM_MAX_KHZ = 1705

FM_IF_OFFSET_KHZ = 10701
FM_STEP_KHZ = 12.5
FM_TUNING_OFFSET = 3
AM_TUNING_OFFSET = 450


def _clean(text: str, kind: str) -> str:
    if not isinstance(text, str):
        raise FormatError(f"{kind} must be a string, got {type(text).__name__}",
                          field="frequency", value=text)
    cleaned = text.strip()
    # float()/int() accept digit separators, frequencies don't
    if not cleaned or "_" in cleaned:
        raise FormatError(f"invalid {kind} {text!r}", field="frequency", value=text)
    return cleaned


def parse_fm(text: str) -> int:
    """
    Parse an FM frequency in MHz into its tuning value.

    Args:
        text: Decimal number, e.g. "101.1"

    Returns:
        16-bit tuning value

    Raises:
        FormatError: If text isn't a finite decimal number
        RangeError: If the frequency is outside 88.0-108.0 MHz
    """
    cleaned = _clean(text, "FM frequency")
    try:
        mhz = float(cleaned)
    except ValueError:
        raise FormatError(f"invalid FM frequency {text!r}", field="frequency", value=text) from None
    if not math.isfinite(mhz):
        raise FormatError(f"invalid FM frequency {text!r}", field="frequency", value=text)

    if mhz < FM_MIN_MHZ or mhz > FM_MAX_MHZ:
        raise RangeError(
            f"FM frequency must be between {FM_MIN_MHZ} and {FM_MAX_MHZ}",
            field="frequency",
            value=text,
        )

    scaled = (mhz * 1000 + FM_IF_OFFSET_KHZ) / FM_STEP_KHZ
    return (math.floor(scaled + 0.5) + FM_TUNING_OFFSET) & 0xFFFF


def parse_am(text: str) -> int:
    """
    Parse an AM frequency in kHz into its tuning value.

    Raises:
        FormatError: If text isn't an integer
        RangeError: If the frequency is outside 535-1705 kHz
    """
    cleaned = _clean(text, "AM frequency")
    try:
        khz = int(cleaned)
    except ValueError:
        raise FormatError(f"invalid AM frequency {text!r}", field="frequency", value=text) from None

    if khz < AM_MIN_KHZ or khz > AM_MAX_KHZ:
        raise RangeError(
            f"AM frequency must be between {AM_MIN_KHZ} and {AM_MAX_KHZ}",
            field="frequency",
            value=text,
        )

    return (khz + AM_TUNING_OFFSET) & 0xFFFF


def parse_frequency(modulation: Union[str, Modulation], text: str) -> int:
    """
    Parse a frequency for the given band.

    Raises:
        UnknownModulationError: If modulation isn't AM or FM
        FormatError, RangeError: As raised by parse_am / parse_fm
    """
    band = Modulation.parse(modulation)
    if band is Modulation.FM:
        return parse_fm(text)
    if band is Modulation.AM:
        return parse_am(text)
    raise UnknownModulationError(modulation)
