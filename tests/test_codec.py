"""Tests for the frequency codec."""

import pytest

from rsharkd.exceptions import FormatError, RangeError, UnknownModulationError
from rsharkd.models import Modulation
from rsharkd.radio.codec import parse_am, parse_fm, parse_frequency


@pytest.mark.unit
class TestParseFM:
    """Test FM (MHz) parsing."""

    def test_band_edges(self):
        """Test both ends of the FM band."""
        assert parse_fm("88.0") == 7899
        assert parse_fm("108.0") == 9499

    def test_band_spans_1600_steps(self):
        """The FM band covers 1600 tuning steps."""
        assert parse_fm("108.0") - parse_fm("88.0") == 1600

    def test_known_station(self):
        assert parse_fm("101.1") == 8947

    def test_tenth_of_megahertz_is_eight_steps(self):
        assert parse_fm("88.1") - parse_fm("88.0") == 8
        assert parse_fm("99.9") - parse_fm("99.8") == 8

    def test_monotonic_over_band(self):
        """Higher frequency never yields a lower tuning value."""
        previous = None
        for tenths in range(880, 1081):
            value = parse_fm(f"{tenths / 10:.1f}")
            if previous is not None:
                assert value > previous
            previous = value

    def test_integer_and_whitespace_accepted(self):
        assert parse_fm("100") == parse_fm("100.0")
        assert parse_fm(" 100.0 ") == parse_fm("100.0")

    @pytest.mark.parametrize("text", ["87.9", "108.1", "0", "-100", "1e3"])
    def test_out_of_range(self, text):
        with pytest.raises(RangeError) as exc_info:
            parse_fm(text)
        assert exc_info.value.field == "frequency"
        assert "88.0" in str(exc_info.value)

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1_00.0", "nan", "inf", "100.0MHz"])
    def test_malformed(self, text):
        with pytest.raises(FormatError) as exc_info:
            parse_fm(text)
        assert exc_info.value.field == "frequency"

    def test_non_string_rejected(self):
        with pytest.raises(FormatError):
            parse_fm(100.0)


@pytest.mark.unit
class TestParseAM:
    """Test AM (kHz) parsing."""

    def test_band_edges(self):
        assert parse_am("535") == 985
        assert parse_am("1705") == 2155

    def test_known_station(self):
        assert parse_am("600") == 1050

    @pytest.mark.parametrize("text", ["534", "1706", "0"])
    def test_out_of_range(self, text):
        with pytest.raises(RangeError, match="AM frequency must be between 535 and 1705"):
            parse_am(text)

    @pytest.mark.parametrize("text", ["600.5", "six hundred", "", "6_00"])
    def test_malformed(self, text):
        with pytest.raises(FormatError):
            parse_am(text)


@pytest.mark.unit
class TestParseFrequency:
    """Test band dispatch."""

    def test_dispatch_is_case_insensitive(self):
        assert parse_frequency("fm", "88.0") == 7899
        assert parse_frequency("Am", "600") == 1050
        assert parse_frequency(Modulation.AM, "600") == 1050

    def test_unknown_modulation(self):
        with pytest.raises(UnknownModulationError) as exc_info:
            parse_frequency("SW", "9.5")
        assert exc_info.value.field == "modulation"
        assert str(exc_info.value) == "unknown modulation SW"

    def test_am_value_rejected_as_fm(self):
        with pytest.raises(RangeError):
            parse_frequency("FM", "600")
