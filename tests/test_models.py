"""Unit tests for Pydantic models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from rsharkd.models import CommitPolicy, Modulation, RadioConfig, ServerSettings
from rsharkd.models.config import default_config_name


class TestModulation:
    """Test Modulation enum."""

    @pytest.mark.unit
    def test_parse_case_insensitive(self):
        assert Modulation.parse("fm") is Modulation.FM
        assert Modulation.parse("Am") is Modulation.AM
        assert Modulation.parse(Modulation.FM) is Modulation.FM

    @pytest.mark.unit
    def test_parse_unknown(self):
        assert Modulation.parse("SW") is None
        assert Modulation.parse(None) is None
        assert Modulation.parse(1) is None


class TestRadioConfig:
    """Test RadioConfig model."""

    @pytest.mark.unit
    def test_defaults(self):
        """Test the documented default configuration."""
        config = RadioConfig()
        assert config.modulation == "FM"
        assert config.frequency == "88.0"
        assert config.blue_led_intensity == 127
        assert config.blue_led_pulse_rate == 0
        assert config.red_led is False

    @pytest.mark.unit
    def test_accepts_aliases_and_names(self):
        by_alias = RadioConfig.model_validate({"blue-led-intensity": 10, "red-led": True})
        by_name = RadioConfig(blue_led_intensity=10, red_led=True)
        assert by_alias == by_name

    @pytest.mark.unit
    def test_to_record_uses_aliases(self):
        assert RadioConfig().to_record() == {
            "modulation": "FM",
            "frequency": "88.0",
            "blue-led-intensity": 127,
            "blue-led-pulse-rate": 0,
            "red-led": False,
        }

    @pytest.mark.unit
    def test_modulation_stored_as_given(self):
        config = RadioConfig(modulation="am", frequency="600")
        assert config.modulation == "am"
        assert config.band is Modulation.AM

    @pytest.mark.unit
    def test_unknown_band(self):
        assert RadioConfig(modulation="XM").band is None

    @pytest.mark.unit
    def test_led_values_are_bytes(self):
        """Model bounds are the record's, the device limit is checked elsewhere."""
        RadioConfig(blue_led_intensity=200)
        with pytest.raises(ValidationError):
            RadioConfig(blue_led_intensity=256)
        with pytest.raises(ValidationError):
            RadioConfig(blue_led_pulse_rate=-1)

    @pytest.mark.unit
    def test_overlay(self):
        base = RadioConfig(frequency="101.1")

        updated = base.overlay({"red-led": True, "blue_led_pulse_rate": 3})

        assert updated.red_led is True
        assert updated.blue_led_pulse_rate == 3
        assert updated.frequency == "101.1"
        assert base.red_led is False

    @pytest.mark.unit
    def test_overlay_unknown_field(self):
        with pytest.raises(AttributeError, match="'RadioConfig' has no field 'volume'"):
            RadioConfig().overlay({"volume": 3})


class TestServerSettings:
    """Test ServerSettings model."""

    @pytest.mark.unit
    def test_defaults(self):
        settings = ServerSettings(device="001:004")
        assert settings.address == ":8080"
        assert settings.host == "0.0.0.0"
        assert settings.port == 8080
        assert settings.static_root == Path("/usr/share/rsharkd")
        assert settings.commit_policy is CommitPolicy.OPTIMISTIC

    @pytest.mark.unit
    def test_default_config_path(self):
        settings = ServerSettings(device="001:004")
        assert settings.config_path == Path("/etc/rsharkd.001-004.conf")

    @pytest.mark.unit
    def test_explicit_config_path(self, tmp_path):
        settings = ServerSettings(device="001:004", config_file=tmp_path / "radio.conf")
        assert settings.config_path == tmp_path / "radio.conf"

    @pytest.mark.unit
    def test_host_and_port(self):
        settings = ServerSettings(device="001:004", address="127.0.0.1:9000")
        assert settings.host == "127.0.0.1"
        assert settings.port == 9000

    @pytest.mark.unit
    def test_ipv6_host(self):
        settings = ServerSettings(device="001:004", address="[::1]:8080")
        assert settings.host == "::1"

    @pytest.mark.unit
    @pytest.mark.parametrize("address", ["8080", "localhost:", "localhost:http", ":70000", ":0"])
    def test_invalid_address(self, address):
        with pytest.raises(ValidationError):
            ServerSettings(device="001:004", address=address)

    @pytest.mark.unit
    def test_device_required(self):
        with pytest.raises(ValidationError):
            ServerSettings(device="")

    @pytest.mark.unit
    def test_default_config_name(self):
        assert default_config_name("001:004") == "001-004"
        assert default_config_name("kitchen") == "kitchen"
        assert default_config_name("/dev/x") == "dev-x"
        assert default_config_name(":::") == "default"
