"""Tests for the control packet encoder."""

import dataclasses

import pytest

from rsharkd.radio.packets import (
    PACKET_LENGTH,
    CommandPacket,
    Opcode,
    encode_blue_intensity,
    encode_blue_pulse,
    encode_frequency,
    encode_red_led,
)


@pytest.mark.unit
class TestEncoders:
    """Test the exact bytes of every command."""

    def test_fm_frequency(self):
        packet = encode_frequency(7899, "FM")
        assert bytes(packet) == bytes([0xC0, 0x00, 0x1E, 0xDB, 0x00, 0x00])

    def test_am_frequency_carries_discriminator(self):
        packet = encode_frequency(1050, "AM")
        assert bytes(packet) == bytes([0xC0, 0x12, 0x04, 0x1A, 0x00, 0x00])

    def test_frequency_band_case_insensitive(self):
        assert encode_frequency(1050, "am") == encode_frequency(1050, "AM")

    def test_blue_intensity(self):
        assert bytes(encode_blue_intensity(127)) == bytes([0xA0, 0x7F, 0, 0, 0, 0])
        assert bytes(encode_blue_intensity(0)) == bytes([0xA0, 0, 0, 0, 0, 0])

    def test_blue_pulse(self):
        assert bytes(encode_blue_pulse(64)) == bytes([0xA1, 0x40, 0, 0, 0, 0])

    def test_red_led(self):
        assert bytes(encode_red_led(True)) == bytes([0xA9, 0x01, 0, 0, 0, 0])
        assert bytes(encode_red_led(False)) == bytes([0xA8, 0x00, 0, 0, 0, 0])

    def test_every_packet_is_six_bytes(self):
        packets = [
            encode_frequency(9499, "FM"),
            encode_blue_intensity(1),
            encode_blue_pulse(1),
            encode_red_led(True),
        ]
        for packet in packets:
            assert len(packet) == PACKET_LENGTH
            assert len(bytes(packet)) == PACKET_LENGTH


@pytest.mark.unit
class TestCommandPacket:
    """Test the packet value type."""

    def test_opcode(self):
        assert encode_red_led(True).opcode == Opcode.RED_ON
        assert encode_frequency(7899, "FM").opcode == Opcode.FREQUENCY

    def test_indexing(self):
        packet = encode_blue_pulse(5)
        assert packet[0] == 0xA1
        assert packet[1] == 5

    def test_hex(self):
        assert encode_red_led(True).hex() == "a9 01 00 00 00 00"

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError, match="6 bytes"):
            CommandPacket(b"\xa0\x01")

    def test_immutable(self):
        packet = encode_blue_intensity(10)
        with pytest.raises(dataclasses.FrozenInstanceError):
            packet.data = b"\x00" * 6

    def test_equal_packets_compare_equal(self):
        assert encode_blue_intensity(10) == CommandPacket.build(Opcode.BLUE_INTENSITY, 10)
