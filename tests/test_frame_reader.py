"""Tests for response packet parsing."""

import pytest

from samsung_mdc.exceptions import (
    ChecksumError,
    CorrelationError,
    FramingError,
    TruncatedPacketError,
)
from samsung_mdc.protocol.constants import CommandCode
from samsung_mdc.protocol.frame_reader import FrameReader, ResponsePacket, decode_response
from samsung_mdc.protocol.frames import encode_response

POWER_ON_REPLY = bytes.fromhex("aa ff 00 03 41 11 01 55")


class TestFrameReader:
    """Tests for FrameReader.parse."""

    @pytest.fixture
    def reader(self):
        """Create a FrameReader instance."""
        return FrameReader()

    def test_parse_ack(self, reader):
        """Test parsing a positive acknowledgement."""
        packet = reader.parse(POWER_ON_REPLY)

        assert isinstance(packet, ResponsePacket)
        assert packet.display_id == 0
        assert packet.command == 0x11
        assert packet.ack is True
        assert packet.data == b"\x41\x11\x01"
        assert packet.values == b"\x01"
        assert packet.error_code is None
        assert packet.raw == POWER_ON_REPLY
        assert packet.bytes_consumed == len(POWER_ON_REPLY)
        assert packet.command_code == CommandCode.POWER

    def test_parse_nak(self, reader):
        """Test that a NAK decodes successfully with its error code."""
        packet = reader.parse(encode_response(0, 0x11, b"\x01", ack=False))

        assert packet.ack is False
        assert packet.error_code == 0x01

    def test_parse_empty_values(self, reader):
        """Test an ACK that echoes nothing beyond the command."""
        packet = reader.parse(encode_response(5, 0x12))
        assert packet.values == b""
        assert packet.display_id == 5

    def test_unknown_command_code(self, reader):
        """Test that unlisted opcodes are kept as raw ints."""
        packet = reader.parse(encode_response(0, 0x5A, b"\x00"))
        assert packet.command_code == 0x5A

    def test_trailing_bytes_ignored(self, reader):
        """Test that bytes after the packet are left alone."""
        packet = reader.parse(POWER_ON_REPLY + b"\xaa\xff")
        assert packet.bytes_consumed == len(POWER_ON_REPLY)
        assert packet.raw == POWER_ON_REPLY

    def test_truncated_then_complete(self, reader):
        """Test that a partial packet asks for more bytes, then parses."""
        with pytest.raises(TruncatedPacketError) as exc_info:
            reader.parse(POWER_ON_REPLY[:6])
        assert exc_info.value.needed == len(POWER_ON_REPLY)
        assert exc_info.value.available == 6

        assert reader.parse(POWER_ON_REPLY).values == b"\x01"

    @pytest.mark.parametrize("size", range(0, len(POWER_ON_REPLY)))
    def test_every_prefix_is_truncated(self, reader, size):
        """Test that no prefix of a valid packet is reported as an error."""
        with pytest.raises(TruncatedPacketError):
            reader.parse(POWER_ON_REPLY[:size])

    def test_bad_header(self, reader):
        """Test that a wrong first byte is a framing error."""
        with pytest.raises(FramingError):
            reader.parse(b"\x00" + POWER_ON_REPLY[1:])

    def test_bad_response_marker(self, reader):
        """Test that a command packet echoed back is a framing error."""
        with pytest.raises(FramingError):
            reader.parse(bytes.fromhex("aa 11 00 01 00 12"))

    def test_bad_ack_marker(self, reader):
        """Test that data not starting with 'A' or 'N' is a framing error."""
        body = bytes([0xFF, 0x00, 0x03, 0x42, 0x11, 0x01])
        packet = b"\xaa" + body + bytes([sum(body) & 0xFF])
        with pytest.raises(FramingError):
            reader.parse(packet)

    def test_length_too_short(self, reader):
        """Test that a response without room for marker and command is rejected."""
        body = bytes([0xFF, 0x00, 0x01, 0x41])
        packet = b"\xaa" + body + bytes([sum(body) & 0xFF])
        with pytest.raises(FramingError):
            reader.parse(packet)

    def test_checksum_mismatch(self, reader):
        """Test that a wrong checksum byte is detected."""
        corrupted = POWER_ON_REPLY[:-1] + b"\x56"
        with pytest.raises(ChecksumError) as exc_info:
            reader.parse(corrupted)
        assert exc_info.value.expected == 0x55
        assert exc_info.value.received == 0x56
        assert exc_info.value.raw == corrupted

    def test_bit_flip_in_value_detected(self, reader):
        """Test that a flipped value bit fails the checksum."""
        corrupted = bytearray(POWER_ON_REPLY)
        corrupted[6] ^= 0x01
        with pytest.raises(ChecksumError):
            reader.parse(bytes(corrupted))

    def test_corrupted_display_id_is_checksum_error(self, reader):
        """Test that checksum is verified before correlation."""
        corrupted = bytearray(POWER_ON_REPLY)
        corrupted[2] = 0x01
        with pytest.raises(ChecksumError):
            reader.parse(bytes(corrupted), display_id=0)

    def test_wrong_display_id(self, reader):
        """Test that a reply from another display is a correlation error."""
        with pytest.raises(CorrelationError) as exc_info:
            reader.parse(encode_response(2, 0x11, b"\x01"), display_id=1, command=0x11)
        assert exc_info.value.expected == 1
        assert exc_info.value.received == 2

    def test_wrong_command(self, reader):
        """Test that a reply to another command is a correlation error."""
        with pytest.raises(CorrelationError):
            reader.parse(encode_response(1, 0x12, b"\x01"), display_id=1, command=0x11)

    def test_wrong_subcommand(self, reader):
        """Test that the echoed subcommand must match on an ACK."""
        reply = encode_response(0, 0xB9, b"\x03\x01")
        with pytest.raises(CorrelationError):
            reader.parse(reply, command=0xB9, subcommand=0x02)
        assert reader.parse(reply, command=0xB9, subcommand=0x03).values == b"\x03\x01"

    def test_nak_skips_subcommand_check(self, reader):
        """Test that a NAK carries an error code instead of the subcommand."""
        reply = encode_response(0, 0xB9, b"\x01", ack=False)
        packet = reader.parse(reply, command=0xB9, subcommand=0x02)
        assert packet.ack is False

    def test_error_str_includes_context(self, reader):
        """Test that errors render display, command and raw bytes."""
        with pytest.raises(CorrelationError) as exc_info:
            reader.parse(encode_response(2, 0x11, b"\x01"), display_id=1)
        message = str(exc_info.value)
        assert "display=0x02" in message
        assert "command=0x11" in message
        assert "raw=aa ff 02" in message


class TestDecodeResponse:
    """Tests for the module-level convenience function."""

    @pytest.mark.parametrize("size", [0, 1, 2, 253])
    @pytest.mark.parametrize("ack", [True, False])
    def test_round_trip(self, size, ack):
        """Test that decoding an encoded response returns the same fields."""
        values = bytes((i * 7) & 0xFF for i in range(size))
        raw = encode_response(7, 0x14, values, ack=ack)

        packet = decode_response(raw, display_id=7, command=0x14)

        assert packet.ack is ack
        assert packet.values == values
        assert packet.raw == raw
        assert packet.bytes_consumed == 4 + 2 + size + 1

    def test_repr(self):
        packet = decode_response(POWER_ON_REPLY)
        assert repr(packet) == "ResponsePacket(ACK POWER, display_id=0x00, values=01)"
