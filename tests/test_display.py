"""Tests for DisplayHandle."""

from unittest import mock

import pytest

from samsung_mdc import MDCSession, SessionConfig
from samsung_mdc.commands import CommandDescriptor, CommandRegistry
from samsung_mdc.commands.registry import decode_byte, encode_nothing
from samsung_mdc.exceptions import DeviceRejected, FramingError
from samsung_mdc.models.records import (
    DisplayStatus,
    InputSource,
    MuteState,
    PanelState,
    PowerState,
    Unknown,
)
from samsung_mdc.protocol.constants import BROADCAST_ID
from samsung_mdc.protocol.frames import encode_command, encode_response
from samsung_mdc.transport.mock import MockTransport


@pytest.fixture
def transport():
    """Create an open MockTransport."""
    transport = MockTransport(default_timeout=0.01)
    transport.open()
    return transport


@pytest.fixture
def session(transport):
    """Create a session with short timings."""
    return MDCSession(transport, SessionConfig(timeout=0.2, retries=1, drain_quiet=0.01))


@pytest.fixture
def display(session):
    """Handle for display 1."""
    return session.display(1)


class TestGetters:
    """Tests for query methods."""

    def test_get_power(self, display, transport):
        transport.add_response(encode_response(1, 0x11, b"\x01"))

        assert display.get_power() is PowerState.ON
        transport.assert_written(encode_command(0x11, 1))

    def test_get_power_unknown_value(self, display, transport):
        transport.add_response(encode_response(1, 0x11, b"\x07"))

        assert display.get_power() == Unknown(value=0x07)

    def test_get_volume(self, display, transport):
        transport.add_response(encode_response(1, 0x12, b"\x1e"))
        assert display.get_volume() == 30

    def test_get_mute(self, display, transport):
        transport.add_response(encode_response(1, 0x13, b"\x01"))
        assert display.get_mute() is MuteState.ON

    def test_get_input_source(self, display, transport):
        transport.add_response(encode_response(1, 0x14, b"\x21"))
        assert display.get_input_source() is InputSource.HDMI1

    def test_get_panel(self, display, transport):
        transport.add_response(encode_response(1, 0xF9, b"\x01"))
        assert display.get_panel() is PanelState.OFF

    def test_get_status(self, display, transport):
        transport.add_response(
            encode_response(1, 0x00, bytes([0x01, 0x0a, 0x00, 0x25, 0x00, 0x00, 0x00]))
        )

        status = display.get_status()

        assert isinstance(status, DisplayStatus)
        assert status.input_source is InputSource.DISPLAY_PORT_1
        assert status.volume == 10

    def test_identification_strings(self, display, transport):
        transport.add_responses(
            encode_response(1, 0x0B, b"0DAB3CAN500123F\x00"),
            encode_response(1, 0x0E, b"S-HM750WWC-1023.0"),
            encode_response(1, 0x8A, b"QM55R"),
        )

        assert display.get_serial_number() == "0DAB3CAN500123F"
        assert display.get_software_version() == "S-HM750WWC-1023.0"
        assert display.get_model_name() == "QM55R"

    def test_short_reply_is_framing_error(self, display, transport):
        transport.add_response(encode_response(1, 0x12))

        with pytest.raises(FramingError):
            display.get_volume()


class TestSetters:
    """Tests for set methods."""

    def test_power_on(self, display, transport):
        transport.add_response(encode_response(1, 0x11, b"\x01"))

        assert display.power_on() is PowerState.ON
        transport.assert_written(encode_command(0x11, 1, b"\x01"))

    def test_power_off(self, display, transport):
        transport.add_response(encode_response(1, 0x11, b"\x00"))

        assert display.power_off() is PowerState.OFF
        transport.assert_written(encode_command(0x11, 1, b"\x00"))

    def test_reboot(self, display, transport):
        transport.add_response(encode_response(1, 0x11))

        assert display.reboot() is None
        transport.assert_written(encode_command(0x11, 1, b"\x02"))

    def test_panel_on_sends_zero(self, display, transport):
        transport.add_response(encode_response(1, 0xF9, b"\x00"))

        assert display.panel_on() is PanelState.ON
        transport.assert_written(encode_command(0xF9, 1, b"\x00"))

    def test_panel_off_sends_one(self, display, transport):
        transport.add_response(encode_response(1, 0xF9, b"\x01"))

        assert display.panel_off() is PanelState.OFF
        transport.assert_written(encode_command(0xF9, 1, b"\x01"))

    def test_set_volume(self, display, transport):
        transport.add_response(encode_response(1, 0x12, b"\x14"))

        assert display.set_volume(20) == 20
        transport.assert_written(encode_command(0x12, 1, b"\x14"))

    def test_set_volume_out_of_range_sends_nothing(self, display, transport):
        with pytest.raises(ValueError):
            display.set_volume(101)

        transport.assert_write_count(0)

    def test_set_mute(self, display, transport):
        transport.add_response(encode_response(1, 0x13, b"\x01"))

        assert display.set_mute(True) is MuteState.ON

    def test_set_input_source(self, display, transport):
        transport.add_response(encode_response(1, 0x14, b"\x23"))

        assert display.set_input_source(InputSource.HDMI2) is InputSource.HDMI2
        transport.assert_written(encode_command(0x14, 1, b"\x23"))

    def test_rejected(self, display, transport):
        transport.add_response(encode_response(1, 0x14, b"\x00", ack=False))

        with pytest.raises(DeviceRejected):
            display.set_input_source(InputSource.HDMI4)

    def test_no_caching(self, display, transport):
        """Test that each call is a new exchange."""
        reply = encode_response(1, 0x11, b"\x01")
        transport.add_responses(reply, reply)

        display.power_on()
        display.power_on()

        transport.assert_write_count(2)


class TestBroadcast:
    """Tests for the broadcast handle."""

    @pytest.fixture
    def broadcast(self, session):
        return session.all_displays()

    def test_setter_returns_none(self, broadcast, transport):
        with mock.patch.object(transport, "read", side_effect=AssertionError("read called")):
            assert broadcast.power_on() is None

        transport.assert_written(encode_command(0x11, BROADCAST_ID, b"\x01"))

    def test_query_rejected(self, broadcast, transport):
        with pytest.raises(ValueError):
            broadcast.get_power()

        transport.assert_write_count(0)

    def test_repr(self, broadcast, display):
        assert repr(broadcast) == "DisplayHandle(broadcast)"
        assert repr(display) == "DisplayHandle(0x01)"


class TestExecute:
    """Tests for running arbitrary descriptors."""

    def test_execute_by_name(self, display, transport):
        transport.add_response(encode_response(1, 0x12, b"\x05"))
        assert display.execute("get_volume") == 5

    def test_execute_unknown_name(self, display):
        with pytest.raises(KeyError):
            display.execute("get_brightness")

    def test_execute_custom_descriptor(self, session, transport):
        """Test that a registered descriptor is reachable by name."""
        registry = CommandRegistry()
        registry.register(
            CommandDescriptor(
                name="get_brightness",
                command=0x25,
                encoder=encode_nothing,
                decoder=decode_byte,
                query=True,
            )
        )
        transport.add_response(encode_response(2, 0x25, b"\x32"))

        handle = MDCSession(transport, session.config, registry=registry).display(2)

        assert handle.execute("get_brightness") == 0x32

    def test_execute_with_subcommand(self, display, transport):
        descriptor = CommandDescriptor(
            name="get_timer",
            command=0xA4,
            subcommand=0x01,
            encoder=encode_nothing,
            decoder=decode_byte,
            query=True,
        )
        transport.add_response(encode_response(1, 0xA4, b"\x01\x2a"))

        assert display.execute(descriptor) == 0x2a
        transport.assert_written(encode_command(0xA4, 1, subcommand=0x01))
