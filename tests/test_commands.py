"""Tests for command descriptors, helpers and the built-in catalog."""

import pytest

from samsung_mdc.commands import (
    BUILTIN_COMMANDS,
    GET_INPUT_SOURCE,
    GET_MODEL_NAME,
    GET_POWER,
    GET_STATUS,
    REBOOT,
    SET_INPUT_SOURCE,
    SET_PANEL,
    SET_POWER,
    SET_VOLUME,
    CommandDescriptor,
    CommandRegistry,
    create_default_registry,
)
from samsung_mdc.commands.registry import (
    bool_encoder,
    decode_ascii,
    decode_byte,
    encode_nothing,
    enum_decoder,
    enum_encoder,
    range_encoder,
)
from samsung_mdc.exceptions import FramingError
from samsung_mdc.models.records import (
    DisplayStatus,
    InputSource,
    MuteState,
    PanelState,
    PowerState,
    Unknown,
)


class TestEncoders:
    """Tests for encoder helpers."""

    def test_encode_nothing(self):
        assert encode_nothing() == b""

    def test_bool_encoder(self):
        encode = bool_encoder(on=0x00, off=0x01)
        assert encode(True) == b"\x00"
        assert encode(False) == b"\x01"

    def test_enum_encoder_accepts_member_unknown_and_int(self):
        encode = enum_encoder(InputSource)
        assert encode(InputSource.HDMI1) == b"\x21"
        assert encode(Unknown(value=0x07)) == b"\x07"
        assert encode(0x07) == b"\x07"

    def test_enum_encoder_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            enum_encoder(InputSource)(0x100)

    def test_range_encoder(self):
        encode = range_encoder(0, 100, "Volume")
        assert encode(0) == b"\x00"
        assert encode(100) == b"\x64"
        with pytest.raises(ValueError, match="Volume"):
            encode(101)
        with pytest.raises(ValueError):
            encode(-1)


class TestDecoders:
    """Tests for decoder helpers."""

    def test_enum_decoder_known(self):
        assert enum_decoder(PowerState)(b"\x01") == PowerState.ON

    def test_enum_decoder_unknown(self):
        """Test that undocumented bytes decode to Unknown instead of failing."""
        result = enum_decoder(PowerState)(b"\x09")
        assert result == Unknown(value=0x09)

    def test_enum_decoder_empty_raises(self):
        with pytest.raises(FramingError):
            enum_decoder(PowerState)(b"")

    def test_decode_byte(self):
        assert decode_byte(b"\x32\xff") == 0x32

    def test_decode_ascii_strips_padding(self):
        assert decode_ascii(b"QM55R\x00\x00  ") == "QM55R"


class TestCommandDescriptor:
    """Tests for CommandDescriptor."""

    def test_encode_delegates_to_encoder(self):
        assert SET_VOLUME.encode(20) == b"\x14"

    def test_decode_strips_subcommand(self):
        """Test that the echoed subcommand is removed before decoding."""
        descriptor = CommandDescriptor(
            name="get_timer",
            command=0xA4,
            subcommand=0x01,
            encoder=encode_nothing,
            decoder=decode_byte,
            query=True,
        )
        assert descriptor.decode(b"\x01\x2a") == 0x2a

    def test_repr(self):
        assert repr(GET_POWER) == "CommandDescriptor('get_power', command=0x11)"

    def test_frozen(self):
        with pytest.raises(AttributeError):
            GET_POWER.command = 0x12


class TestCatalog:
    """Tests for built-in descriptors."""

    def test_power_encoding(self):
        assert SET_POWER.encode(True) == b"\x01"
        assert SET_POWER.encode(False) == b"\x00"
        assert REBOOT.encode() == b"\x02"

    def test_panel_encoding_is_inverted(self):
        """Test that panel on is 0 and panel off is 1."""
        assert SET_PANEL.encode(True) == b"\x00"
        assert SET_PANEL.encode(False) == b"\x01"

    def test_setter_decodes_empty_echo_as_none(self):
        assert SET_POWER.decode(b"") is None
        assert SET_POWER.decode(b"\x01") == PowerState.ON

    def test_volume_bounds(self):
        SET_VOLUME.encode(100)
        with pytest.raises(ValueError):
            SET_VOLUME.encode(101)

    def test_input_source(self):
        assert SET_INPUT_SOURCE.encode(InputSource.DISPLAY_PORT_1) == b"\x25"
        assert GET_INPUT_SOURCE.decode(b"\x23") == InputSource.HDMI2

    def test_model_name(self):
        assert GET_MODEL_NAME.decode(b"QM85R\x00") == "QM85R"

    def test_status(self):
        status = GET_STATUS.decode(bytes([0x01, 0x14, 0x00, 0x21, 0x10, 0x00, 0x00]))

        assert isinstance(status, DisplayStatus)
        assert status.power == PowerState.ON
        assert status.volume == 20
        assert status.mute == MuteState.OFF
        assert status.input_source == InputSource.HDMI1
        assert status.aspect == 0x10
        assert status.is_on is True
        assert status.is_muted is False

    def test_status_unknown_input(self):
        status = GET_STATUS.decode(bytes([0x00, 0x00, 0x01, 0x7F, 0x00, 0x00, 0x00]))
        assert status.input_source == Unknown(value=0x7F)
        assert status.is_muted is True

    def test_status_too_short(self):
        with pytest.raises(FramingError):
            GET_STATUS.decode(b"\x01\x14")

    def test_queries_are_flagged(self):
        for descriptor in BUILTIN_COMMANDS:
            assert descriptor.query == descriptor.name.startswith("get_")


class TestCommandRegistry:
    """Tests for CommandRegistry."""

    @pytest.fixture
    def registry(self):
        """Create an empty registry."""
        return CommandRegistry()

    def test_register_and_get(self, registry):
        registry.register(GET_POWER)
        assert registry.get("get_power") is GET_POWER
        assert registry.has("get_power")
        assert len(registry) == 1

    def test_get_missing(self, registry):
        assert registry.get("get_brightness") is None
        assert not registry.has("get_brightness")

    def test_by_command(self):
        registry = create_default_registry()
        names = {d.name for d in registry.by_command(0x11)}
        assert names == {"get_power", "set_power", "reboot"}

    def test_unregister(self, registry):
        registry.register(GET_POWER)
        assert registry.unregister("get_power") is True
        assert registry.unregister("get_power") is False

    def test_clear(self):
        registry = create_default_registry()
        registry.clear()
        assert len(registry) == 0

    def test_default_registry_has_catalog(self):
        registry = create_default_registry()
        assert registry.names == frozenset(d.name for d in BUILTIN_COMMANDS)
        assert repr(registry) == f"CommandRegistry(commands={len(BUILTIN_COMMANDS)})"

    def test_custom_descriptor(self, registry):
        """Test that new commands only need a descriptor."""
        brightness = CommandDescriptor(
            name="get_brightness",
            command=0x25,
            encoder=encode_nothing,
            decoder=decode_byte,
            query=True,
        )
        registry.register(brightness)
        assert list(registry) == [brightness]

    def test_panel_state_values(self):
        assert PanelState.ON == 0
        assert PanelState.OFF == 1
