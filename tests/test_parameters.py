"""Tests for parameter encoding and decoding."""

import json

import pytest

from tcmodel.errors import InvalidArgumentError
from tcmodel.parameters import Parameter, ParameterKind, decode_name, encode_name


class TestParameterKind:
    """Tests for the ParameterKind enum."""

    def test_all_kinds_defined(self):
        assert {kind.value for kind in ParameterKind} == {"configuration", "system", "env"}

    def test_prefixes(self):
        assert ParameterKind.CONFIGURATION.prefix == ""
        assert ParameterKind.SYSTEM.prefix == "system."
        assert ParameterKind.ENVIRONMENT_VARIABLE.prefix == "env."


class TestParameterConstruction:
    """Tests for building parameters."""

    def test_create(self):
        param = Parameter(ParameterKind.SYSTEM, "param1", "value1")
        assert param.kind is ParameterKind.SYSTEM
        assert param.name == "param1"
        assert param.value == "value1"
        assert param.inherited is False

    def test_empty_name_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Parameter(ParameterKind.CONFIGURATION, "", "value")

    def test_empty_value_allowed(self):
        param = Parameter(ParameterKind.ENVIRONMENT_VARIABLE, "EMPTY", "")
        assert param.value == ""

    def test_kind_from_string(self):
        param = Parameter("env", "PATH", "/usr/bin")
        assert param.kind is ParameterKind.ENVIRONMENT_VARIABLE

    def test_unknown_kind_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Parameter("secret", "token", "x")

    def test_immutable(self):
        param = Parameter(ParameterKind.CONFIGURATION, "name", "value")
        with pytest.raises(AttributeError):
            param.value = "other"

    def test_equality_ignores_inherited(self):
        own = Parameter(ParameterKind.SYSTEM, "name", "value")
        inherited = Parameter(ParameterKind.SYSTEM, "name", "value", inherited=True)
        assert own == inherited
        assert hash(own) == hash(inherited)


class TestEncoding:
    """Tests for stored-name encoding."""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (ParameterKind.CONFIGURATION, "param1"),
            (ParameterKind.SYSTEM, "system.param1"),
            (ParameterKind.ENVIRONMENT_VARIABLE, "env.param1"),
        ],
    )
    def test_encode(self, kind, expected):
        param = Parameter(kind, "param1", "value1")
        assert param.encode() == (expected, "value1")
        assert encode_name(kind, "param1") == expected

    def test_ambiguous_names_collide(self):
        config = Parameter(ParameterKind.CONFIGURATION, "system.foo", "a")
        system = Parameter(ParameterKind.SYSTEM, "foo", "b")
        assert config.stored_name == system.stored_name


class TestDecoding:
    """Tests for prefix-based decoding."""

    def test_decode_system(self):
        assert decode_name("system.param1") == (ParameterKind.SYSTEM, "param1")

    def test_decode_env(self):
        assert decode_name("env.param1") == (ParameterKind.ENVIRONMENT_VARIABLE, "param1")

    def test_decode_configuration(self):
        assert decode_name("param1") == (ParameterKind.CONFIGURATION, "param1")

    def test_decode_only_strips_leading_prefix(self):
        assert decode_name("my.env.value") == (ParameterKind.CONFIGURATION, "my.env.value")

    def test_decode_keeps_nested_prefix(self):
        assert decode_name("system.env.x") == (ParameterKind.SYSTEM, "env.x")

    def test_configuration_with_prefix_decodes_as_other_kind(self):
        """A configuration parameter named like a prefixed name is reclassified."""
        stored, value = Parameter(ParameterKind.CONFIGURATION, "env.HOME", "/root").encode()
        decoded = Parameter.decode(stored, value)
        assert decoded.kind is ParameterKind.ENVIRONMENT_VARIABLE
        assert decoded.name == "HOME"
        assert decoded.value == "/root"

    def test_bare_prefix_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Parameter.decode("system.", "value")

    @pytest.mark.parametrize("kind", list(ParameterKind))
    def test_roundtrip(self, kind):
        param = Parameter(kind, "build.number", "42")
        assert Parameter.decode(*param.encode()) == param


class TestParameterSerialization:
    """Tests for the single-parameter wire form."""

    def test_configuration_serialization(self):
        param = Parameter(ParameterKind.CONFIGURATION, "param1", "value1")
        assert param.to_json() == '{"name":"param1","value":"value1"}'

        actual = Parameter.from_json(param.to_json())
        assert actual.name == "param1"
        assert actual.value == "value1"
        assert actual.kind is ParameterKind.CONFIGURATION

    def test_system_serialization(self):
        param = Parameter(ParameterKind.SYSTEM, "param1", "value1")
        assert param.to_json() == '{"name":"system.param1","value":"value1"}'

        actual = Parameter.from_json(param.to_json())
        assert actual.name == "param1"
        assert actual.kind is ParameterKind.SYSTEM

    def test_environment_variable_serialization(self):
        param = Parameter(ParameterKind.ENVIRONMENT_VARIABLE, "param1", "value1")
        assert param.to_json() == '{"name":"env.param1","value":"value1"}'

        actual = Parameter.from_json(param.to_json())
        assert actual.name == "param1"
        assert actual.kind is ParameterKind.ENVIRONMENT_VARIABLE

    def test_to_property(self):
        prop = Parameter(ParameterKind.SYSTEM, "name", "value_system").to_property()
        assert prop.name == "system.name"
        assert prop.value == "value_system"

    def test_inherited_flag_on_wire(self):
        param = Parameter(ParameterKind.CONFIGURATION, "name", "v", inherited=True)
        assert json.loads(param.to_json()) == {"name": "name", "value": "v", "inherited": True}

    def test_from_json_inherited(self):
        param = Parameter.from_json('{"name":"env.A","value":"1","inherited":true}')
        assert param.inherited is True

    def test_from_json_missing_value(self):
        assert Parameter.from_json('{"name":"param1"}').value == ""

    def test_from_json_malformed(self):
        with pytest.raises(InvalidArgumentError):
            Parameter.from_json('{"value":"no name"}')
