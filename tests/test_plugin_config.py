"""Tests for the plugin configuration contract."""

from enum import Enum

import pytest
from pydantic import ValidationError

from pluginapi.plugins.config import (
    REQUIRED_MESSAGE,
    ConfigMetadata,
    PluginConfigError,
    PluginConfigValidationResult,
    check_config_metadata,
    validate_required,
)


class Color(Enum):
    RED = "red"
    GREEN = "green"


class TestConfigMetadata:
    """Tests for the ConfigMetadata field descriptor."""

    def test_defaults(self):
        """A plain descriptor is a required, non-secret string without default."""
        element = ConfigMetadata(key="apiKey", label="API key")
        assert element.type is str
        assert element.is_required is True
        assert element.is_secret is False
        assert element.default is None
        assert element.must_be_supplied is True

    def test_enum_descriptor_lists_options_in_order(self):
        """Enum descriptors expose variant names in declaration order."""
        element = ConfigMetadata(key="color", label="Color", type=Color, default=Color.GREEN)
        assert element.is_enum
        assert element.value_type == "enum"
        assert element.options == ["RED", "GREEN"]
        assert element.default_string == "GREEN"
        assert element.must_be_supplied is False

    def test_rejects_unsupported_type(self):
        """Only str and Enum subclasses are accepted as types."""
        with pytest.raises(ValidationError):
            ConfigMetadata(key="count", label="Count", type=int)

    def test_rejects_default_of_wrong_type(self):
        """The default has to match the declared type."""
        with pytest.raises(ValidationError):
            ConfigMetadata(key="color", label="Color", type=Color, default="RED")
        with pytest.raises(ValidationError):
            ConfigMetadata(key="name", label="Name", default=Color.RED)

    def test_is_immutable(self):
        """Descriptors cannot be changed after creation."""
        element = ConfigMetadata(key="apiKey", label="API key")
        with pytest.raises(ValidationError):
            element.key = "other"

    def test_to_dict(self):
        """Serialized descriptors carry everything a settings form needs."""
        secret = ConfigMetadata(key="token", label="Token", is_secret=True).to_dict()
        assert secret == {
            "key": "token",
            "label": "Token",
            "description": "",
            "type": "string",
            "is_required": True,
            "is_secret": True,
            "default": None,
        }

        choice = ConfigMetadata(key="color", label="Color", type=Color, default=Color.RED).to_dict()
        assert choice["type"] == "enum"
        assert choice["options"] == ["RED", "GREEN"]
        assert choice["default"] == "RED"


class TestValidationResult:
    """Tests for PluginConfigValidationResult."""

    def test_valid_has_no_errors(self):
        result = PluginConfigValidationResult.valid()
        assert result.is_valid()
        assert result.errors == {}
        assert result.to_dict() == {"valid": True, "errors": {}}

    def test_invalid_requires_errors(self):
        """An invalid result without errors cannot be built."""
        with pytest.raises(ValueError):
            PluginConfigValidationResult.invalid({})

    def test_invalid_copies_errors(self):
        errors = {"a": "broken"}
        result = PluginConfigValidationResult.invalid(errors)
        errors["b"] = "later"
        assert not result.is_valid()
        assert result.errors == {"a": "broken"}


class TestSchemaChecks:
    """Tests for schema-level helpers."""

    def test_duplicate_keys_rejected(self):
        schema = [
            ConfigMetadata(key="a", label="A"),
            ConfigMetadata(key="a", label="Another A"),
        ]
        with pytest.raises(ValueError, match="Duplicate"):
            check_config_metadata(schema)

    def test_validate_required_reports_each_missing_key(self):
        """One error per required key without default; optional and defaulted keys are skipped."""
        schema = [
            ConfigMetadata(key="a", label="A"),
            ConfigMetadata(key="b", label="B"),
            ConfigMetadata(key="c", label="C", is_required=False),
            ConfigMetadata(key="d", label="D", default="x"),
        ]
        result = validate_required(schema, {"b": None})
        assert result.errors == {"a": REQUIRED_MESSAGE, "b": REQUIRED_MESSAGE}

    def test_validate_required_accepts_empty_string(self):
        """An empty string is a value; only absence counts as missing."""
        schema = [ConfigMetadata(key="a", label="A")]
        assert validate_required(schema, {"a": ""}).is_valid()

    def test_config_error_carries_errors(self):
        error = PluginConfigError({"a": "bad"})
        assert error.errors == {"a": "bad"}
        assert "a: bad" in str(error)
