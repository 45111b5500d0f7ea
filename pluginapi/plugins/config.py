"""Plugin configuration contract - field descriptors and validation results."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "This field is required"


class ConfigMetadata(BaseModel):
    """Describes one configuration key of a plugin.

    The host renders a settings form from these descriptors. Secret fields are
    displayed as password inputs; enum fields are displayed as dropdowns.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str = Field(..., min_length=1, description="Unique configuration key")
    label: str = Field(..., description="Label shown in the settings form")
    description: str = Field(default="", description="Help text shown in the settings form")
    type: Any = Field(default=str, description="str or an Enum subclass")
    is_required: bool = Field(default=True, description="Whether a value must be supplied")
    is_secret: bool = Field(default=False, description="Render as password input")
    default: Optional[Any] = Field(default=None, description="Default value matching type")

    @model_validator(mode="after")
    def _check_type_and_default(self) -> "ConfigMetadata":
        if self.type is not str and not self.is_enum:
            raise ValueError(f"Unsupported type for '{self.key}': {self.type!r}")
        if self.default is None:
            return self
        if self.is_enum and not isinstance(self.default, self.type):
            raise ValueError(f"Default for '{self.key}' must be a member of {self.type.__name__}")
        if self.type is str and not isinstance(self.default, str):
            raise ValueError(f"Default for '{self.key}' must be a string")
        return self

    @property
    def is_enum(self) -> bool:
        return isinstance(self.type, type) and issubclass(self.type, Enum)

    @property
    def value_type(self) -> str:
        return "enum" if self.is_enum else "string"

    @property
    def options(self) -> Optional[List[str]]:
        """Permitted variant names for enum fields, in declaration order."""
        if not self.is_enum:
            return None
        return [member.name for member in self.type]

    @property
    def default_string(self) -> Optional[str]:
        """Default rendered the way submitted values are: enum members by name."""
        if self.default is None:
            return None
        if isinstance(self.default, Enum):
            return self.default.name
        return self.default

    @property
    def must_be_supplied(self) -> bool:
        return self.is_required and self.default is None

    def to_dict(self) -> dict:
        """Serialize descriptor for API responses."""
        data = {
            "key": self.key,
            "label": self.label,
            "description": self.description,
            "type": self.value_type,
            "is_required": self.is_required,
            "is_secret": self.is_secret,
            "default": self.default_string,
        }
        if self.is_enum:
            data["options"] = self.options
        return data


@dataclass(frozen=True)
class PluginConfigValidationResult:
    """Outcome of validating a submitted configuration.

    A valid result carries no errors. An invalid result always carries at
    least one error, keyed by configuration key.
    """

    errors: Dict[str, str] = field(default_factory=dict)

    def is_valid(self) -> bool:
        return not self.errors

    @classmethod
    def valid(cls) -> "PluginConfigValidationResult":
        return cls()

    @classmethod
    def invalid(cls, errors: Mapping[str, str]) -> "PluginConfigValidationResult":
        if not errors:
            raise ValueError("An invalid result needs at least one error")
        return cls(errors=dict(errors))

    def to_dict(self) -> dict:
        return {"valid": self.is_valid(), "errors": dict(self.errors)}


class PluginConfigError(Exception):
    """Raised when a plugin is given configuration that does not validate."""

    def __init__(self, errors: Mapping[str, str]):
        self.errors = dict(errors)
        details = ", ".join(f"{key}: {message}" for key, message in self.errors.items())
        super().__init__(f"Invalid plugin configuration ({details})")


def check_config_metadata(config_metadata: Iterable[ConfigMetadata]) -> List[ConfigMetadata]:
    """Return the schema as a list, rejecting duplicate keys."""
    seen = set()
    schema = list(config_metadata)
    for element in schema:
        if element.key in seen:
            raise ValueError(f"Duplicate configuration key: {element.key}")
        seen.add(element.key)
    return schema


def validate_required(
    config_metadata: Iterable[ConfigMetadata],
    config: Mapping[str, Optional[str]],
) -> PluginConfigValidationResult:
    """Check that every required key without a default has a value.

    Args:
        config_metadata: The plugin's configuration schema
        config: Submitted key -> value mapping

    Returns:
        Invalid result with one error per missing key, or a valid result
    """
    errors = {
        element.key: REQUIRED_MESSAGE
        for element in config_metadata
        if element.must_be_supplied and config.get(element.key) is None
    }
    if errors:
        logger.debug(f"Missing required configuration keys: {sorted(errors)}")
        return PluginConfigValidationResult.invalid(errors)
    return PluginConfigValidationResult.valid()
