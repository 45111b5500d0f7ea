"""Template metadata plugin entry point.

Copy this directory to start a new plugin: rename the classes, declare the
configuration keys your data source needs, and replace the hardcoded record
in TemplateMetadataProvider with real lookups.
"""

import logging
from enum import Enum
from typing import List, Mapping, Optional

from pluginapi.plugins.config import (
    REQUIRED_MESSAGE,
    ConfigMetadata,
    PluginConfigValidationResult,
)
from pluginapi.plugins.metadata import GameMetadata, GameMetadataProvider
from pluginapi.plugins.plugin import ConfigurableGamePlugin

logger = logging.getLogger(__name__)


class ExampleEnum(Enum):
    OPTION_ONE = "OPTION_ONE"
    OPTION_TWO = "OPTION_TWO"
    OPTION_THREE = "OPTION_THREE"


class TemplateMetadataProvider(GameMetadataProvider):
    """Metadata provider of the template plugin.

    Every lookup answers with the same "Hello World Game" record, which makes
    this provider useful as an integration smoke test and nothing else.
    """

    def fetch_by_title(self, game_title: str, max_results: int) -> List[GameMetadata]:
        """Match a title to games in the data source.

        A real provider searches its catalog here and returns the matches best
        first. Required fields are ``title`` and ``original_id`` (the game's
        id in your source, e.g. an IGDB slug or a Steam AppID); fill in as many
        of the optional fields as the source offers.
        """
        logger.debug(f"Fetching metadata for title: {game_title} with max_results: {max_results}")

        example_result = GameMetadata(
            title="Hello World Game",
            original_id="hello-world-game",
        )
        return [example_result][:max_results]

    def fetch_by_id(self, game_id: str) -> Optional[GameMetadata]:
        """Look up a game by its id in the data source; None if unknown."""
        logger.debug(f"Fetching metadata for id: {game_id}")
        return GameMetadata(
            title="Hello World Game",
            original_id=game_id,
        )


class PluginTemplate(ConfigurableGamePlugin):
    """Template plugin with an example configuration and metadata provider."""

    extensions = (TemplateMetadataProvider,)

    # All configuration values set by the admin(s) are stored encrypted by the host
    config_metadata = [
        ConfigMetadata(
            key="exampleConfigProperty",
            type=str,
            label="Example Configuration Key",
            description="This is an example configuration key for a Gameyfin plugin.",
        ),
        ConfigMetadata(
            key="secretExampleConfigProperty",
            type=str,
            label="Secret Example Configuration Key",
            description=(
                "This is a secret configuration key for a Gameyfin plugin. "
                "It will be displayed as a password field in the UI."
            ),
            is_secret=True,
        ),
        ConfigMetadata(
            key="optionalExampleConfigProperty",
            type=str,
            label="Optional Example Configuration Key",
            description=(
                "This is an optional configuration key for a Gameyfin plugin. "
                "It is not required to be set."
            ),
            is_required=False,
        ),
        ConfigMetadata(
            key="exampleConfigPropertyWithDefault",
            type=str,
            label="Example Configuration Key with Default Value",
            description="This is an example configuration key with a default value.",
            default="default",
        ),
        ConfigMetadata(
            key="exampleEnumConfigProperty",
            type=ExampleEnum,
            label="Example Enum Configuration Key",
            description=(
                "This is an example configuration key with an enum value and a default value. "
                "This will be displayed as a dropdown in the UI."
            ),
            default=ExampleEnum.OPTION_ONE,
        ),
    ]

    def validate_config(self, config: Mapping[str, Optional[str]]) -> PluginConfigValidationResult:
        # Required keys first; custom rules only see complete input
        validation_result = super().validate_config(config)
        if not validation_result.is_valid():
            return validation_result

        errors = {}

        if config.get("exampleConfigProperty") != "helloworld":
            errors["exampleConfigProperty"] = "Value must be 'helloworld'"

        example_enum_value = config.get("exampleEnumConfigProperty")
        if example_enum_value is None:
            errors["exampleEnumConfigProperty"] = REQUIRED_MESSAGE
        elif example_enum_value not in ExampleEnum.__members__:
            errors["exampleEnumConfigProperty"] = f"Invalid option '{example_enum_value}'"
        elif ExampleEnum[example_enum_value] == ExampleEnum.OPTION_THREE:
            errors["exampleEnumConfigProperty"] = "Option THREE is deprecated"

        secret_value = config.get("secretExampleConfigProperty")
        if secret_value is None:
            errors["secretExampleConfigProperty"] = REQUIRED_MESSAGE
        elif len(secret_value) < 5:
            errors["secretExampleConfigProperty"] = "Must be at least 5 characters long"

        if errors:
            return PluginConfigValidationResult.invalid(errors)
        return PluginConfigValidationResult.valid()

    def start(self) -> None:
        self.log.info("PluginTemplate started")

    def stop(self) -> None:
        self.log.debug("PluginTemplate stopped")

    def delete(self) -> None:
        self.log.debug("PluginTemplate deleted")
