"""Plugin base classes and lifecycle hooks."""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Type, TypeVar

from pluginapi.plugins.config import (
    ConfigMetadata,
    PluginConfigError,
    PluginConfigValidationResult,
    check_config_metadata,
    validate_required,
)

E = TypeVar("E")


class GamePlugin:
    """Base class for plugins.

    Subclasses list their extension classes (e.g. a GameMetadataProvider
    implementation) in ``extensions``. The lifecycle hooks are optional and
    do nothing by default.
    """

    extensions: Sequence[type] = ()

    def __init__(self, plugin_id: str):
        self.plugin_id = plugin_id
        self.log = logging.getLogger(f"plugin.{plugin_id}")
        self._extension_instances: Dict[type, object] = {}

    def start(self) -> None:
        """Called once configuration is valid and the plugin is enabled."""
        pass

    def stop(self) -> None:
        """Called when the plugin is disabled or the host shuts down."""
        pass

    def delete(self) -> None:
        """Called when the plugin is uninstalled."""
        pass

    def extension_config(self) -> Dict[str, Optional[str]]:
        """Configuration handed to extension constructors."""
        return {}

    def get_extensions(self, extension_type: Type[E]) -> List[E]:
        """Get this plugin's extensions implementing a capability.

        Instances are created on first request and reused afterwards.

        Args:
            extension_type: Capability interface, e.g. GameMetadataProvider

        Returns:
            One instance per matching extension class
        """
        found = []
        for extension_cls in self.extensions:
            if not issubclass(extension_cls, extension_type):
                continue
            if extension_cls not in self._extension_instances:
                self._extension_instances[extension_cls] = extension_cls(self.extension_config())
                self.log.debug(f"Created extension {extension_cls.__name__}")
            found.append(self._extension_instances[extension_cls])
        return found

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(plugin_id={self.plugin_id})>"


class ConfigurableGamePlugin(GamePlugin):
    """Base class for plugins that take configuration from the host.

    Subclasses declare ``config_metadata`` and may override
    ``validate_config`` to add their own rules on top of the required-field
    check. All configuration values are stored encrypted by the host.
    """

    config_metadata: Sequence[ConfigMetadata] = ()

    def __init__(self, plugin_id: str):
        super().__init__(plugin_id)
        self.config_metadata = check_config_metadata(self.config_metadata)
        self._config: Dict[str, Optional[str]] = {}

    def validate_config(self, config: Mapping[str, Optional[str]]) -> PluginConfigValidationResult:
        """Check that every required key without a default has a value."""
        return validate_required(self.config_metadata, config)

    def load_config(self, config: Mapping[str, Optional[str]]) -> None:
        """Validate and store configuration.

        Raises:
            PluginConfigError: If the configuration does not validate. The
                previously loaded configuration is kept.
        """
        result = self.validate_config(config)
        if not result.is_valid():
            raise PluginConfigError(result.errors)

        self._config = dict(config)
        self._extension_instances.clear()
        self.log.info(f"Loaded configuration ({len(self._config)} keys)")

    @property
    def is_configured(self) -> bool:
        return self.validate_config(self._config).is_valid()

    def get_config_element(self, key: str) -> Optional[ConfigMetadata]:
        return next((e for e in self.config_metadata if e.key == key), None)

    def config(self, key: str) -> Optional[str]:
        """Get a configuration value, falling back to the declared default."""
        value = self._config.get(key)
        if value is not None:
            return value
        element = self.get_config_element(key)
        return element.default_string if element else None

    def extension_config(self) -> Dict[str, Optional[str]]:
        return {element.key: self.config(element.key) for element in self.config_metadata}
