"""Plugin registry - tracks plugin instances by id."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from pluginapi.plugins.config import ConfigMetadata
from pluginapi.plugins.manifest import PluginManifest
from pluginapi.plugins.plugin import ConfigurableGamePlugin, GamePlugin

logger = logging.getLogger(__name__)

SECRET_MASK = "********"


class PluginState(str, Enum):
    """Plugin lifecycle states."""

    REGISTERED = "registered"
    CONFIGURED = "configured"
    STARTED = "started"
    STOPPED = "stopped"
    DELETED = "deleted"
    ERROR = "error"


@dataclass
class PluginInstance:
    """One installed plugin and its lifecycle state."""

    manifest: PluginManifest
    plugin: GamePlugin
    state: PluginState = PluginState.REGISTERED
    error: Optional[str] = None

    @property
    def id(self) -> str:
        return self.manifest.id

    def masked_config(self) -> Dict[str, Optional[str]]:
        """Current configuration with secret values hidden."""
        if not isinstance(self.plugin, ConfigurableGamePlugin):
            return {}
        masked = {}
        for element in self.plugin.config_metadata:
            value = self.plugin.config(element.key)
            masked[element.key] = _mask(element, value)
        return masked

    def to_dict(self) -> dict:
        """Serialize plugin instance to dict for API responses."""
        return {
            "id": self.manifest.id,
            "name": self.manifest.name,
            "version": self.manifest.version,
            "description": self.manifest.description,
            "provider": self.manifest.provider,
            "capabilities": list(self.manifest.capabilities),
            "state": self.state.value,
            "error": self.error,
            "config": self.masked_config(),
        }


def _mask(element: ConfigMetadata, value: Optional[str]) -> Optional[str]:
    if element.is_secret and value is not None:
        return SECRET_MASK
    return value


class PluginRegistry:
    """Central registry for all plugins."""

    def __init__(self):
        self._plugins: Dict[str, PluginInstance] = {}

    def register(self, instance: PluginInstance) -> None:
        """Register a plugin instance."""
        if self.has(instance.id):
            logger.warning(f"Plugin '{instance.id}' already registered, overwriting")
        self._plugins[instance.id] = instance
        logger.info(f"Registered plugin: {instance.id} {instance.manifest.version}")

    def get(self, plugin_id: str) -> Optional[PluginInstance]:
        """Get a plugin by ID."""
        return self._plugins.get(plugin_id)

    def get_all(self) -> list[PluginInstance]:
        """Get all registered plugins."""
        return list(self._plugins.values())

    def get_started(self) -> list[PluginInstance]:
        """Get all started plugins."""
        return [p for p in self._plugins.values() if p.state == PluginState.STARTED]

    def remove(self, plugin_id: str) -> Optional[PluginInstance]:
        """Remove a plugin from the registry."""
        return self._plugins.pop(plugin_id, None)

    def has(self, plugin_id: str) -> bool:
        """Check if a plugin is registered."""
        return plugin_id in self._plugins

    def count(self) -> int:
        """Get total number of registered plugins."""
        return len(self._plugins)
