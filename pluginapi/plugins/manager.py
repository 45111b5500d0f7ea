"""Plugin manager - top-level orchestrator for installed plugins."""

import logging
from typing import List, Mapping, Optional

from pluginapi.plugins.config import PluginConfigValidationResult
from pluginapi.plugins.lifecycle import PluginLifecycle
from pluginapi.plugins.manifest import PluginManifest
from pluginapi.plugins.metadata import GameMetadata, GameMetadataProvider
from pluginapi.plugins.plugin import ConfigurableGamePlugin, GamePlugin
from pluginapi.plugins.registry import PluginInstance, PluginRegistry, PluginState
from pluginapi.plugins.resolver import MetadataResolver

logger = logging.getLogger(__name__)


class PluginManager:
    """Coordinates registration, configuration, lifecycle and lookups.

    Plugins are handed to the manager already constructed; configuration is
    kept in memory on the plugin object only.
    """

    def __init__(self, lookup_timeout: float):
        self.registry = PluginRegistry()
        self.lifecycle = PluginLifecycle()
        self.resolver = MetadataResolver(timeout=lookup_timeout)

    def register_plugin(self, plugin: GamePlugin, manifest: PluginManifest) -> PluginInstance:
        """Register a constructed plugin under its manifest id."""
        instance = PluginInstance(manifest=manifest, plugin=plugin)
        self.registry.register(instance)
        return instance

    def get_config_schema(self, plugin_id: str) -> Optional[List[dict]]:
        """Get the plugin's configuration descriptors as dicts."""
        instance = self.registry.get(plugin_id)
        if not instance:
            logger.error(f"Plugin not found: {plugin_id}")
            return None
        if not isinstance(instance.plugin, ConfigurableGamePlugin):
            return []
        return [element.to_dict() for element in instance.plugin.config_metadata]

    def validate_plugin_config(
        self, plugin_id: str, config: Mapping[str, Optional[str]]
    ) -> Optional[PluginConfigValidationResult]:
        """Validate configuration without loading it."""
        instance = self.registry.get(plugin_id)
        if not instance:
            logger.error(f"Plugin not found: {plugin_id}")
            return None
        if not isinstance(instance.plugin, ConfigurableGamePlugin):
            return PluginConfigValidationResult.valid()
        return instance.plugin.validate_config(config)

    def update_plugin_config(
        self, plugin_id: str, config: Mapping[str, Optional[str]]
    ) -> Optional[PluginConfigValidationResult]:
        """Validate and, if valid, load configuration into the plugin.

        Returns:
            The validation result, or None if the plugin is unknown
        """
        result = self.validate_plugin_config(plugin_id, config)
        if result is None or not result.is_valid():
            return result

        instance = self.registry.get(plugin_id)
        if isinstance(instance.plugin, ConfigurableGamePlugin):
            self.lifecycle.configure(instance, config)
        return result

    def enable_plugin(self, plugin_id: str) -> Optional[PluginInstance]:
        """Start a plugin.

        Returns:
            PluginInstance (check its state), None if not found
        """
        instance = self.registry.get(plugin_id)
        if not instance:
            logger.error(f"Plugin not found: {plugin_id}")
            return None
        self.lifecycle.start(instance)
        return instance

    def disable_plugin(self, plugin_id: str) -> Optional[PluginInstance]:
        """Stop a plugin."""
        instance = self.registry.get(plugin_id)
        if not instance:
            logger.error(f"Plugin not found: {plugin_id}")
            return None
        self.lifecycle.stop(instance)
        return instance

    def uninstall_plugin(self, plugin_id: str) -> Optional[PluginInstance]:
        """Stop and delete a plugin, then drop it from the registry."""
        instance = self.registry.get(plugin_id)
        if not instance:
            logger.error(f"Plugin not found: {plugin_id}")
            return None
        self.lifecycle.delete(instance)
        self.registry.remove(plugin_id)
        logger.info(f"Uninstalled plugin: {plugin_id}")
        return instance

    def stop_all(self) -> None:
        """Stop all running plugins."""
        for instance in self.registry.get_started():
            self.lifecycle.stop(instance)
        logger.info("All plugins stopped")

    def get_provider(self, plugin_id: str) -> Optional[GameMetadataProvider]:
        """Get the metadata provider of a started plugin."""
        instance = self.registry.get(plugin_id)
        if not instance or instance.state != PluginState.STARTED:
            return None
        providers = instance.plugin.get_extensions(GameMetadataProvider)
        if not providers:
            logger.warning(f"Plugin {plugin_id} has no metadata provider")
            return None
        return providers[0]

    async def fetch_by_title(self, plugin_id: str, game_title: str, max_results: int) -> List[GameMetadata]:
        """Resolve a title through one plugin; empty if it cannot answer."""
        provider = self.get_provider(plugin_id)
        if provider is None:
            return []
        return await self.resolver.fetch_by_title(provider, game_title, max_results)

    async def fetch_by_id(self, plugin_id: str, game_id: str) -> Optional[GameMetadata]:
        """Resolve an id through one plugin; None if it cannot answer."""
        provider = self.get_provider(plugin_id)
        if provider is None:
            return None
        return await self.resolver.fetch_by_id(provider, game_id)

    def get_plugin_info(self, plugin_id: str) -> Optional[dict]:
        """Get plugin information as dict."""
        instance = self.registry.get(plugin_id)
        if not instance:
            return None
        return instance.to_dict()

    def list_plugins(self) -> List[dict]:
        """List all plugins as dicts."""
        return [p.to_dict() for p in self.registry.get_all()]
