"""Dependency injection container for services."""

import importlib
import logging
from pathlib import Path
from typing import Optional, Type

from pluginapi.constants import METADATA_LOOKUP_TIMEOUT, TEMPLATE_PLUGIN_DIR
from pluginapi.plugins.manager import PluginManager
from pluginapi.plugins.manifest import PluginManifest, load_manifest
from pluginapi.plugins.plugin import GamePlugin

logger = logging.getLogger(__name__)

# ============================================================================
# Global service instances (singletons, exposed via functions for easier testing/mocking)
# ============================================================================

_plugin_manager_instance: Optional[PluginManager] = None


def resolve_entry_point(manifest: PluginManifest, plugin_dir: Path) -> Optional[Type[GamePlugin]]:
    """Import the plugin class named by a bundled plugin's manifest.

    The entry point is resolved inside the bundled package that holds
    plugin_dir, e.g. 'plugin:PluginTemplate' in plugins/bundled/template/.

    Returns:
        The plugin class, or None if it cannot be imported
    """
    module_name, class_name = manifest.entry_point.split(":", 1)
    import_path = f"plugins.bundled.{plugin_dir.name}.{module_name}"

    try:
        module = importlib.import_module(import_path)
    except ImportError as e:
        logger.error(f"Cannot import {import_path} for plugin {manifest.id}: {e}")
        return None

    plugin_class = getattr(module, class_name, None)
    if not (isinstance(plugin_class, type) and issubclass(plugin_class, GamePlugin)):
        logger.error(f"{manifest.entry_point} of plugin {manifest.id} is not a GamePlugin class")
        return None
    return plugin_class


def register_bundled_plugins(manager: PluginManager) -> int:
    """Register the plugins shipped with this repository.

    Returns:
        Number of plugins registered
    """
    manifest = load_manifest(TEMPLATE_PLUGIN_DIR)
    if manifest is None:
        logger.error(f"Bundled template plugin has no usable manifest at {TEMPLATE_PLUGIN_DIR}")
        return 0

    plugin_class = resolve_entry_point(manifest, TEMPLATE_PLUGIN_DIR)
    if plugin_class is None:
        return 0

    manager.register_plugin(plugin_class(manifest.id), manifest)
    return 1


def get_plugin_manager() -> PluginManager:
    """Get plugin manager (singleton)."""
    global _plugin_manager_instance
    if _plugin_manager_instance is None:
        _plugin_manager_instance = PluginManager(lookup_timeout=METADATA_LOOKUP_TIMEOUT)
        register_bundled_plugins(_plugin_manager_instance)
        logger.info(
            f"Created PluginManager instance with {_plugin_manager_instance.registry.count()} plugin(s)"
        )
    return _plugin_manager_instance


# Test utility function (for unit testing - resets all singletons)
def reset_services():
    """Reset all service instances (only for testing)."""
    global _plugin_manager_instance

    _plugin_manager_instance = None
    logger.info("Reset all service instances")
