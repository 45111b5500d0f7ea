"""Plugin contract and host-side plugin handling.

Imports are lazy so a plugin that only needs the contract types does not pull
in the host-side manager and its dependencies.
"""

__all__ = [
    "ConfigMetadata",
    "PluginConfigValidationResult",
    "PluginConfigError",
    "GameMetadata",
    "GameMetadataProvider",
    "MetadataProviderError",
    "GamePlugin",
    "ConfigurableGamePlugin",
    "PluginManifest",
    "PluginRegistry",
    "PluginInstance",
    "PluginState",
    "PluginLifecycle",
    "MetadataResolver",
    "PluginManager",
]


def __getattr__(name):
    if name in ("ConfigMetadata", "PluginConfigValidationResult", "PluginConfigError"):
        from pluginapi.plugins import config
        return getattr(config, name)
    if name in ("GameMetadata", "GameMetadataProvider", "MetadataProviderError"):
        from pluginapi.plugins import metadata
        return getattr(metadata, name)
    if name in ("GamePlugin", "ConfigurableGamePlugin"):
        from pluginapi.plugins import plugin
        return getattr(plugin, name)
    if name == "PluginManifest":
        from pluginapi.plugins.manifest import PluginManifest
        return PluginManifest
    if name in ("PluginRegistry", "PluginInstance", "PluginState"):
        from pluginapi.plugins import registry
        return getattr(registry, name)
    if name == "PluginLifecycle":
        from pluginapi.plugins.lifecycle import PluginLifecycle
        return PluginLifecycle
    if name == "MetadataResolver":
        from pluginapi.plugins.resolver import MetadataResolver
        return MetadataResolver
    if name == "PluginManager":
        from pluginapi.plugins.manager import PluginManager
        return PluginManager
    raise AttributeError(f"module 'pluginapi.plugins' has no attribute {name!r}")
