"""Plugin lifecycle management - handles state transitions."""

import logging
from typing import Mapping, Optional

from pluginapi.plugins.config import PluginConfigError
from pluginapi.plugins.plugin import ConfigurableGamePlugin
from pluginapi.plugins.registry import PluginInstance, PluginState

logger = logging.getLogger(__name__)

STARTABLE_STATES = (PluginState.CONFIGURED, PluginState.STOPPED)


class PluginLifecycle:
    """Manages plugin state transitions: configure → start → stop → delete.

    Hook failures never propagate to the caller. A failed start leaves the
    plugin in ERROR; failed stop and delete hooks are logged and the
    transition completes anyway.
    """

    def configure(self, instance: PluginInstance, config: Mapping[str, Optional[str]]) -> bool:
        """Load configuration into the plugin.

        Args:
            instance: Plugin instance to configure
            config: Submitted key -> value mapping

        Returns:
            True if the configuration was valid and loaded
        """
        plugin = instance.plugin
        if not isinstance(plugin, ConfigurableGamePlugin):
            logger.error(f"Plugin {instance.id} does not take configuration")
            return False

        try:
            plugin.load_config(config)
        except PluginConfigError as e:
            logger.warning(f"Rejected configuration for plugin {instance.id}: {e.errors}")
            return False

        if instance.state in (PluginState.REGISTERED, PluginState.ERROR):
            instance.state = PluginState.CONFIGURED
            instance.error = None
        logger.info(f"Configured plugin: {instance.id}")
        return True

    def start(self, instance: PluginInstance) -> bool:
        """Start a configured plugin (call its start hook).

        Args:
            instance: Plugin instance to start

        Returns:
            True if started successfully
        """
        if instance.state == PluginState.STARTED:
            return True

        if instance.state == PluginState.REGISTERED and not isinstance(instance.plugin, ConfigurableGamePlugin):
            instance.state = PluginState.CONFIGURED

        if instance.state not in STARTABLE_STATES:
            logger.error(
                f"Cannot start plugin {instance.id}: state is {instance.state.value}, expected configured"
            )
            return False

        plugin = instance.plugin
        if isinstance(plugin, ConfigurableGamePlugin) and not plugin.is_configured:
            logger.error(f"Cannot start plugin {instance.id}: configuration is not valid")
            return False

        try:
            plugin.start()
        except Exception as e:
            instance.state = PluginState.ERROR
            instance.error = str(e)
            logger.error(f"Failed to start plugin {instance.id}: {e}")
            return False

        instance.state = PluginState.STARTED
        instance.error = None
        logger.info(f"Started plugin: {instance.id}")
        return True

    def stop(self, instance: PluginInstance) -> bool:
        """Stop a running plugin (call its stop hook).

        Args:
            instance: Plugin instance to stop

        Returns:
            True if the stop hook ran cleanly or there was nothing to stop
        """
        if instance.state != PluginState.STARTED:
            logger.debug(f"Plugin {instance.id} not started, skip stop")
            return True

        clean = True
        try:
            instance.plugin.stop()
        except Exception as e:
            clean = False
            instance.error = str(e)
            logger.error(f"Stop hook of plugin {instance.id} failed: {e}")

        instance.state = PluginState.STOPPED
        logger.info(f"Stopped plugin: {instance.id}")
        return clean

    def delete(self, instance: PluginInstance) -> bool:
        """Stop the plugin if needed, then call its delete hook.

        Args:
            instance: Plugin instance to delete

        Returns:
            True if every hook ran cleanly
        """
        clean = self.stop(instance)
        try:
            instance.plugin.delete()
        except Exception as e:
            clean = False
            instance.error = str(e)
            logger.error(f"Delete hook of plugin {instance.id} failed: {e}")

        instance.state = PluginState.DELETED
        logger.info(f"Deleted plugin: {instance.id}")
        return clean
