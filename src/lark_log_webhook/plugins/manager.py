"""Plugin manager handling the plugin lifecycle."""

from __future__ import annotations

from ..core.config import AppConfig
from ..core.logger import get_logger
from ..core.targets import TargetRegistry
from .base import BasePlugin

logger = get_logger("plugin_manager")


class PluginManager:
    """Registers plugins and drives their enable/disable lifecycle.

    Example:
        ```python
        manager = PluginManager(config)
        manager.register(LarkWebhookLogPlugin)
        manager.enable_all()
        ...
        manager.disable_all()
        ```
    """

    def __init__(self, config: AppConfig, registry: TargetRegistry | None = None):
        """Initialize the plugin manager.

        Args:
            config: Application configuration passed to every plugin
            registry: Log target registry passed to every plugin
        """
        self.config = config
        self.registry = registry
        self.plugins: dict[str, BasePlugin] = {}
        self._enabled: set[str] = set()

    def register(self, plugin_cls: type[BasePlugin]) -> BasePlugin:
        """Instantiate and load a plugin class.

        Raises:
            ValueError: If a plugin with the same name is already registered
        """
        plugin = plugin_cls(self.config, self.registry)
        name = plugin.metadata().name
        if name in self.plugins:
            raise ValueError(f"Plugin already registered: {name}")

        plugin.on_load()
        self.plugins[name] = plugin
        logger.info(f"Loaded plugin: {name}")
        return plugin

    def unregister(self, name: str) -> bool:
        """Disable (if needed) and unload a plugin."""
        plugin = self.plugins.get(name)
        if not plugin:
            logger.warning(f"Plugin not found: {name}")
            return False

        self.disable_plugin(name)
        try:
            plugin.on_unload()
        except Exception as e:
            logger.error(f"Error unloading plugin {name}: {e}", exc_info=True)
        del self.plugins[name]
        return True

    def enable_plugin(self, name: str) -> bool:
        """Enable a specific plugin.

        If ``on_enable`` fails, effects it already acquired are released.

        Args:
            name: Plugin name

        Returns:
            True if plugin was enabled, False otherwise
        """
        plugin = self.plugins.get(name)
        if not plugin:
            logger.warning(f"Plugin not found: {name}")
            return False
        if name in self._enabled:
            return True

        try:
            plugin.on_enable()
        except Exception as e:
            logger.error(f"Error enabling plugin {name}: {e}", exc_info=True)
            plugin.cleanup_effects()
            return False

        self._enabled.add(name)
        logger.info(f"Enabled plugin: {name}")
        return True

    def disable_plugin(self, name: str) -> bool:
        """Disable a specific plugin.

        Effects are always released, even if ``on_disable`` fails.

        Args:
            name: Plugin name

        Returns:
            True if plugin was disabled, False otherwise
        """
        plugin = self.plugins.get(name)
        if not plugin:
            logger.warning(f"Plugin not found: {name}")
            return False
        if name not in self._enabled:
            return False

        self._enabled.discard(name)
        try:
            plugin.on_disable()
        except Exception as e:
            logger.error(f"Error disabling plugin {name}: {e}", exc_info=True)
            return False
        finally:
            plugin.cleanup_effects()

        logger.info(f"Disabled plugin: {name}")
        return True

    def enable_all(self) -> None:
        """Enable all registered plugins whose metadata marks them enabled."""
        for name, plugin in self.plugins.items():
            if plugin.metadata().enabled:
                self.enable_plugin(name)

    def disable_all(self) -> None:
        """Disable all enabled plugins, in reverse registration order."""
        for name in reversed(list(self.plugins)):
            if name in self._enabled:
                self.disable_plugin(name)

    def is_plugin_enabled(self, name: str) -> bool:
        return name in self._enabled

    def get_plugin(self, name: str) -> BasePlugin | None:
        """Get a plugin by name."""
        return self.plugins.get(name)

    def list_plugins(self) -> list[str]:
        """List names of registered plugins."""
        return list(self.plugins.keys())
