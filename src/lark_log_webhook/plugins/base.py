"""Base plugin class and metadata.

All plugins should inherit from BasePlugin and implement the required methods.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..core.config import AppConfig
from ..core.logger import get_logger
from ..core.targets import TargetRegistry, default_registry

Disposer = Callable[[], Any]


@dataclass
class PluginMetadata:
    """Metadata for a plugin.

    Attributes:
        name: Plugin name
        version: Plugin version
        description: Plugin description
        author: Plugin author
        enabled: Whether plugin is enabled
    """

    name: str
    version: str = "1.0.0"
    description: str = ""
    author: str = ""
    enabled: bool = True


class BasePlugin(ABC):
    """Base class for all plugins.

    Resources acquired while the plugin is enabled should be registered through
    :meth:`effect`; their disposers run in reverse order when the plugin is
    disabled, whatever happened in between.

    Example:
        ```python
        from lark_log_webhook.plugins import BasePlugin, PluginMetadata

        class MyPlugin(BasePlugin):
            def metadata(self) -> PluginMetadata:
                return PluginMetadata(name="my-plugin")

            def on_enable(self) -> None:
                self.effect(lambda: self.registry.register(MyTarget()).unregister)
        ```
    """

    def __init__(self, config: AppConfig, registry: TargetRegistry | None = None):
        """Initialize the plugin.

        Args:
            config: Application configuration
            registry: Log target registry (process-wide default when omitted)
        """
        self.config = config
        self.registry = registry or default_registry
        self.logger = get_logger(f"plugin.{self.metadata().name}")
        self._disposers: list[Disposer] = []

    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """Return plugin metadata.

        Returns:
            PluginMetadata instance
        """

    def on_load(self) -> None:
        """Called when plugin is registered with the manager."""
        self.logger.debug("on_load called for %s", self.__class__.__name__)

    def on_enable(self) -> None:
        """Called when plugin is enabled.

        Use this to acquire resources through :meth:`effect`.
        """
        self.logger.debug("on_enable default no-op for %s", self.__class__.__name__)

    def on_disable(self) -> None:
        """Called when plugin is disabled, before effects are disposed."""
        self.logger.debug("on_disable default no-op for %s", self.__class__.__name__)

    def on_unload(self) -> None:
        """Called when plugin is removed from the manager."""
        self.logger.debug("on_unload default no-op for %s", self.__class__.__name__)

    def effect(self, setup: Callable[[], Disposer]) -> Disposer:
        """Run ``setup`` and keep its disposer until the plugin is disabled.

        Args:
            setup: Callable acquiring a resource and returning its disposer

        Returns:
            The disposer returned by ``setup``
        """
        disposer = setup()
        self._disposers.append(disposer)
        return disposer

    @property
    def effect_count(self) -> int:
        return len(self._disposers)

    def cleanup_effects(self) -> None:
        """Run all registered disposers in reverse order.

        This is called automatically when the plugin is disabled. A failing
        disposer is logged and does not stop the remaining ones.
        """
        while self._disposers:
            disposer = self._disposers.pop()
            try:
                disposer()
            except Exception as exc:
                self.logger.error("Effect cleanup failed: %s", exc, exc_info=True)
