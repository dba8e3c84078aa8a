"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from cardsmith.core.config import Settings, get_settings
from cardsmith.export import Exporter, GeneratorRegistry, default_registry
from cardsmith.layout import Editor


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide settings (explicit override or environment)."""
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_registry(self) -> GeneratorRegistry:
        """Provide generator registry with the built-in formats."""
        return default_registry()

    @singleton
    @provider
    def provide_exporter(self, settings: Settings, registry: GeneratorRegistry) -> Exporter:
        """Provide exporter sharing the registry singleton."""
        return Exporter(
            registry=registry,
            cache_size=settings.export_cache_size,
            enable_cache=settings.enable_export_cache,
        )

    @provider
    def provide_editor(self, settings: Settings) -> Editor:
        """Provide a fresh editing session per request."""
        return Editor(settings=settings)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
