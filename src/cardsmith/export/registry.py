"""Export routing.

A flat table maps format keys to generator functions. Adding a format is
one ``register`` call; no generator knows about any other. Unknown keys
fail fast with UnknownFormatError instead of producing empty output.
"""

from collections.abc import Callable, Iterable

from cardsmith.core import UnknownFormatError, get_logger
from cardsmith.scene import Snapshot, fingerprint
from .cache import ArtifactCache, ArtifactKey
from .card_json import generate_structured_document
from .formats import ARTIFACT_FILENAMES, LEGACY_ALIASES, ExportFormat
from .jsx import generate_source_code
from .serverless import generate_function_template

logger = get_logger(__name__)

Generator = Callable[[Snapshot], str]


def _key(format_key: ExportFormat | str) -> str:
    return format_key.value if isinstance(format_key, ExportFormat) else str(format_key)


class GeneratorRegistry:
    """Format key -> generator dispatch table."""

    def __init__(self) -> None:
        self._generators: dict[str, Generator] = {}
        self._aliases: dict[str, str] = {}
        self._revisions: dict[str, int] = {}

    def register(self, format_key: ExportFormat | str, generator: Generator, aliases: Iterable[str] = ()) -> None:
        """
        Register a generator under a format key.

        Args:
            format_key: Canonical key callers pass to export
            generator: Pure function from snapshot to artifact text
            aliases: Extra keys that resolve to the same generator
        """
        key = _key(format_key)
        aliases = list(aliases)
        if key in self._generators:
            logger.warning("generator_replaced", format=key)
        self._generators[key] = generator
        self._revisions[key] = self._revisions.get(key, 0) + 1
        for alias in aliases:
            self._aliases[alias] = key
        logger.debug("generator_registered", format=key, aliases=list(aliases))

    def resolve(self, format_key: ExportFormat | str) -> str:
        """
        Canonical key for a format key or alias.

        Raises:
            UnknownFormatError: If nothing is registered under the key
        """
        key = _key(format_key)
        key = self._aliases.get(key, key)
        if key not in self._generators:
            raise UnknownFormatError(key, self.keys())
        return key

    def get(self, format_key: ExportFormat | str) -> Generator:
        return self._generators[self.resolve(format_key)]

    def generate(self, snapshot: Snapshot, format_key: ExportFormat | str) -> str:
        """Run the generator registered for format_key."""
        return self.get(format_key)(snapshot)

    def revision(self, format_key: ExportFormat | str) -> int:
        """How many times a generator has been registered under the format's key."""
        return self._revisions[self.resolve(format_key)]

    def keys(self) -> list[str]:
        return list(self._generators)

    def __contains__(self, format_key: object) -> bool:
        if not isinstance(format_key, str):
            return False
        key = _key(format_key)
        return self._aliases.get(key, key) in self._generators


def default_registry() -> GeneratorRegistry:
    """Registry with the three built-in formats and their legacy aliases."""
    registry = GeneratorRegistry()
    builtin: dict[ExportFormat, Generator] = {
        ExportFormat.SOURCE_CODE: generate_source_code,
        ExportFormat.STRUCTURED_DOCUMENT: generate_structured_document,
        ExportFormat.FUNCTION_TEMPLATE: generate_function_template,
    }
    for export_format, generator in builtin.items():
        aliases = [alias for alias, target in LEGACY_ALIASES.items() if target is export_format]
        registry.register(export_format, generator, aliases)
    return registry


class Exporter:
    """
    Export front door with artifact caching.

    Artifacts are cached per (format, generator revision, snapshot
    fingerprint). Snapshots are immutable values, so an entry only goes
    stale when a new generator is registered for its format; those entries
    are dropped on the next export of that format.
    """

    def __init__(
        self,
        registry: GeneratorRegistry | None = None,
        cache_size: int = 32,
        enable_cache: bool = True,
    ) -> None:
        self.registry = registry or default_registry()
        self.cache: ArtifactCache | None = ArtifactCache(max_size=cache_size) if enable_cache else None
        self._revisions: dict[str, int] = {}

    def export(self, snapshot: Snapshot, format_key: ExportFormat | str) -> str:
        """
        Produce the artifact text for a snapshot.

        Raises:
            UnknownFormatError: If format_key is not registered
        """
        key = self.registry.resolve(format_key)
        if self.cache is None:
            return self._generate(snapshot, key)

        revision = self.registry.revision(key)
        if self._revisions.setdefault(key, revision) != revision:
            dropped = self.cache.invalidate(key)
            self._revisions[key] = revision
            logger.info("export_cache_invalidated", format=key, revision=revision, dropped=dropped)

        cache_key = ArtifactKey(key, revision, fingerprint(snapshot))
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("export_cache_hit", format=key)
            return cached

        artifact = self._generate(snapshot, key)
        self.cache.put(cache_key, artifact)
        return artifact

    def filename(self, format_key: ExportFormat | str) -> str:
        """Conventional file name for a format's artifact."""
        key = self.registry.resolve(format_key)
        try:
            return ARTIFACT_FILENAMES[ExportFormat(key)]
        except ValueError:
            return f"artifact.{key}"

    def _generate(self, snapshot: Snapshot, key: str) -> str:
        artifact = self.registry.generate(snapshot, key)
        logger.info("export_generated", format=key, components=len(snapshot), length=len(artifact))
        return artifact


_default = default_registry()


def export(snapshot: Snapshot, format_key: ExportFormat | str) -> str:
    """Export with the built-in generators and no caching."""
    return _default.generate(snapshot, format_key)
