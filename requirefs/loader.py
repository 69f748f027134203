"""CommonJS-style module loader over a read-only file source.

``require`` flow:

1. Custom modules registered with ``provide`` win outright (matched on the
   specifier's last path segment).
2. Inside module bodies, bare specifiers that are valid Python module names
   are first tried against the host's own import system.
3. The specifier is resolved to a canonical path and the require cache is
   consulted. A cached record is returned even while its module is still
   executing, which is what lets circular imports terminate.
4. Data files (``.json``, ``.yaml``, ``.yml``) are parsed into exports. Other
   files are handed to the executor after a record has been cached for them.
"""

import importlib
import json
import logging
import re
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import yaml

from . import paths
from .exceptions import ContentParseFailure
from .execution import ExecutionContext
from .execution import Executor
from .execution import PythonExecutor
from .models import Module
from .models import ModuleRecord
from .registry import CustomModuleRegistry
from .resolver import PathResolver
from .settings import LoaderSettings
from .sources.base import FileSource

logger = logging.getLogger(__name__)

ROOT_DIRECTORY = "."

_NATIVE_MODULE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def _parse_json(text: str) -> Any:
    return json.loads(text)


def _parse_yaml(text: str) -> Any:
    return yaml.safe_load(text)


DATA_PARSERS: dict[str, Callable[[str], Any]] = {
    ".json": _parse_json,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
}


class ModuleLoader:
    """Load modules from a file source with a per-instance require cache.

    The loader is single-threaded and re-entrant: module bodies call back into
    it through their own ``require``. Hosts wanting independent module graphs
    use separate loader instances.
    """

    def __init__(
        self,
        source: FileSource,
        executor: Executor | None = None,
        settings: LoaderSettings | None = None,
        extensions: Iterable[str] | None = None,
    ):
        """Initialize loader.

        Args:
            source: File source holding the module tree
            executor: Runs module bodies (default: PythonExecutor)
            settings: Loader settings (default: LoaderSettings())
            extensions: Overrides ``settings.extensions`` when given
        """
        self.settings = settings or LoaderSettings()
        self.source = source
        self.executor: Executor = executor or PythonExecutor()
        self.resolver = PathResolver(source, self.settings.extensions if extensions is None else extensions)
        self.registry = CustomModuleRegistry()
        self._cache: dict[str, ModuleRecord] = {}

    @property
    def extensions(self) -> list[str]:
        """Ordered list of suffixes probed after the exact path."""
        return self.resolver.extensions

    @extensions.setter
    def extensions(self, extensions: Iterable[str]) -> None:
        self.resolver.extensions = extensions

    @property
    def cache(self) -> Mapping[str, ModuleRecord]:
        """Read-only view of the require cache, keyed by resolved path."""
        return MappingProxyType(self._cache)

    def provide(self, name: str, value: Any) -> None:
        """Register a custom module.

        Raises:
            RegistrationConflict: ``name`` is already registered
        """
        self.registry.register(name, value)

    def require(self, specifier: str) -> Any:
        """Require ``specifier`` relative to the virtual root.

        Raises:
            ResolutionFailure: Nothing in the source matches ``specifier``
            ContentParseFailure: A data file or module text could not be decoded
        """
        return self.load(f"./{paths.normalize(specifier)}", ROOT_DIRECTORY)

    def resolve(self, specifier: str, context_directory: str = ROOT_DIRECTORY) -> str:
        """Resolve ``specifier`` without loading it."""
        return self.resolver.resolve(specifier, context_directory)

    def load(self, specifier: str, context_directory: str) -> Any:
        """Load ``specifier`` as seen from ``context_directory`` and return its exports."""
        custom_name = paths.basename(specifier)
        if custom_name in self.registry:
            logger.debug(f"[requirefs:load] {specifier} -> custom module '{custom_name}'")
            return self.registry.get(custom_name)

        resolved_path = self._cache_key(self.resolver.resolve(specifier, context_directory))

        record = self._cache.get(resolved_path)
        if record is not None:
            if not record.loaded:
                logger.debug(f"[requirefs:load] {resolved_path} is still loading (circular require)")
            return record.exports

        parser = self._data_parser(resolved_path)
        if parser is not None:
            return self._load_data(resolved_path, parser)
        return self._load_module(resolved_path)

    def _cache_key(self, resolved_path: str) -> str:
        """Root-relative key, so "/a.js" and "a.js" share one record."""
        return paths.to_entry_key(resolved_path) or resolved_path

    def _data_parser(self, resolved_path: str) -> Callable[[str], Any] | None:
        for extension, parser in DATA_PARSERS.items():
            if resolved_path.endswith(extension):
                return parser
        return None

    def _read_text(self, resolved_path: str) -> str:
        try:
            return self.source.read_text(resolved_path, self.settings.encoding)
        except UnicodeDecodeError as e:
            raise ContentParseFailure(resolved_path, e) from e

    def _load_data(self, resolved_path: str, parser: Callable[[str], Any]) -> Any:
        """Parse a data file; nothing is cached when parsing fails."""
        text = self._read_text(resolved_path)
        try:
            exports = parser(text)
        except (ValueError, yaml.YAMLError) as e:
            raise ContentParseFailure(resolved_path, e) from e

        module = Module(id=resolved_path, filename=resolved_path, dirname=paths.dirname(resolved_path), exports=exports)
        self._cache[resolved_path] = ModuleRecord(resolved_path=resolved_path, module=module, loaded=True)
        logger.debug(f"[requirefs:load] parsed data module {resolved_path}")
        return exports

    def _load_module(self, resolved_path: str) -> Any:
        """Execute a module body with its record cached up front.

        If the body raises, the record stays cached with whatever exports it
        had built so far; a later require of the same path returns them.
        """
        source_text = self._read_text(resolved_path)

        directory = paths.dirname(resolved_path)
        module = Module(id=resolved_path, filename=resolved_path, dirname=directory)
        seeded = module.exports
        record = ModuleRecord(resolved_path=resolved_path, module=module)
        self._cache[resolved_path] = record

        context = ExecutionContext(
            filename=resolved_path,
            dirname=directory,
            require=self._make_require(directory),
            module=module,
        )
        logger.debug(f"[requirefs:load] executing {resolved_path}")
        result = self.executor(source_text, context)

        if result is not None and result is not seeded:
            module.exports = result

        record.loaded = True
        return record.exports

    def _make_require(self, directory: str) -> Callable[[str], Any]:
        """Build the ``require`` a module body in ``directory`` receives."""

        def require(target: str) -> Any:
            if paths.basename(target) not in self.registry:
                native = self._try_native_require(target)
                if native is not None:
                    return native
            return self.load(target, directory)

        return require

    def _try_native_require(self, target: str) -> Any:
        """Import ``target`` through the host's import system, or return None."""
        if not self.settings.native_require or not _NATIVE_MODULE_NAME.match(target):
            return None

        try:
            return importlib.import_module(target)
        except Exception as e:
            # A native miss falls through to the virtual tree
            logger.debug(f"[requirefs:native] {target} not importable: {e}")
            return None

    def __repr__(self) -> str:
        return f"ModuleLoader({self.source!r}, cached={len(self._cache)})"
