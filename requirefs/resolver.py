"""Node-style module path resolution over a file source.

Resolution order for a specifier seen from a directory:

1. Relative specifiers (``.``, ``..``, ``./x``, ``../x``) are joined onto the
   directory and probed as a file, then with each extension, then as a
   directory (``package.json`` ``module``/``main``, else ``index``).
2. Bare specifiers are probed the same way inside ``node_modules`` of the
   directory and of every ancestor, nearest first.
"""

import json
import logging
from collections.abc import Iterable

from . import paths
from .exceptions import ResolutionFailure
from .sources.base import FileSource

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".js",)
MANIFEST_NAME = "package.json"
MANIFEST_ENTRY_FIELDS = ("module", "main")
INDEX_NAME = "index"


def normalize_extensions(extensions: Iterable[str]) -> list[str]:
    """Prefix each extension with a dot when it lacks one."""
    return [extension if extension.startswith(".") else f".{extension}" for extension in extensions]


class PathResolver:
    """Resolve import specifiers to canonical paths inside a file source."""

    def __init__(self, source: FileSource, extensions: Iterable[str] | None = None):
        """Initialize resolver.

        Args:
            source: File source answering existence and read queries
            extensions: Ordered suffixes to probe (default: ``.js``)
        """
        self.source = source
        self._extensions: list[str] = []
        self.extensions = DEFAULT_EXTENSIONS if extensions is None else extensions

    @property
    def extensions(self) -> list[str]:
        """Ordered list of suffixes probed after the exact path."""
        return list(self._extensions)

    @extensions.setter
    def extensions(self, extensions: Iterable[str]) -> None:
        self._extensions = normalize_extensions(extensions)

    def resolve(self, specifier: str, context_path: str) -> str:
        """Resolve ``specifier`` as seen from directory ``context_path``.

        Raises:
            ResolutionFailure: No candidate exists in the source
        """
        resolved, _probed = self.resolve_with_trace(specifier, context_path)
        return resolved

    def resolve_with_trace(self, specifier: str, context_path: str) -> tuple[str, list[str]]:
        """Resolve and also return every candidate path probed, in order.

        Returns:
            Tuple of (resolved_path, probed_candidates)

        Raises:
            ResolutionFailure: No candidate exists; carries the probed candidates
        """
        base_path = paths.normalize(context_path)
        probed: list[str] = []

        if paths.is_relative_specifier(specifier):
            candidate = self._resolve_path(specifier, base_path, probed)
        else:
            candidate = self._resolve_package(specifier, base_path, probed)

        if candidate is None:
            logger.debug(f"[requirefs:resolve] {specifier} from {context_path} -> unresolved ({len(probed)} probes)")
            raise ResolutionFailure(specifier, context_path, probed)

        logger.debug(f"[requirefs:resolve] {specifier} from {context_path} -> {candidate}")
        return candidate, probed

    def _is_file(self, path: str, probed: list[str]) -> bool:
        probed.append(path)
        return self.source.exists(path)

    def _resolve_path(self, specifier: str, base_path: str, probed: list[str]) -> str | None:
        target = paths.join(base_path, specifier)
        return self._resolve_file(target, probed) or self._resolve_directory(target, probed)

    def _resolve_file(self, file_path: str, probed: list[str]) -> str | None:
        """Try the exact path, then each extension in order."""
        if self._is_file(file_path, probed):
            return file_path

        for extension in self._extensions:
            with_extension = f"{file_path}{extension}"
            if self._is_file(with_extension, probed):
                return with_extension

        return None

    def _resolve_directory(self, directory_path: str, probed: list[str]) -> str | None:
        """Resolve a directory through its manifest entry point or index file.

        A manifest entry that names a directory is probed for an index file
        inside it; that directory's own manifest is not consulted.
        """
        entry = self._manifest_entry(directory_path, probed)
        if entry is None:
            return self._resolve_file(paths.join(directory_path, INDEX_NAME), probed)

        entry_path = paths.join(directory_path, entry)
        return self._resolve_file(entry_path, probed) or self._resolve_file(
            paths.join(entry_path, INDEX_NAME), probed
        )

    def _resolve_package(self, specifier: str, base_path: str, probed: list[str]) -> str | None:
        """Search ``node_modules`` from ``base_path`` up to the root."""
        directory = base_path
        while True:
            candidate = self._resolve_path(specifier, paths.join(directory, "node_modules"), probed)
            if candidate:
                return candidate

            parent = paths.dirname(directory)
            if parent == directory:
                return None
            directory = parent

    def _manifest_entry(self, directory_path: str, probed: list[str]) -> str | None:
        """Read the entry point named by ``package.json`` in a directory.

        Unreadable or malformed manifests count as absent.
        """
        manifest_path = paths.join(directory_path, MANIFEST_NAME)
        if not self._is_file(manifest_path, probed):
            return None

        try:
            manifest = json.loads(self.source.read_text(manifest_path))
        except (ValueError, UnicodeDecodeError) as e:
            logger.debug(f"[requirefs:resolve] ignoring malformed {manifest_path}: {e}")
            return None

        if not isinstance(manifest, dict):
            return None

        for field in MANIFEST_ENTRY_FIELDS:
            entry = manifest.get(field)
            if isinstance(entry, str) and entry:
                return entry
        return None

    def __repr__(self) -> str:
        return f"PathResolver({self.source!r}, extensions={self._extensions})"
