"""In-memory file source."""

from collections.abc import Mapping

from ..exceptions import SourceReadError
from ..paths import to_entry_key
from .base import FileSource


class MemorySource(FileSource):
    """File source backed by a mapping of path to content.

    String content is stored UTF-8 encoded. Keys ending in ``/`` are treated as
    directory entries and dropped.
    """

    def __init__(self, files: Mapping[str, bytes | str] | None = None):
        self._files: dict[str, bytes] = {}
        for path, content in (files or {}).items():
            key = to_entry_key(path)
            if key is None:
                continue
            if isinstance(content, str):
                content = content.encode("utf-8")
            self._files[key] = bytes(content)

    def exists(self, path: str) -> bool:
        key = to_entry_key(path)
        return key is not None and key in self._files

    def read(self, path: str) -> bytes:
        key = to_entry_key(path)
        if key is None or key not in self._files:
            raise SourceReadError(path)
        return self._files[key]

    def list_files(self) -> list[str]:
        return sorted(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._files)} files)"
