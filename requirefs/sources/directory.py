"""Read-only file source over a host directory."""

from pathlib import Path

from ..exceptions import SourceReadError
from ..paths import to_entry_key
from .base import FileSource


class DirectorySource(FileSource):
    """Expose a host directory as the virtual root.

    Paths that would escape the directory (including through symlinks) are
    reported as missing.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def _host_path(self, path: str) -> Path | None:
        key = to_entry_key(path)
        if key is None:
            return None
        candidate = (self.root / key).resolve()
        if not candidate.is_relative_to(self.root):
            return None
        return candidate

    def exists(self, path: str) -> bool:
        host_path = self._host_path(path)
        return host_path is not None and host_path.is_file()

    def read(self, path: str) -> bytes:
        host_path = self._host_path(path)
        if host_path is None or not host_path.is_file():
            raise SourceReadError(path)
        return host_path.read_bytes()

    def list_files(self) -> list[str]:
        return sorted(p.relative_to(self.root).as_posix() for p in self.root.rglob("*") if p.is_file())

    def __repr__(self) -> str:
        return f"DirectorySource({self.root})"
