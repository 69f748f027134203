"""File source contract.

A file source is the read-only view of the virtual filesystem that the
resolver and loader work against. Implementations only answer two questions:
does a file exist at this path, and what are its bytes.
"""

from abc import ABC
from abc import abstractmethod


class FileSource(ABC):
    """Base class for read-only file sources.

    Paths are virtual POSIX paths. A leading ``/`` refers to the virtual root
    and a path ending in ``/`` never exists as a file. Directories are never
    files.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether ``path`` names a file in this source."""
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Read the raw bytes of ``path``.

        Raises:
            SourceReadError: The source holds no file at ``path``
        """
        pass

    @abstractmethod
    def list_files(self) -> list[str]:
        """List every file key in this source, sorted."""
        pass

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read ``path`` and decode it.

        Raises:
            SourceReadError: The source holds no file at ``path``
            UnicodeDecodeError: Content is not valid in ``encoding``
        """
        return self.read(path).decode(encoding)
