"""File sources for the virtual filesystem.

- MemorySource: mapping of path to content
- TarSource / ZipSource: archive blobs
- DirectorySource: read-only view of a host directory
"""

from .archive import TarSource
from .archive import ZipSource
from .base import FileSource
from .directory import DirectorySource
from .memory import MemorySource

__all__ = [
    "DirectorySource",
    "FileSource",
    "MemorySource",
    "TarSource",
    "ZipSource",
]
