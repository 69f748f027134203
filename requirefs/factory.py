"""Factories building a ModuleLoader over each kind of file source."""

import logging
import tarfile
import zipfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .exceptions import ArchiveError
from .loader import ModuleLoader
from .sources import DirectorySource
from .sources import MemorySource
from .sources import TarSource
from .sources import ZipSource

logger = logging.getLogger(__name__)


def from_tar(content: bytes, **kwargs: Any) -> ModuleLoader:
    """Return a loader over a tar archive; ``kwargs`` go to ModuleLoader."""
    return ModuleLoader(TarSource(content), **kwargs)


def from_zip(content: bytes, **kwargs: Any) -> ModuleLoader:
    """Return a loader over a zip archive; ``kwargs`` go to ModuleLoader."""
    return ModuleLoader(ZipSource(content), **kwargs)


def from_directory(path: str | Path, **kwargs: Any) -> ModuleLoader:
    """Return a loader over a host directory; ``kwargs`` go to ModuleLoader."""
    return ModuleLoader(DirectorySource(path), **kwargs)


def from_mapping(files: Mapping[str, bytes | str], **kwargs: Any) -> ModuleLoader:
    """Return a loader over an in-memory mapping; ``kwargs`` go to ModuleLoader."""
    return ModuleLoader(MemorySource(files), **kwargs)


def open_loader(path: str | Path, **kwargs: Any) -> ModuleLoader:
    """Open a directory, zip or tar file as a loader, detecting the format.

    Args:
        path: Directory or archive file on the host filesystem
        **kwargs: Passed to ModuleLoader

    Raises:
        ArchiveError: The file is neither a zip nor a tar archive
        OSError: The path cannot be read
    """
    path = Path(path)
    if path.is_dir():
        logger.debug(f"Opening {path} as directory source")
        return from_directory(path, **kwargs)

    if zipfile.is_zipfile(path):
        logger.debug(f"Opening {path} as zip source")
        return from_zip(path.read_bytes(), **kwargs)

    if tarfile.is_tarfile(path):
        logger.debug(f"Opening {path} as tar source")
        return from_tar(path.read_bytes(), **kwargs)

    raise ArchiveError(f"{path} is not a directory, zip archive or tar archive")
