"""Archive-backed file sources.

Both sources read the whole archive into an in-memory index when constructed
and keep no file handles open afterwards.
"""

import io
import logging
import tarfile
import zipfile

from ..exceptions import ArchiveError
from .memory import MemorySource

logger = logging.getLogger(__name__)


class TarSource(MemorySource):
    """File source over a tar archive (plain or compressed)."""

    def __init__(self, content: bytes):
        """Index every regular file in the archive.

        Args:
            content: Raw tar bytes; gzip, bz2 and xz compression are detected

        Raises:
            ArchiveError: Content is not a readable tar archive
        """
        files: dict[str, bytes] = {}
        try:
            with tarfile.open(fileobj=io.BytesIO(content), mode="r:*") as archive:
                for member in archive.getmembers():
                    if not member.isfile():
                        continue
                    extracted = archive.extractfile(member)
                    if extracted is None:
                        continue
                    files[member.name] = extracted.read()
        except tarfile.TarError as e:
            raise ArchiveError(f"Invalid tar archive: {e}") from e

        logger.debug(f"[requirefs:source] indexed {len(files)} tar members")
        super().__init__(files)


class ZipSource(MemorySource):
    """File source over a zip archive."""

    def __init__(self, content: bytes):
        """Index every file entry in the archive.

        Args:
            content: Raw zip bytes

        Raises:
            ArchiveError: Content is not a readable zip archive
        """
        files: dict[str, bytes] = {}
        try:
            with zipfile.ZipFile(io.BytesIO(content)) as archive:
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    files[info.filename] = archive.read(info)
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise ArchiveError(f"Invalid zip archive: {e}") from e

        logger.debug(f"[requirefs:source] indexed {len(files)} zip entries")
        super().__init__(files)
