"""Sandboxed CommonJS-style module loading from archives.

Resolves ``require`` specifiers with Node's relative-path, extension-probing,
``package.json`` and ``node_modules`` rules against a read-only file source
(tar, zip, in-memory mapping or a host directory) and loads modules through a
pluggable executor.
"""

from .exceptions import ArchiveError
from .exceptions import ContentParseFailure
from .exceptions import RegistrationConflict
from .exceptions import RequireFSError
from .exceptions import ResolutionFailure
from .exceptions import SourceReadError
from .execution import ExecutionContext
from .execution import Executor
from .execution import PythonExecutor
from .factory import from_directory
from .factory import from_mapping
from .factory import from_tar
from .factory import from_zip
from .factory import open_loader
from .loader import ModuleLoader
from .models import Module
from .models import ModuleRecord
from .registry import CustomModuleRegistry
from .resolver import PathResolver
from .settings import LoaderSettings
from .settings import load_settings
from .sources import DirectorySource
from .sources import FileSource
from .sources import MemorySource
from .sources import TarSource
from .sources import ZipSource

__all__ = [
    "ArchiveError",
    "ContentParseFailure",
    "CustomModuleRegistry",
    "DirectorySource",
    "ExecutionContext",
    "Executor",
    "FileSource",
    "LoaderSettings",
    "MemorySource",
    "Module",
    "ModuleLoader",
    "ModuleRecord",
    "PathResolver",
    "PythonExecutor",
    "RegistrationConflict",
    "RequireFSError",
    "ResolutionFailure",
    "SourceReadError",
    "TarSource",
    "ZipSource",
    "from_directory",
    "from_mapping",
    "from_tar",
    "from_zip",
    "load_settings",
    "open_loader",
]
