"""Errors raised by requirefs.

Errors raised by a module body while it executes are never wrapped; they reach
the caller of ``require`` unchanged.
"""


class RequireFSError(Exception):
    """Base class for all requirefs errors."""

    pass


class ResolutionFailure(RequireFSError):
    """Raised when a specifier cannot be mapped to any file in the source."""

    def __init__(self, specifier: str, context: str, candidates: list[str] | None = None):
        self.specifier = specifier
        self.context = context
        self.candidates = list(candidates or [])
        super().__init__(f"Unable to resolve {specifier} from {context}")


class RegistrationConflict(RequireFSError):
    """Raised when a custom module name is provided twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Custom module '{name}' has already been registered")


class ContentParseFailure(RequireFSError):
    """Raised when a module's content cannot be decoded or parsed."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to parse {path}: {cause}")


class SourceReadError(RequireFSError):
    """Raised when a file source is asked for a path it does not hold."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f'"{path}" does not exist')


class ArchiveError(RequireFSError):
    """Raised when archive content cannot be opened as a file source."""

    pass
