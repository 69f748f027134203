"""POSIX path helpers for the virtual module tree.

Virtual paths always use forward slashes regardless of the host platform.
Results follow the conventions of Node's ``path`` module: an empty result is
``"."``, a trailing slash on the input survives normalization, and ``join``
never discards leading segments when a later part starts with ``/``.
"""

import posixpath
import re

_RELATIVE_SPECIFIER = re.compile(r"^\.\.?(/|$)")


def normalize(path: str) -> str:
    """Collapse ``.``/``..`` segments and duplicate separators.

    Args:
        path: Virtual path, absolute or relative

    Returns:
        Normalized path; ``"."`` for an empty path
    """
    if not path:
        return "."

    trailing_slash = path.endswith("/")
    result = posixpath.normpath(path)

    # normpath keeps a leading "//" (implementation-defined on POSIX)
    if result.startswith("//"):
        result = "/" + result.lstrip("/")

    if trailing_slash and result not in ("/", "."):
        result += "/"
    return result


def join(*parts: str) -> str:
    """Join path segments and normalize the result."""
    joined = "/".join(part for part in parts if part)
    return normalize(joined)


def dirname(path: str) -> str:
    """Return the parent directory of ``path``.

    ``dirname("/") == "/"`` and ``dirname(".") == "."``; these fixed points
    terminate upward directory walks.
    """
    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path.startswith("/") else "."
    parent = posixpath.dirname(stripped)
    if not parent:
        return "."
    return parent


def basename(path: str) -> str:
    """Return the final segment of ``path``, ignoring trailing slashes."""
    return posixpath.basename(path.rstrip("/"))


def is_relative_specifier(specifier: str) -> bool:
    """Check whether a specifier is relative (``.``, ``..``, ``./x``, ``../x``)."""
    return bool(_RELATIVE_SPECIFIER.match(specifier))


def to_entry_key(path: str) -> str | None:
    """Convert a virtual path into the key a file source stores it under.

    Leading ``/`` refers to the virtual root, so ``/a.js`` and ``a.js`` map to
    the same key.

    Returns:
        Key relative to the virtual root, or None when the path can never name
        a file (directory-style trailing slash, the root itself, or a path
        escaping the root)
    """
    if not path or path.endswith("/"):
        return None

    key = normalize(path).lstrip("/")
    if key in ("", ".", "..") or key.startswith("../"):
        return None
    return key
