"""Error message formatting for CLI display.

Some exceptions have an empty ``str()`` (``KeyboardInterrupt``, a bare
``RecursionError`` raised by a deep module graph); those get a fallback message
so the CLI never prints "Error: " with nothing after it.
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

from ..exceptions import ResolutionFailure

FRIENDLY_MESSAGES: dict[type, str] = {
    RecursionError: "Module graph is nested too deeply.",
    KeyboardInterrupt: "Operation interrupted by user.",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a non-empty display message.

    Examples:
        >>> format_error_message(ValueError("invalid input"))
        'ValueError: invalid input'

        >>> format_error_message(ValueError("invalid input"), include_type=False)
        'invalid input'
    """
    error_str = str(e)
    error_type = type(e).__name__

    if error_str:
        if include_type and error_type not in error_str:
            return f"{error_type}: {error_str}"
        return error_str

    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return f"{error_type}: {friendly_msg}"

    return f"{error_type}: (no additional details)"


def format_resolution_hint(e: ResolutionFailure, limit: int = 8) -> list[str]:
    """List the first candidate paths a failed resolution probed."""
    lines = [f"  tried {candidate}" for candidate in e.candidates[:limit]]
    if len(e.candidates) > limit:
        lines.append(f"  ... and {len(e.candidates) - limit} more")
    return lines


def escape_markup(value: object) -> str:
    """Escape a value for interpolation into Rich markup strings."""
    return _escape_markup(str(value))
