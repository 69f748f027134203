"""Execution capability for module bodies.

The loader never runs module text itself. It hands the text to an executor
together with an ``ExecutionContext`` and takes back the exports value. Hosts
can plug in any callable matching ``Executor``; ``PythonExecutor`` runs the
text with the interpreter's own ``exec`` and applies no sandboxing.
"""

from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from .models import Module


@dataclass
class ExecutionContext:
    """Everything a module body is given besides its source text.

    Attributes:
        filename: Resolved path of the module
        dirname: Directory the module's own ``require`` resolves from
        require: Nested require bound to ``dirname``
        module: Module object whose ``exports`` slot is pre-seeded
    """

    filename: str
    dirname: str
    require: Callable[[str], Any]
    module: Module


@runtime_checkable
class Executor(Protocol):
    """Protocol for running module source text."""

    def __call__(self, source: str, context: ExecutionContext) -> Any:
        """Run ``source`` to completion.

        Returns:
            Final exports value, or None to let the loader read
            ``context.module.exports``

        Raises:
            Exception: Anything the module body raises, unchanged
        """
        ...


class PythonExecutor:
    """Execute module bodies as Python source.

    Each body runs in a fresh namespace holding ``require``, ``module``,
    ``exports``, ``__dirname`` and ``__filename`` plus any extra globals given
    at construction. A body may mutate ``exports``, assign
    ``module.exports``, or rebind the ``exports`` name; assigning
    ``module.exports`` takes precedence over rebinding ``exports``.
    """

    def __init__(self, extra_globals: Mapping[str, Any] | None = None):
        self.extra_globals = dict(extra_globals or {})

    def __call__(self, source: str, context: ExecutionContext) -> Any:
        seeded = context.module.exports
        namespace: dict[str, Any] = {
            **self.extra_globals,
            "__name__": context.filename,
            "__file__": context.filename,
            "__filename": context.filename,
            "__dirname": context.dirname,
            "require": context.require,
            "module": context.module,
            "exports": seeded,
        }

        code = compile(source, context.filename, "exec")
        exec(code, namespace)

        if context.module.exports is not seeded:
            return context.module.exports
        return namespace.get("exports", seeded)

    def __repr__(self) -> str:
        return f"PythonExecutor(extra_globals={sorted(self.extra_globals)})"
