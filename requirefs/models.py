"""Module state shared between the loader and module bodies."""

from dataclasses import dataclass
from dataclasses import field
from typing import Any


@dataclass
class Module:
    """The ``module`` object a module body sees while it executes.

    Attributes:
        id: Resolved path of the module
        filename: Resolved path of the module file
        dirname: Directory containing the module file
        exports: Single mutable exports slot; bodies either mutate the value
            in place or assign a new one
    """

    id: str
    filename: str
    dirname: str
    exports: Any = field(default_factory=dict)


@dataclass
class ModuleRecord:
    """Require cache entry for one resolved path.

    Exports are read through the module's slot, so a circular require sees
    the slot as it is at that moment, including a wholesale replacement.

    Attributes:
        resolved_path: Canonical path the record is keyed by
        module: Module whose exports slot the record reflects
        loaded: True once the module body ran to completion
    """

    resolved_path: str
    module: Module
    loaded: bool = False

    @property
    def exports(self) -> Any:
        """Current exports; partially populated while ``loaded`` is False."""
        return self.module.exports
