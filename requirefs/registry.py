"""Registry of custom modules provided by the host."""

import logging
from typing import Any

from .exceptions import RegistrationConflict

logger = logging.getLogger(__name__)


class CustomModuleRegistry:
    """Write-once mapping from module name to a host-supplied value."""

    def __init__(self):
        self._modules: dict[str, Any] = {}

    def register(self, name: str, value: Any) -> None:
        """Register ``value`` under ``name``.

        Raises:
            RegistrationConflict: ``name`` is already registered
        """
        if name in self._modules:
            raise RegistrationConflict(name)
        self._modules[name] = value
        logger.debug(f"[requirefs:provide] registered custom module '{name}'")

    def get(self, name: str) -> Any:
        """Return the value registered under ``name``.

        Raises:
            KeyError: Nothing is registered under ``name``
        """
        return self._modules[name]

    def names(self) -> list[str]:
        return sorted(self._modules)

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)
