"""
Function catalog
Named registry of local functions offered to the chat model, built once at startup
"""

import logging
from typing import Dict, Any, Iterable, List, Optional

from ..exceptions import DuplicateNameError, FunctionNotFoundError
from ..models import FunctionSpec
from .base import FunctionHandler

logger = logging.getLogger(__name__)


class FunctionCatalog:
    """
    Registry mapping function names to handlers

    Registration happens during startup; afterwards the catalog is only read,
    so concurrent orchestrations can share one instance.
    """

    def __init__(self, handlers: Optional[Iterable[FunctionHandler]] = None):
        self._handlers: Dict[str, FunctionHandler] = {}
        self._specs: Dict[str, FunctionSpec] = {}
        for handler in handlers or []:
            self.register(handler)

    def register(self, handler: FunctionHandler) -> FunctionSpec:
        """
        Register a function handler

        The handler's spec is built once here and served as-is afterwards.

        Args:
            handler: Handler to add

        Returns:
            The handler's FunctionSpec

        Raises:
            ValueError: If the handler declares no name
            DuplicateNameError: If a function with the same name is registered
        """
        spec = handler.spec
        if not spec.name:
            raise ValueError(f"Function handler {type(handler).__name__} must declare a name")
        if spec.name in self._handlers:
            raise DuplicateNameError(f"Function '{spec.name}' is already registered")

        self._handlers[spec.name] = handler
        self._specs[spec.name] = spec
        logger.info(f"Registered function '{spec.name}'")
        return spec

    def list(self) -> List[FunctionSpec]:
        """All registered function specs in registration order"""
        return [spec for spec in self._specs.values()]

    def lookup(self, name: str) -> FunctionSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise FunctionNotFoundError(f"Function '{name}' is not registered") from None

    def handler(self, name: str) -> FunctionHandler:
        """
        Get the handler registered under a name

        Raises:
            FunctionNotFoundError: If no function has that name
        """
        try:
            return self._handlers[name]
        except KeyError:
            raise FunctionNotFoundError(f"Function '{name}' is not registered") from None

    def to_wire(self) -> List[Dict[str, Any]]:
        """Function declarations for a completion request body"""
        return [spec.to_wire() for spec in self.list()]

    def __contains__(self, name: str) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
