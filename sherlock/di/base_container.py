# Standard library imports
import logging
from typing import Any, Callable, Dict, Hashable

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Minimal service locator.

    Keys are usually classes (domain interfaces, use cases, services) but
    plain strings are used for raw resources such as collections.
    - Singletons are stored instances returned as-is
    - Factories build a fresh instance on every get()
    """

    def __init__(self) -> None:
        self._singletons: Dict[Hashable, Any] = {}
        self._factories: Dict[Hashable, Callable[[], Any]] = {}

    def register_singleton(self, key: Hashable, instance: Any) -> None:
        self._factories.pop(key, None)
        self._singletons[key] = instance

    def register_factory(self, key: Hashable, factory: Callable[[], Any]) -> None:
        self._singletons.pop(key, None)
        self._factories[key] = factory

    def has(self, key: Hashable) -> bool:
        return key in self._singletons or key in self._factories

    def get(self, key: Hashable) -> Any:
        """
        Resolve a registration.

        Raises:
            ValueError: if nothing is registered under key
        """
        if key in self._singletons:
            return self._singletons[key]
        factory = self._factories.get(key)
        if factory is None:
            name = getattr(key, "__name__", str(key))
            raise ValueError(f"No registration for {name}")
        return factory()
