from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T")


class ConfigurationError(Exception):
    """Raised when a required configuration key is missing or malformed."""


class ConfigurationInterface(ABC):
    @abstractmethod
    def get_configuration(
        self, key: str, value_type: type[T], default: Any = ...
    ) -> T:
        """Return ``key`` cast to ``value_type``, or ``default`` when unset."""
        raise NotImplementedError
