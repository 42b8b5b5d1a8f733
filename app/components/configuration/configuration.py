import os
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml

from app.components.configuration.configuration_interface import (
    ConfigurationError,
    ConfigurationInterface,
)

T = TypeVar("T")

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


class Configuration(ConfigurationInterface):
    """
    Layered configuration: ``<config_path>/<env>.yaml`` overridden by
    environment variables of the same name.
    """

    def __init__(self, env: str, config_path: str) -> None:
        self.env = env
        self.config_path = config_path
        self._values: dict[str, Any] = self._load_file()

    def _load_file(self) -> dict[str, Any]:
        file_path = Path(self.config_path) / f"{self.env}.yaml"
        if not file_path.is_file():
            return {}

        with file_path.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {file_path} must contain a mapping"
            )
        return data

    def get_configuration(
        self, key: str, value_type: type[T], default: Any = ...
    ) -> T:
        raw: Any = os.getenv(key)
        if raw is None:
            raw = self._values.get(key)

        if raw is None or raw == "":
            if default is ...:
                raise ConfigurationError(f"Missing configuration value: {key}")
            return cast(T, default)

        try:
            return self._cast(raw, value_type)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Configuration value {key}={raw!r} is not a valid {value_type.__name__}"
            ) from exc

    @staticmethod
    def _cast(raw: Any, value_type: type[T]) -> T:
        if value_type is bool and not isinstance(raw, bool):
            normalized = str(raw).strip().lower()
            if normalized in _TRUE_VALUES:
                return cast(T, True)
            if normalized in _FALSE_VALUES:
                return cast(T, False)
            raise ValueError(f"Invalid boolean: {raw}")

        if isinstance(raw, value_type):
            return raw

        return value_type(raw)  # type: ignore[call-arg]
