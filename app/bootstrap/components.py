import os
from pathlib import Path
from typing import Any, TypeVar, cast

import httpx
from dotenv import load_dotenv

from app.bootstrap.tracing import configure_tracing
from app.components.configuration.configuration import Configuration
from app.components.configuration.configuration_interface import ConfigurationInterface
from app.components.logger.logger import Logger
from app.components.logger.logger_interface import LoggerInterface
from app.components.telegram.telegram_bot_client import (
    TELEGRAM_API_BASE_URL,
    TelegramBotClient,
)

load_dotenv()

T = TypeVar("T")

SUPPORTED_ENVIRONMENTS = {"development", "staging", "production"}


class Components:
    """
    Infrastructure shared by every service of one running bot.

    Built once by the bootstrapper and handed to the factories in
    ``app.dependencies``; there is no global instance.
    """

    def __init__(self, env: str, config_path: str) -> None:
        if env not in SUPPORTED_ENVIRONMENTS:
            raise ValueError(f"Invalid environment: {env}")

        self.__env: str = env
        root_dir: str = str(Path(__file__).resolve().parents[2])
        self.__config_path: str = os.path.join(root_dir, config_path)
        self.__components: dict[type[Any], Any] = self.__bootstrap_components()

    def __bootstrap_components(self) -> dict[type[Any], Any]:
        configuration: ConfigurationInterface = Configuration(
            self.__env, self.__config_path
        )

        logger: LoggerInterface = Logger(
            log_format=configuration.get_configuration("LOG_FORMAT", str, default="text"),
            log_level=configuration.get_configuration("LOG_LEVEL", str, default="INFO"),
        )
        components_logger = logger.get_logger("Components")

        configure_tracing(
            enabled=configuration.get_configuration(
                "TRACING_ENABLED", bool, default=False
            ),
            logger=components_logger,
        )

        # Telegram Bot API client; the token also signs file download URLs
        telegram_client = TelegramBotClient(
            token=configuration.get_configuration("TELEGRAM_BOT_TOKEN", str),
            logger=logger.get_logger("TelegramBotClient"),
            api_base_url=configuration.get_configuration(
                "TELEGRAM_API_BASE_URL", str, default=TELEGRAM_API_BASE_URL
            ),
            request_timeout=configuration.get_configuration(
                "TELEGRAM_REQUEST_TIMEOUT", float, default=10.0
            ),
        )

        # Separate client for attachment downloads
        download_client = httpx.AsyncClient(
            timeout=configuration.get_configuration(
                "DOWNLOAD_TIMEOUT", float, default=30.0
            ),
            follow_redirects=True,
        )

        components_logger.info("Components bootstrapped for env '%s'", self.__env)

        return {
            ConfigurationInterface: configuration,
            LoggerInterface: logger,
            TelegramBotClient: telegram_client,
            httpx.AsyncClient: download_client,
        }

    def get_component(self, component_name: type[T]) -> T:
        if component_name not in self.__components:
            raise ValueError(f"Component {component_name} not found")

        return cast(T, self.__components[component_name])

    def get_config_path(self) -> str:
        return self.__config_path

    async def close(self) -> None:
        await self.get_component(TelegramBotClient).close()
        await self.get_component(httpx.AsyncClient).aclose()
