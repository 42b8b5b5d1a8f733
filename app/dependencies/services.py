import httpx

from app.bootstrap.components import Components
from app.components.configuration.configuration_interface import ConfigurationInterface
from app.components.logger.logger_interface import LoggerInterface
from app.components.telegram.telegram_bot_client import TelegramBotClient
from app.services.ChatService.chat_service import ChatService
from app.services.ChatService.chat_service_interface import ChatServiceInterface
from app.services.ContentExtractorService.content_extractor_service import (
    ContentExtractorService,
)
from app.services.ContentExtractorService.content_extractor_service_interface import (
    ContentExtractorServiceInterface,
)
from app.services.FileService.file_service import FileService
from app.services.FileService.file_service_interface import FileServiceInterface
from app.services.TelegramService.telegram_service import TelegramService
from app.services.TelegramService.telegram_service_interface import (
    TelegramServiceInterface,
)


def get_file_service(components: Components) -> FileServiceInterface:
    configuration = components.get_component(ConfigurationInterface)

    return FileService(
        http_client=components.get_component(httpx.AsyncClient),
        logger=components.get_component(LoggerInterface).get_logger("FileService"),
        tmp_dir_prefix=configuration.get_configuration(
            "TMP_DIR_PREFIX", str, default="bridge-"
        ),
        download_timeout=configuration.get_configuration(
            "DOWNLOAD_TIMEOUT", float, default=30.0
        ),
        download_max_attempts=configuration.get_configuration(
            "DOWNLOAD_MAX_ATTEMPTS", int, default=3
        ),
    )


def get_chat_service(components: Components) -> ChatServiceInterface:
    """
    Create the Gemini-backed chat service.

    VERTEX_PROJECT_ID is read from the environment only; an empty value lets the
    SDK fall back to application default credentials.
    """
    configuration = components.get_component(ConfigurationInterface)

    project_id = configuration.get_configuration("VERTEX_PROJECT_ID", str, default="")

    return ChatService(
        model_name=configuration.get_configuration(
            "MODEL_NAME", str, default="gemini-2.5-flash"
        ),
        location=configuration.get_configuration(
            "VERTEX_LOCATION", str, default="us-central1"
        ),
        project_id=project_id.strip() or None,
        temperature=configuration.get_configuration(
            "LLM_TEMPERATURE", float, default=0.7
        ),
        max_tokens=configuration.get_configuration("LLM_MAX_TOKENS", int, default=8192),
        logger=components.get_component(LoggerInterface).get_logger("ChatService"),
        system_prompt=configuration.get_configuration(
            "SYSTEM_PROMPT", str, default=None
        ),
    )


def get_content_extractor_service(
    components: Components,
) -> ContentExtractorServiceInterface:
    return ContentExtractorService(
        attachment_resolver=components.get_component(TelegramBotClient),
        file_service=get_file_service(components),
        logger=components.get_component(LoggerInterface).get_logger(
            "ContentExtractorService"
        ),
    )


async def get_telegram_service(
    components: Components, chat_service: ChatServiceInterface
) -> TelegramServiceInterface:
    configuration = components.get_component(ConfigurationInterface)

    return TelegramService(
        telegram_client=components.get_component(TelegramBotClient),
        content_extractor=get_content_extractor_service(components),
        chat_service=chat_service,
        logger=components.get_component(LoggerInterface).get_logger("TelegramService"),
        poll_timeout=configuration.get_configuration(
            "TELEGRAM_POLL_TIMEOUT", int, default=30
        ),
    )
