from app.bootstrap.components import Components
from app.dependencies.services import get_chat_service, get_telegram_service
from app.services.ChatService.chat_service_interface import ChatServiceInterface
from app.services.TelegramService.telegram_service_interface import (
    TelegramServiceInterface,
)


async def bootstrap_bot(components: Components) -> TelegramServiceInterface:
    chat_service: ChatServiceInterface = get_chat_service(components)

    bot: TelegramServiceInterface = await get_telegram_service(components, chat_service)
    return bot
