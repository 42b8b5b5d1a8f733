import asyncio

from app.bootstrap.bootstrapper import bootstrap_bot
from app.dependencies.components import get_components
from app.services.TelegramService.telegram_service_interface import (
    TelegramServiceInterface,
)


async def main():
    components = get_components()
    bot: TelegramServiceInterface = await bootstrap_bot(components)
    try:
        await bot.start()
    finally:
        await bot.stop()
        await components.close()


if __name__ == "__main__":
    asyncio.run(main())
