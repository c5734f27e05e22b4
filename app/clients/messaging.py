# app/clients/messaging.py

import logging

from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramAPIError, TelegramForbiddenError

from app.clients.delivery import DeliveryResult
from app.core.config import settings
from app.core.exceptions import DeliveryFailure

logger = logging.getLogger(__name__)

# Сообщения уходят с HTML-разметкой
default_properties = DefaultBotProperties(parse_mode=ParseMode.HTML)

bot = Bot(token=settings.TELEGRAM_BOT_TOKEN, default=default_properties)


class MessagingClient:
    """Отправка сообщений в мессенджер через Telegram Bot API."""
    channel = "messaging"

    def __init__(self, bot: Bot, dev_mode: bool = False):
        self.bot = bot
        self.dev_mode = dev_mode

    async def send(self, destination: str, content: str) -> DeliveryResult:
        if self.dev_mode:
            logger.info(f"[MESSAGING DEV MODE] To: {destination} | {content}")
            return DeliveryResult.ok()

        try:
            await self.bot.send_message(chat_id=destination, text=content)
            return DeliveryResult.ok()
        except TelegramForbiddenError:
            reason = "User has blocked the bot"
            logger.error(f"Messaging recipient {destination}: {reason}.")
            return DeliveryResult.failed(DeliveryFailure(self.channel, reason))
        except TelegramAPIError as e:
            logger.error(f"Failed to send message to {destination}: {e}")
            return DeliveryResult.failed(DeliveryFailure(self.channel, str(e)))
        except Exception as e:
            logger.error(f"Unexpected error sending message to {destination}: {e}", exc_info=True)
            return DeliveryResult.failed(DeliveryFailure(self.channel, str(e)))

    async def close(self):
        await self.bot.session.close()


messaging_client = MessagingClient(bot, dev_mode=settings.MESSAGING_DEV_MODE)
