"""TelegramClient — event-driven transport via python-telegram-bot."""
import logging
from typing import Optional

from telegram import Update
from telegram.constants import ChatType, MessageLimit, ParseMode
from telegram.ext import Application, ContextTypes
from telegram.ext import MessageHandler as TGMessageHandler
from telegram.ext import filters
from telegram.helpers import escape_markdown

from scribebot.bot_client import BotClient, OnEvent
from scribebot.config import Config
from scribebot.constants import MSG_REPLY_TOO_LONG, MSG_SEND_ERROR, VOICE_FILENAME
from scribebot.events import AudioRef, InboundEvent

logger = logging.getLogger(__name__)


class TelegramClient(BotClient):

    def __init__(self, config: Config) -> None:
        self._token = config.telegram_bot_token
        self._app: Optional[Application] = None

    # ── BotClient interface ───────────────────────────────────────────────────

    def run(self, on_event: OnEvent) -> None:
        # Updates are processed concurrently and the handler does not block
        # the polling loop, so each event gets its own task.
        self._app = (
            Application.builder().token(self._token).concurrent_updates(True).build()
        )
        self._app.add_handler(
            TGMessageHandler(
                filters.UpdateType.MESSAGE & ~filters.COMMAND,
                self._make_handler(on_event),
                block=False,
            )
        )
        self._app.run_polling(allowed_updates=[Update.MESSAGE])

    async def send_message(self, to: str, text: str) -> bool:
        match self._app:
            case None:
                logger.error("send_message called before run()")
                return False
            case _ if len(text) > MessageLimit.MAX_TEXT_LENGTH:
                logger.warning(MSG_REPLY_TOO_LONG, to, len(text), MessageLimit.MAX_TEXT_LENGTH)
                return False
            case app:
                try:
                    await app.bot.send_message(
                        chat_id=int(to), text=text, parse_mode=ParseMode.MARKDOWN_V2
                    )
                    return True
                except Exception as exc:
                    logger.error(MSG_SEND_ERROR, exc)
                    return False

    def escape(self, text: str) -> str:
        return escape_markdown(text, version=2)

    # ── helpers (also used in tests) ─────────────────────────────────────────

    @staticmethod
    def _update_to_event(update: Update) -> Optional[InboundEvent]:
        msg, chat = update.effective_message, update.effective_chat
        if msg is None or chat is None:
            return None
        user = update.effective_user
        sender = str(user.id) if user is not None else str(chat.id)
        audio_ref = _audio_ref(msg.voice or msg.audio)
        return InboundEvent(
            sender_id=sender,
            conversation_id=str(chat.id),
            is_group=chat.type != ChatType.PRIVATE,
            has_audio=audio_ref is not None,
            audio_ref=audio_ref,
        )

    # ── internal handler factory ──────────────────────────────────────────────

    def _make_handler(self, on_event: OnEvent):
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._update_to_event(update):
                case None:
                    return
                case event:
                    await on_event(event)

        return _handler


def _audio_ref(media) -> Optional[AudioRef]:
    """Describe a Voice/Audio attachment; downloads go through the Bot API."""
    match media:
        case None:
            return None
        case m:
            async def _download() -> bytes:
                tg_file = await m.get_file()
                return bytes(await tg_file.download_as_bytearray())

            return AudioRef(
                filename=getattr(m, "file_name", None) or VOICE_FILENAME,
                declared_length=m.file_size or 0,
                download=_download,
            )
