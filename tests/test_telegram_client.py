"""TelegramClient: Update → InboundEvent conversion, handler and reply sink"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram.constants import ChatType, ParseMode

from scribebot.config import Config
from scribebot.pipeline import format_reply
from scribebot.telegram.client import TelegramClient


def make_config(*, token: str = "test-token") -> Config:
    return Config(
        telegram_bot_token=token,
        log_level="INFO",
        backend="groq",
        language="pt",
        groq_api_key="gsk-test",
    )


def make_voice(*, size: int = 4, data: bytes = b"OggS") -> MagicMock:
    voice = MagicMock(spec=["get_file", "file_size"])
    voice.file_size = size
    tg_file = MagicMock()
    tg_file.download_as_bytearray = AsyncMock(return_value=bytearray(data))
    voice.get_file = AsyncMock(return_value=tg_file)
    return voice


def make_update(
    *,
    chat_id: int = 123456789,
    user_id: int = 42,
    chat_type: str = ChatType.PRIVATE,
    voice=None,
    audio=None,
) -> MagicMock:
    """Build a minimal mock of a python-telegram-bot Update."""
    update = MagicMock()
    update.effective_chat.id = chat_id
    update.effective_chat.type = chat_type
    update.effective_user.id = user_id
    update.effective_message.voice = voice
    update.effective_message.audio = audio
    return update


# ── Update → InboundEvent conversion ─────────────────────────────────────────


def test_voice_update_converts_to_audio_event():
    event = TelegramClient._update_to_event(make_update(voice=make_voice(size=1234)))

    assert event is not None
    assert event.sender_id == "42"
    assert event.conversation_id == "123456789"
    assert event.is_group is False
    assert event.has_audio is True
    assert event.audio_ref.filename == "voice.ogg"
    assert event.audio_ref.declared_length == 1234
    assert event.audio_ref.url is None
    assert event.audio_ref.encrypted is False


def test_audio_file_keeps_its_filename():
    audio = make_voice()
    audio.file_name = "memo.m4a"

    event = TelegramClient._update_to_event(make_update(audio=audio))

    assert event.has_audio is True
    assert event.audio_ref.filename == "memo.m4a"


def test_text_update_has_no_audio():
    event = TelegramClient._update_to_event(make_update())

    assert event.has_audio is False
    assert event.audio_ref is None


@pytest.mark.parametrize("chat_type", [ChatType.GROUP, ChatType.SUPERGROUP, ChatType.CHANNEL])
def test_non_private_chats_are_groups(chat_type):
    event = TelegramClient._update_to_event(make_update(chat_type=chat_type, voice=make_voice()))

    assert event.is_group is True


def test_update_without_message_returns_none():
    update = make_update()
    update.effective_message = None

    assert TelegramClient._update_to_event(update) is None


def test_sender_falls_back_to_chat_id_without_user():
    update = make_update(chat_id=555)
    update.effective_user = None

    assert TelegramClient._update_to_event(update).sender_id == "555"


@pytest.mark.asyncio
async def test_audio_ref_downloads_through_bot_api():
    voice = make_voice(data=b"OggS-bytes")

    event = TelegramClient._update_to_event(make_update(voice=voice))
    data = await event.audio_ref.download()

    assert data == b"OggS-bytes"
    voice.get_file.assert_awaited_once()


# ── handler ───────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_handler_passes_event_to_callback():
    client = TelegramClient(make_config())
    on_event = AsyncMock()

    await client._make_handler(on_event)(make_update(voice=make_voice()), MagicMock())

    on_event.assert_awaited_once()
    assert on_event.call_args.args[0].has_audio is True


@pytest.mark.asyncio
async def test_handler_skips_updates_without_message():
    client = TelegramClient(make_config())
    on_event = AsyncMock()
    update = make_update()
    update.effective_message = None

    await client._make_handler(on_event)(update, MagicMock())

    on_event.assert_not_called()


# ── reply sink ────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_send_message_before_run_fails():
    client = TelegramClient(make_config())

    assert await client.send_message("123", "hi") is False


@pytest.mark.asyncio
async def test_send_message_uses_markdown():
    client = TelegramClient(make_config())
    client._app = MagicMock()
    client._app.bot.send_message = AsyncMock()

    assert await client.send_message("123", "*hi*") is True
    client._app.bot.send_message.assert_awaited_once_with(
        chat_id=123, text="*hi*", parse_mode=ParseMode.MARKDOWN_V2
    )


@pytest.mark.asyncio
async def test_send_message_failure_returns_false():
    client = TelegramClient(make_config())
    client._app = MagicMock()
    client._app.bot.send_message = AsyncMock(side_effect=RuntimeError("network"))

    assert await client.send_message("123", "hi") is False


def test_escape_protects_markdown_entities():
    client = TelegramClient(make_config())

    assert client.escape("snake_case *bold*") == "snake\\_case \\*bold\\*"


def test_escaped_transcript_fits_inside_italic_reply():
    """MarkdownV2 accepts escapes inside the _..._ entity; legacy Markdown does not."""
    client = TelegramClient(make_config())

    reply = format_reply(client.escape("f***. ok!"))

    assert reply == "*Transcrição automática:*\n\n_f\\*\\*\\*\\. ok\\!_"


@pytest.mark.asyncio
async def test_reply_over_telegram_limit_is_refused_with_length(caplog):
    client = TelegramClient(make_config())
    client._app = MagicMock()
    client._app.bot.send_message = AsyncMock()

    assert await client.send_message("123", "x" * 4097) is False
    client._app.bot.send_message.assert_not_awaited()
    assert "4097 chars" in caplog.text
