"""Backend selection at start-up"""
from scribebot.config import Config
from scribebot.main import build_transcriber
from scribebot.transcription.cloudflare import CloudflareTranscriptionClient
from scribebot.transcription.groq import GroqTranscriptionClient


def test_groq_backend_selected():
    config = Config(
        telegram_bot_token="t", log_level="INFO", backend="groq", language="pt",
        groq_api_key="gsk",
    )

    assert isinstance(build_transcriber(config), GroqTranscriptionClient)


def test_cloudflare_backend_selected():
    config = Config(
        telegram_bot_token="t", log_level="INFO", backend="cloudflare", language="pt",
        cf_account_id="acc", cf_api_key="cf",
    )

    assert isinstance(build_transcriber(config), CloudflareTranscriptionClient)
