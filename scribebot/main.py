"""Entry point — wires Config → backend → DispatchPipeline → TelegramClient."""
import logging

from rich.logging import RichHandler

from scribebot.audio import AudioRetriever
from scribebot.config import Config
from scribebot.constants import BACKEND_CLOUDFLARE, MSG_BOT_STARTING
from scribebot.exclusion import ExclusionFilter
from scribebot.pipeline import DispatchPipeline
from scribebot.telegram.client import TelegramClient
from scribebot.transcription.client import TranscriptionClient
from scribebot.transcription.cloudflare import CloudflareTranscriptionClient
from scribebot.transcription.groq import GroqTranscriptionClient


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))
    # httpx logs every request URL, which carries the Cloudflare account id.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_transcriber(config: Config) -> TranscriptionClient:
    backend = config.backend_config()
    match backend.name:
        case name if name == BACKEND_CLOUDFLARE:
            return CloudflareTranscriptionClient(backend)
        case _:
            return GroqTranscriptionClient(backend)


def main() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(MSG_BOT_STARTING, config.backend, config.language)

    client = TelegramClient(config)
    pipeline = DispatchPipeline(
        exclusion=ExclusionFilter.load(),
        retriever=AudioRetriever(),
        transcriber=build_transcriber(config),
        sink=client,
        language=config.language,
    )
    client.run(pipeline.dispatch)


if __name__ == "__main__":
    main()
