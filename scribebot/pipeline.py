"""DispatchPipeline — filter → retrieve → transcribe → reply, one inbound event at a time.

Every stage failure is caught here and turned into a DispatchOutcome, so an
error in one event never escapes into the transport's task that runs another.
Failures are only logged; the sender gets no reply in that case.
"""
import logging
import time
from enum import Enum
from typing import Optional

from scribebot.audio import AudioRetriever
from scribebot.bot_client import BotClient
from scribebot.constants import (
    MSG_AUDIO_DETECTED,
    MSG_DELIVERY_FAILED,
    MSG_IGNORED_EXCLUDED,
    MSG_IGNORED_GROUP,
    MSG_IGNORED_NON_AUDIO,
    MSG_RETRIEVAL_FAILED,
    MSG_SEND_OK,
    MSG_TRANSCRIPTION_FAILED,
    MSG_TRANSCRIPTION_OK,
    REPLY_TEMPLATE,
    WHISPER_PROMPT,
)
from scribebot.errors import (
    DeliveryError,
    RetrievalError,
    ResponseShapeError,
    TranscriptionError,
)
from scribebot.events import InboundEvent
from scribebot.exclusion import ExclusionFilter
from scribebot.transcription.client import TranscriptionClient

logger = logging.getLogger(__name__)


class DispatchOutcome(str, Enum):
    IGNORED_GROUP = "ignored:group"
    IGNORED_EXCLUDED = "ignored:excluded_sender"
    IGNORED_NON_AUDIO = "ignored:non_audio"
    FAILED_RETRIEVAL = "failed:retrieval"
    FAILED_TRANSCRIPTION = "failed:transcription"
    FAILED_DELIVERY = "failed:delivery"
    COMPLETED = "completed"


def format_reply(transcript: str) -> str:
    return REPLY_TEMPLATE.format(text=transcript)


class DispatchPipeline:

    def __init__(
        self,
        exclusion: ExclusionFilter,
        retriever: AudioRetriever,
        transcriber: TranscriptionClient,
        sink: BotClient,
        language: str,
        prompt: Optional[str] = WHISPER_PROMPT,
    ) -> None:
        self._exclusion = exclusion
        self._retriever = retriever
        self._transcriber = transcriber
        self._sink = sink
        self._language = language
        self._prompt = prompt

    async def dispatch(self, event: InboundEvent) -> DispatchOutcome:
        match event:
            case InboundEvent(is_group=True):
                logger.debug(MSG_IGNORED_GROUP, event.conversation_id)
                return DispatchOutcome.IGNORED_GROUP
            case _ if self._exclusion.is_excluded(event.sender_id):
                logger.info(MSG_IGNORED_EXCLUDED, event.sender_id)
                return DispatchOutcome.IGNORED_EXCLUDED
            case InboundEvent(has_audio=False) | InboundEvent(audio_ref=None):
                logger.debug(MSG_IGNORED_NON_AUDIO, event.sender_id)
                return DispatchOutcome.IGNORED_NON_AUDIO
            case _:
                pass

        logger.info(MSG_AUDIO_DETECTED, event.sender_id)
        start = time.time()
        try:
            async with self._retriever.fetch(event.audio_ref) as audio:
                try:
                    transcript = await self._transcriber.transcribe(
                        audio, self._language, self._prompt
                    )
                except TranscriptionError as exc:
                    logger.error(MSG_TRANSCRIPTION_FAILED, event.sender_id, exc)
                    return DispatchOutcome.FAILED_TRANSCRIPTION
        except RetrievalError as exc:
            logger.error(MSG_RETRIEVAL_FAILED, event.sender_id, exc)
            return DispatchOutcome.FAILED_RETRIEVAL

        match transcript.strip():
            case "":
                exc = ResponseShapeError("transcript is empty")
                logger.error(MSG_TRANSCRIPTION_FAILED, event.sender_id, exc)
                return DispatchOutcome.FAILED_TRANSCRIPTION
            case text:
                logger.info(MSG_TRANSCRIPTION_OK, event.sender_id, time.time() - start)

        reply = format_reply(self._sink.escape(text))
        try:
            await self._send(event.conversation_id, reply)
        except DeliveryError as exc:
            logger.error(MSG_DELIVERY_FAILED, event.conversation_id, len(reply), exc)
            return DispatchOutcome.FAILED_DELIVERY

        logger.info(MSG_SEND_OK, event.conversation_id)
        return DispatchOutcome.COMPLETED

    async def _send(self, conversation_id: str, reply: str) -> None:
        try:
            sent = await self._sink.send_message(conversation_id, reply)
        except Exception as exc:
            raise DeliveryError(str(exc)) from exc
        if not sent:
            raise DeliveryError("transport refused the message")
