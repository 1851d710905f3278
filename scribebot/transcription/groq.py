"""GroqTranscriptionClient — Groq Whisper through the OpenAI-compatible multipart endpoint."""
import io
from typing import Any, Optional

import httpx
import openai
from openai import AsyncOpenAI

from scribebot.config import BackendConfig
from scribebot.constants import GROQ_RESPONSE_FORMAT, GROQ_TEMPERATURE
from scribebot.errors import BackendError, BackendUnreachableError, ResponseShapeError
from scribebot.events import AudioPayload
from scribebot.transcription.client import TranscriptionClient


class GroqTranscriptionClient(TranscriptionClient):

    def __init__(
        self,
        config: BackendConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport

    async def transcribe(
        self, audio: AudioPayload, language: str, prompt: Optional[str] = None
    ) -> str:
        client = AsyncOpenAI(
            api_key=self._config.credentials,
            base_url=self._config.endpoint,
            timeout=self._config.timeout,
            max_retries=0,
            http_client=(
                httpx.AsyncClient(transport=self._transport, timeout=self._config.timeout)
                if self._transport is not None
                else None
            ),
        )
        audio_file = io.BytesIO(audio.data)
        audio_file.name = audio.filename
        options: dict[str, Any] = {
            "response_format": GROQ_RESPONSE_FORMAT,
            "temperature": GROQ_TEMPERATURE,
        }
        if prompt:
            options["prompt"] = prompt
        if language:
            options["language"] = language

        try:
            response = await client.audio.transcriptions.create(
                model=self._config.model_id,
                file=audio_file,
                **options,
            )
        except openai.APIStatusError as exc:
            raise BackendError(exc.status_code, exc.response.text) from exc
        except openai.APIConnectionError as exc:
            raise BackendUnreachableError(type(exc).__name__) from exc
        except (openai.APIResponseValidationError, ValueError) as exc:
            raise ResponseShapeError("unexpected response body") from exc
        except openai.APIError as exc:
            raise BackendError(None, exc.message) from exc

        match getattr(response, "text", None):
            case str() as text:
                return text
            case _:
                raise ResponseShapeError("transcription text not found in response")
