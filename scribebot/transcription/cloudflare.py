"""CloudflareTranscriptionClient — Workers AI Whisper, audio sent inline as base64 JSON."""
import base64
from typing import Optional

import httpx

from scribebot.config import BackendConfig
from scribebot.constants import CF_DEFAULT_LANGUAGE, CF_VAD_FILTER
from scribebot.errors import BackendError, BackendUnreachableError, ResponseShapeError
from scribebot.events import AudioPayload
from scribebot.transcription.client import TranscriptionClient


class CloudflareTranscriptionClient(TranscriptionClient):

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
        # Workers AI has no prompt field; the argument is accepted and dropped.
        payload = {
            "model": self._config.model_id,
            "audio": base64.standard_b64encode(audio.data).decode(),
            "language": language or CF_DEFAULT_LANGUAGE,
            "vad_filter": CF_VAD_FILTER,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout, transport=self._transport
            ) as client:
                r = await client.post(
                    self._config.endpoint,
                    headers={"Authorization": f"Bearer {self._config.credentials}"},
                    json=payload,
                )
        except httpx.HTTPError as exc:
            raise BackendUnreachableError(type(exc).__name__) from exc

        if r.status_code != 200:
            raise BackendError(r.status_code, r.text)
        return _extract_text(r)


def _extract_text(r: httpx.Response) -> str:
    """Pull result.text out of a Workers AI response body."""
    try:
        data = r.json()
    except ValueError as exc:
        raise ResponseShapeError("response is not JSON") from exc

    match data:
        case {"result": {"text": str() as text}}:
            return text
        case _:
            raise ResponseShapeError("transcription text not found in response")
