"""AudioRetriever — turns a transport AudioRef into bytes held in a scoped temp file."""
import logging
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import httpx

from scribebot.constants import (
    AUDIO_TEMP_PREFIX,
    DOWNLOAD_TIMEOUT,
    MESSAGES_DIR,
    MSG_AUDIO_REMOVED,
    MSG_AUDIO_SAVED,
)
from scribebot.errors import RetrievalError
from scribebot.events import AudioPayload, AudioRef

logger = logging.getLogger(__name__)


class AudioRetriever:

    def __init__(
        self,
        messages_dir: Path = Path(MESSAGES_DIR),
        timeout: float = DOWNLOAD_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._dir = messages_dir
        self._timeout = timeout
        self._transport = transport

    @asynccontextmanager
    async def fetch(self, ref: AudioRef) -> AsyncIterator[AudioPayload]:
        """Yield the payload; its temp file is deleted when the block exits."""
        data = await self._download(ref)
        path = self._store(ref, data)
        try:
            yield AudioPayload(
                data=data,
                declared_length=ref.declared_length or len(data),
                path=path,
                filename=ref.filename or path.name,
            )
        finally:
            path.unlink(missing_ok=True)
            logger.debug(MSG_AUDIO_REMOVED, path)

    async def _download(self, ref: AudioRef) -> bytes:
        match (ref.encrypted, ref.url, ref.download):
            case (True, _, None):
                raise RetrievalError("encrypted media needs the transport's download capability")
            case (True, _, download):
                data = await self._via_transport(download)
            case (False, str() as url, _) if url:
                data = await self._via_http(url)
            case (False, _, download) if download is not None:
                data = await self._via_transport(download)
            case _:
                raise RetrievalError("audio reference has neither URL nor download capability")

        match data:
            case b"":
                raise RetrievalError("downloaded audio is empty")
            case _:
                return data

    @staticmethod
    async def _via_transport(download) -> bytes:
        try:
            return bytes(await download())
        except RetrievalError:
            raise
        except Exception as exc:
            raise RetrievalError(f"transport download failed: {exc}") from exc

    async def _via_http(self, url: str) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                r = await client.get(url)
        except httpx.HTTPError as exc:
            raise RetrievalError(f"download failed: {exc}") from exc
        if r.status_code != 200:
            raise RetrievalError(f"download failed with HTTP {r.status_code}")
        return r.content

    def _store(self, ref: AudioRef, data: bytes) -> Path:
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            f = tempfile.NamedTemporaryFile(
                dir=self._dir,
                prefix=AUDIO_TEMP_PREFIX % ref.declared_length,
                suffix=Path(ref.filename).suffix,
                delete=False,
            )
        except OSError as exc:
            raise RetrievalError(f"could not store audio: {exc}") from exc
        path = Path(f.name)
        try:
            with f:
                f.write(data)
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise RetrievalError(f"could not store audio: {exc}") from exc
        logger.debug(MSG_AUDIO_SAVED, path, len(data))
        return path
