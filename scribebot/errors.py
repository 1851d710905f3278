"""Exception taxonomy. Everything below the pipeline raises one of these."""
from typing import Optional

from scribebot.constants import LOG_BODY_LIMIT


class ScribebotError(Exception):
    pass


class ConfigError(ScribebotError, ValueError):
    """Required configuration is missing — the process must not start."""


class RetrievalError(ScribebotError):
    """Audio could not be fetched or decrypted."""


class DeliveryError(ScribebotError):
    """The reply could not be sent."""


class TranscriptionError(ScribebotError):

    kind = "transcription"

    def __init__(self, detail: str) -> None:
        super().__init__(f"{self.kind}: {detail}")
        self.detail = detail


class BackendError(TranscriptionError):
    """Non-2xx response from a transcription provider. Keeps the body."""

    kind = "backend"

    def __init__(self, status: Optional[int], body: str) -> None:
        super().__init__(f"HTTP {status}: {body[:LOG_BODY_LIMIT]}")
        self.status = status
        self.body = body


class ResponseShapeError(TranscriptionError):
    kind = "response_shape"


class BackendUnreachableError(TranscriptionError):
    kind = "unreachable"
