"""TranscriptionClient — abstract base for speech-to-text backends."""
from abc import ABC, abstractmethod
from typing import Optional

from scribebot.events import AudioPayload


class TranscriptionClient(ABC):
    @abstractmethod
    async def transcribe(
        self, audio: AudioPayload, language: str, prompt: Optional[str] = None
    ) -> str:
        """Convert audio to text. Raises TranscriptionError on failure."""
        ...
