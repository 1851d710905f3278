from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional

# Transport-supplied fetch that handles decryption itself.
Download = Callable[[], Awaitable[bytes]]


@dataclass(frozen=True)
class AudioRef:
    """Where an audio payload lives, as exposed by the transport."""
    filename: str
    declared_length: int = 0
    url: Optional[str] = None
    encrypted: bool = False
    download: Optional[Download] = None


@dataclass(frozen=True)
class InboundEvent:
    sender_id: str
    conversation_id: str
    is_group: bool
    has_audio: bool
    audio_ref: Optional[AudioRef] = None


@dataclass(frozen=True)
class AudioPayload:
    data: bytes
    declared_length: int
    path: Path
    filename: str
