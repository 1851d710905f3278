"""Abstract interfaces for transport-agnostic bot clients."""
from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from scribebot.events import InboundEvent

OnEvent = Callable[[InboundEvent], Awaitable[object]]


class BotClient(ABC):
    @abstractmethod
    def run(self, on_event: OnEvent) -> None: ...

    @abstractmethod
    async def send_message(self, to: str, text: str) -> bool: ...

    def escape(self, text: str) -> str:
        """Make text safe to embed in the transport's reply markup."""
        return text
