# app/clients/delivery.py
from dataclasses import dataclass
from typing import Protocol

from app.core.exceptions import DeliveryFailure


@dataclass(frozen=True)
class DeliveryResult:
    """Итог одной отправки: либо доставлено, либо ошибка канала."""
    delivered: bool
    failure: DeliveryFailure | None = None

    @classmethod
    def ok(cls) -> "DeliveryResult":
        return cls(delivered=True)

    @classmethod
    def failed(cls, failure: DeliveryFailure) -> "DeliveryResult":
        return cls(delivered=False, failure=failure)


class DeliveryClient(Protocol):
    channel: str

    async def send(self, destination: str, content: str) -> DeliveryResult:
        ...
