from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
import logging
from typing import Any

logger = logging.getLogger(__name__)


class BroadcastChannel(ABC):
    """Canal con nombre ya suscrito, listo para enviar eventos."""

    name: str

    @abstractmethod
    def send(self, event: str, payload: dict[str, Any]) -> None:
        """
        Envía un evento `broadcast` al canal.

        Raises:
            NotificationFailure: si el transporte rechaza el envío.
        """
        raise NotImplementedError


class Broadcaster(ABC):
    """Cliente pub/sub del backend realtime."""

    @abstractmethod
    def subscribe(self, channel_name: str) -> BroadcastChannel:
        raise NotImplementedError

    @abstractmethod
    def remove_channel(self, channel: BroadcastChannel) -> None:
        raise NotImplementedError


@contextmanager
def open_channel(broadcaster: Broadcaster, channel_name: str) -> Iterator[BroadcastChannel]:
    """
    Suscribe un canal durante un único bloque y lo libera siempre al salir,
    tanto si el envío termina bien como si lanza una excepción.

        with open_channel(broadcaster, "tasks") as channel:
            channel.send("task.created", {...})
    """
    channel = broadcaster.subscribe(channel_name)
    logger.debug(f"Canal '{channel_name}' suscrito")
    try:
        yield channel
    finally:
        broadcaster.remove_channel(channel)
        logger.debug(f"Canal '{channel_name}' liberado")
