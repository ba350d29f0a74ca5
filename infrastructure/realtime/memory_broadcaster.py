"""
Broadcaster en proceso para SQLite / desarrollo local y tests.

Los mensajes enviados se entregan a los listeners registrados con `listen()` y
se guardan en `sent` para poder inspeccionarlos.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from core.domain.errors import NotificationFailure
from core.domain.ports.broadcaster import BroadcastChannel, Broadcaster

logger = logging.getLogger(__name__)

Listener = Callable[[str, dict[str, Any]], None]


@dataclass(slots=True, frozen=True)
class BroadcastMessage:
    channel: str
    event: str
    payload: dict[str, Any]


class MemoryChannel(BroadcastChannel):
    def __init__(self, name: str, broadcaster: "MemoryBroadcaster") -> None:
        self.name = name
        self._broadcaster = broadcaster
        self.closed = False

    def send(self, event: str, payload: dict[str, Any]) -> None:
        if self.closed:
            raise NotificationFailure(f"El canal '{self.name}' ya fue liberado")
        self._broadcaster._publish(BroadcastMessage(self.name, event, dict(payload)))


class MemoryBroadcaster(Broadcaster):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: dict[str, list[Listener]] = {}
        self._open: list[MemoryChannel] = []
        self.sent: list[BroadcastMessage] = []

    @property
    def open_channels(self) -> int:
        with self._lock:
            return len(self._open)

    def listen(self, channel_name: str, listener: Listener) -> None:
        with self._lock:
            self._listeners.setdefault(channel_name, []).append(listener)

    def subscribe(self, channel_name: str) -> MemoryChannel:
        channel = MemoryChannel(channel_name, self)
        with self._lock:
            self._open.append(channel)
        return channel

    def remove_channel(self, channel: BroadcastChannel) -> None:
        with self._lock:
            if channel in self._open:
                self._open.remove(channel)
        if isinstance(channel, MemoryChannel):
            channel.closed = True

    def _publish(self, message: BroadcastMessage) -> None:
        with self._lock:
            self.sent.append(message)
            listeners = list(self._listeners.get(message.channel, []))
        for listener in listeners:
            try:
                listener(message.event, message.payload)
            except Exception as e:
                logger.warning(f"Listener del canal '{message.channel}' falló: {e}")
