"""
Broadcaster sobre LISTEN/NOTIFY de PostgreSQL.

Cada suscripción abre su propia conexión psycopg2 en autocommit y hace LISTEN
sobre el canal. Los eventos se publican con `pg_notify` y un payload JSON con
la misma forma que un mensaje `broadcast` del backend realtime:

    {"type": "broadcast", "event": "task.created", "payload": {...}}
"""

import json
import logging
from typing import Any

import psycopg2
from psycopg2 import sql

from core.domain.errors import NotificationFailure
from core.domain.ports.broadcaster import BroadcastChannel, Broadcaster

logger = logging.getLogger(__name__)

_CONNECT_TIMEOUT_SECS = 3
# Límite de PostgreSQL para el payload de NOTIFY (bytes).
_MAX_PAYLOAD_BYTES = 8000


class PostgresChannel(BroadcastChannel):
    def __init__(self, name: str, connection: Any) -> None:
        self.name = name
        self._connection = connection

    def send(self, event: str, payload: dict[str, Any]) -> None:
        message = json.dumps({"type": "broadcast", "event": event, "payload": payload})
        if len(message.encode("utf-8")) > _MAX_PAYLOAD_BYTES:
            raise NotificationFailure(f"Payload de '{event}' demasiado grande para NOTIFY")
        try:
            with self._connection.cursor() as cur:
                cur.execute("SELECT pg_notify(%s, %s)", (self.name, message))
        except psycopg2.Error as e:
            raise NotificationFailure(str(e)) from e

    def close(self) -> None:
        if self._connection.closed:
            return
        try:
            with self._connection.cursor() as cur:
                cur.execute(sql.SQL("UNLISTEN {}").format(sql.Identifier(self.name)))
        finally:
            self._connection.close()


class PostgresBroadcaster(Broadcaster):
    def __init__(self, dsn: str) -> None:
        self._dsn = dsn

    def subscribe(self, channel_name: str) -> PostgresChannel:
        try:
            connection = psycopg2.connect(dsn=self._dsn, connect_timeout=_CONNECT_TIMEOUT_SECS)
        except psycopg2.Error as e:
            raise NotificationFailure(f"No se pudo conectar al canal '{channel_name}': {e}") from e
        try:
            connection.autocommit = True
            with connection.cursor() as cur:
                cur.execute(sql.SQL("LISTEN {}").format(sql.Identifier(channel_name)))
        except psycopg2.Error as e:
            # Sin canal no hay quien libere la conexión: se cierra aquí.
            connection.close()
            raise NotificationFailure(f"No se pudo suscribir al canal '{channel_name}': {e}") from e
        return PostgresChannel(channel_name, connection)

    def remove_channel(self, channel: BroadcastChannel) -> None:
        if not isinstance(channel, PostgresChannel):
            raise TypeError(f"Canal no gestionado por PostgresBroadcaster: {channel!r}")
        try:
            channel.close()
        except psycopg2.Error as e:
            raise NotificationFailure(f"Error liberando el canal '{channel.name}': {e}") from e
