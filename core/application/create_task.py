"""
Alta de tareas: validación, resolución de tenant, persistencia y aviso realtime.

Flujo lineal por request:
    validar forma → validar reglas → resolver tenant → insertar → notificar → responder

Cada validación corta el flujo en cuanto falla, antes de escribir nada.
La notificación es best-effort: la tarea ya está persistida cuando se intenta.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from core.domain.errors import (
    ApplicationNotFound,
    DueAtNotFuture,
    InvalidDueAtFormat,
    InvalidTaskType,
    MissingApplicationId,
    MissingDueAt,
    PersistenceFailure,
)
from core.domain.models.task import Task, TaskCreatedEvent, TaskStatus, TaskType
from core.domain.ports.application_repository import ApplicationRepository
from core.domain.ports.broadcaster import Broadcaster, open_channel
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)

TASKS_CHANNEL = "tasks"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class CreateTaskCommand:
    application_id: Any = None
    task_type: Any = None
    due_at: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> "CreateTaskCommand":
        # Sólo se aceptan estos tres campos; status o tenant_id del cliente se ignoran.
        if not isinstance(payload, dict):
            payload = {}
        return cls(
            application_id=payload.get("application_id"),
            task_type=payload.get("task_type"),
            due_at=payload.get("due_at"),
        )


@dataclass(slots=True, frozen=True)
class CreateTaskResult:
    task_id: str


def truncate_to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def normalize_application_id(value: Any) -> str | None:
    # Ids numéricos se aceptan como texto; vacíos, cero, booleanos u objetos cuentan como ausentes.
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return str(value) if value else None


def parse_due_at(value: str) -> datetime:
    """
    Interpreta un timestamp ISO-8601 y lo devuelve en UTC. Sin zona horaria se asume UTC.

    Raises:
        InvalidDueAtFormat: si el texto no es un timestamp válido.
    """
    if not isinstance(value, str):
        raise InvalidDueAtFormat()
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidDueAtFormat() from e
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class CreateTaskUseCase:
    def __init__(
        self,
        task_repository: TaskRepository,
        application_repository: ApplicationRepository,
        broadcaster: Broadcaster,
        channel_name: str = TASKS_CHANNEL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._tasks = task_repository
        self._applications = application_repository
        self._broadcaster = broadcaster
        self._channel_name = channel_name
        self._clock = clock

    def execute(self, cmd: CreateTaskCommand) -> CreateTaskResult:
        task_type, application_id, due_at = self._validate(cmd)

        application = self._applications.get(application_id)
        if application is None:
            raise ApplicationNotFound()

        task = Task(
            application_id=application_id,
            tenant_id=application.tenant_id,
            type=task_type,
            due_at=due_at,
            status=TaskStatus.PENDING,
        )
        try:
            task_id = self._tasks.add(task)
        except PersistenceFailure as e:
            logger.error(f"Error insertando tarea para la solicitud {application_id}: {e.details}")
            raise

        logger.info(
            f"Tarea {task_id} ({task_type.value}) creada para la solicitud "
            f"{application_id} del tenant {application.tenant_id}"
        )

        self._notify(
            TaskCreatedEvent(
                task_id=task_id,
                application_id=application_id,
                task_type=task_type,
                due_at=cmd.due_at,
            )
        )
        return CreateTaskResult(task_id=task_id)

    def _validate(self, cmd: CreateTaskCommand) -> tuple[TaskType, str, datetime]:
        valid_types = {t.value for t in TaskType}
        if not isinstance(cmd.task_type, str) or cmd.task_type not in valid_types:
            raise InvalidTaskType()

        application_id = normalize_application_id(cmd.application_id)
        if not application_id:
            raise MissingApplicationId()

        if cmd.due_at is None or cmd.due_at == "":
            raise MissingDueAt()

        due_at = parse_due_at(cmd.due_at)

        # Límite exclusivo y a resolución de milisegundo: el mismo milisegundo que "ahora" se rechaza.
        if truncate_to_millis(due_at) <= truncate_to_millis(self._clock()):
            raise DueAtNotFuture()

        return TaskType(cmd.task_type), application_id, due_at

    def _notify(self, event: TaskCreatedEvent) -> None:
        try:
            with open_channel(self._broadcaster, self._channel_name) as channel:
                channel.send(event.name, event.payload())
        except Exception as e:
            # La tarea ya es durable: el aviso se pierde y sólo queda en el log.
            logger.error(f"Error emitiendo '{event.name}' para la tarea {event.task_id}: {e}")
