"""
Construcción explícita de colaboradores.

Los engines / conexiones son por proceso (cacheados por DSN); repositorios,
broadcaster y casos de uso se construyen por request y reciben todo inyectado.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from core.application.complete_task import CompleteTaskUseCase
from core.application.create_application import CreateApplicationUseCase
from core.application.create_lead import CreateLeadUseCase
from core.application.create_task import CreateTaskUseCase
from core.application.list_applications import ListApplicationsUseCase
from core.application.list_leads import ListLeadsUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.list_today_tasks import ListTodayTasksUseCase
from core.domain.ports.application_repository import ApplicationRepository
from core.domain.ports.broadcaster import Broadcaster
from core.domain.ports.lead_repository import LeadRepository
from core.domain.ports.task_repository import TaskRepository
from infrastructure.config import Settings, get_settings
from infrastructure.realtime.memory_broadcaster import MemoryBroadcaster
from infrastructure.realtime.postgres_broadcaster import PostgresBroadcaster

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Repositories:
    tasks: TaskRepository
    applications: ApplicationRepository
    leads: LeadRepository


def _sqlalchemy_repositories(settings: Settings) -> Repositories:
    from infrastructure.sqlalchemy.repository.application_repository import (
        SqlAlchemyApplicationRepository,
    )
    from infrastructure.sqlalchemy.repository.lead_repository import SqlAlchemyLeadRepository
    from infrastructure.sqlalchemy.repository.task_repository import SqlAlchemyTaskRepository
    from infrastructure.sqlalchemy.session.db import build_session_factory, get_engine

    session_factory = build_session_factory(get_engine(settings.database_dsn()))
    return Repositories(
        tasks=SqlAlchemyTaskRepository(session_factory),
        applications=SqlAlchemyApplicationRepository(session_factory),
        leads=SqlAlchemyLeadRepository(session_factory),
    )


def _peewee_repositories(settings: Settings) -> Repositories:
    from infrastructure.peewee.repository.application_repository import (
        PeeweeApplicationRepository,
    )
    from infrastructure.peewee.repository.lead_repository import PeeweeLeadRepository
    from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository
    from infrastructure.peewee.session.db import get_database

    db = get_database(settings.libpq_dsn())
    return Repositories(
        tasks=PeeweeTaskRepository(db),
        applications=PeeweeApplicationRepository(db),
        leads=PeeweeLeadRepository(db),
    )


def get_repositories(settings: Settings) -> Repositories:
    settings.require_backend()

    if settings.orm == "peewee":
        return _peewee_repositories(settings)
    if settings.orm != "sqlalchemy":
        logger.warning(f"ORM desconocido '{settings.orm}', se usa SQLAlchemy")
    # Default to SQLAlchemy
    return _sqlalchemy_repositories(settings)


@lru_cache(maxsize=1)
def _memory_broadcaster() -> MemoryBroadcaster:
    return MemoryBroadcaster()


def get_broadcaster(settings: Settings) -> Broadcaster:
    backend = settings.effective_realtime_backend
    if backend == "postgres":
        return PostgresBroadcaster(settings.libpq_dsn())
    if backend != "memory":
        logger.warning(f"REALTIME_BACKEND desconocido '{backend}', se usa el broadcaster en memoria")
    return _memory_broadcaster()


def get_create_task_use_case(settings: Settings | None = None) -> CreateTaskUseCase:
    settings = settings or get_settings()
    repos = get_repositories(settings)
    return CreateTaskUseCase(
        task_repository=repos.tasks,
        application_repository=repos.applications,
        broadcaster=get_broadcaster(settings),
        channel_name=settings.tasks_channel,
    )


def get_list_tasks_use_case(settings: Settings | None = None) -> ListTasksUseCase:
    return ListTasksUseCase(repository=get_repositories(settings or get_settings()).tasks)


def get_list_today_tasks_use_case(settings: Settings | None = None) -> ListTodayTasksUseCase:
    return ListTodayTasksUseCase(repository=get_repositories(settings or get_settings()).tasks)


def get_complete_task_use_case(settings: Settings | None = None) -> CompleteTaskUseCase:
    return CompleteTaskUseCase(repository=get_repositories(settings or get_settings()).tasks)


def get_create_lead_use_case(settings: Settings | None = None) -> CreateLeadUseCase:
    return CreateLeadUseCase(repository=get_repositories(settings or get_settings()).leads)


def get_list_leads_use_case(settings: Settings | None = None) -> ListLeadsUseCase:
    return ListLeadsUseCase(repository=get_repositories(settings or get_settings()).leads)


def get_create_application_use_case(settings: Settings | None = None) -> CreateApplicationUseCase:
    repos = get_repositories(settings or get_settings())
    return CreateApplicationUseCase(repository=repos.applications, lead_repository=repos.leads)


def get_list_applications_use_case(settings: Settings | None = None) -> ListApplicationsUseCase:
    return ListApplicationsUseCase(
        repository=get_repositories(settings or get_settings()).applications
    )
