from datetime import datetime, timedelta, timezone

import pytest

from core.application.create_task import CreateTaskUseCase
from core.domain.models.application import Application

from fakes import InMemoryApplicationRepository, InMemoryTaskRepository, RecordingBroadcaster

NOW = datetime(2026, 10, 19, 12, 0, 0, 500000, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def task_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def application_repo() -> InMemoryApplicationRepository:
    repo = InMemoryApplicationRepository()
    repo.add(Application(id="app-123", tenant_id="t1", lead_id="lead-1"))
    return repo


@pytest.fixture
def broadcaster() -> RecordingBroadcaster:
    return RecordingBroadcaster()


@pytest.fixture
def create_task(task_repo, application_repo, broadcaster, now) -> CreateTaskUseCase:
    return CreateTaskUseCase(
        task_repository=task_repo,
        application_repository=application_repo,
        broadcaster=broadcaster,
        clock=lambda: now,
    )


@pytest.fixture
def in_one_hour(now) -> str:
    return (now + timedelta(hours=1)).isoformat()
