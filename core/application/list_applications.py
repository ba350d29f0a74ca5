from dataclasses import dataclass

from core.domain.models.application import Application
from core.domain.ports.application_repository import ApplicationRepository


@dataclass(slots=True)
class ListApplicationsCommand:
    tenant_id: str
    lead_id: str | None = None


class ListApplicationsUseCase:
    def __init__(self, repository: ApplicationRepository) -> None:
        self._repository = repository

    def execute(self, cmd: ListApplicationsCommand) -> list[Application]:
        return self._repository.list(cmd.tenant_id, lead_id=cmd.lead_id)
