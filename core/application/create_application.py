from dataclasses import dataclass

from core.domain.errors import LeadNotFound
from core.domain.models.application import Application
from core.domain.ports.application_repository import ApplicationRepository
from core.domain.ports.lead_repository import LeadRepository


@dataclass(slots=True)
class CreateApplicationCommand:
    lead_id: str


class CreateApplicationUseCase:
    def __init__(
        self,
        repository: ApplicationRepository,
        lead_repository: LeadRepository,
    ) -> None:
        self._repository = repository
        self._leads = lead_repository

    def execute(self, tenant_id: str, cmd: CreateApplicationCommand) -> Application:
        lead = self._leads.get(cmd.lead_id)
        if lead is None or lead.tenant_id != tenant_id:
            raise LeadNotFound(cmd.lead_id)

        return self._repository.add(Application(tenant_id=tenant_id, lead_id=cmd.lead_id))
