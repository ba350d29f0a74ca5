from core.domain.models.lead import Lead
from core.domain.ports.lead_repository import LeadRepository


class ListLeadsUseCase:
    def __init__(self, repository: LeadRepository) -> None:
        self._repository = repository

    def execute(self, tenant_id: str) -> list[Lead]:
        return self._repository.list(tenant_id)
