from dataclasses import dataclass

from core.domain.models.lead import Lead
from core.domain.ports.lead_repository import LeadRepository


@dataclass(slots=True)
class CreateLeadCommand:
    owner_id: str | None = None
    stage: str | None = None


class CreateLeadUseCase:
    def __init__(self, repository: LeadRepository) -> None:
        self._repository = repository

    def execute(self, tenant_id: str, cmd: CreateLeadCommand) -> Lead:
        lead = Lead(
            tenant_id=tenant_id,
            owner_id=cmd.owner_id or None,
            stage=cmd.stage or None,
        )
        return self._repository.add(lead)
