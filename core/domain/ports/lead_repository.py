from abc import ABC, abstractmethod

from core.domain.models.lead import Lead


class LeadRepository(ABC):
    @abstractmethod
    def get(self, lead_id: str) -> Lead | None:
        raise NotImplementedError

    @abstractmethod
    def add(self, lead: Lead) -> Lead:
        raise NotImplementedError

    @abstractmethod
    def list(self, tenant_id: str) -> list[Lead]:
        """Leads del tenant, los más recientes primero."""
        raise NotImplementedError
