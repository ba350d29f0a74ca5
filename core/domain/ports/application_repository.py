from abc import ABC, abstractmethod

from core.domain.models.application import Application


class ApplicationRepository(ABC):
    @abstractmethod
    def get(self, application_id: str) -> Application | None:
        raise NotImplementedError

    @abstractmethod
    def add(self, application: Application) -> Application:
        raise NotImplementedError

    @abstractmethod
    def list(self, tenant_id: str, lead_id: str | None = None) -> list[Application]:
        """Solicitudes del tenant, las más recientes primero."""
        raise NotImplementedError
