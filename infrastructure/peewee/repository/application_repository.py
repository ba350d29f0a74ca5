from datetime import timezone

from peewee import Database, PeeweeException

from core.domain.errors import PersistenceFailure
from core.domain.models.application import Application
from core.domain.ports.application_repository import ApplicationRepository
from infrastructure.peewee.model.models import ApplicationModel


def _to_domain(model: ApplicationModel) -> Application:
    return Application(
        id=model.id,
        tenant_id=model.tenant_id,
        lead_id=model.lead_id,
        created_at=model.created_at.replace(tzinfo=timezone.utc),
    )


class PeeweeApplicationRepository(ApplicationRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    def get(self, application_id: str) -> Application | None:
        try:
            model = ApplicationModel.get_or_none(ApplicationModel.id == application_id)
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e
        return _to_domain(model) if model is not None else None

    def add(self, application: Application) -> Application:
        try:
            with self._db.atomic():
                model = ApplicationModel.create(
                    tenant_id=application.tenant_id,
                    lead_id=application.lead_id,
                )
            return _to_domain(model)
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e

    def list(self, tenant_id: str, lead_id: str | None = None) -> list[Application]:
        query = ApplicationModel.select().where(ApplicationModel.tenant_id == tenant_id)
        if lead_id:
            query = query.where(ApplicationModel.lead_id == lead_id)
        try:
            return [_to_domain(m) for m in query.order_by(ApplicationModel.created_at.desc())]
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e
