from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.domain.errors import PersistenceFailure
from core.domain.models.application import Application
from core.domain.ports.application_repository import ApplicationRepository
from infrastructure.sqlalchemy.model.models import ApplicationModel
from infrastructure.sqlalchemy.repository._utils import to_utc


def _to_domain(model: ApplicationModel) -> Application:
    return Application(
        id=model.id,
        tenant_id=model.tenant_id,
        lead_id=model.lead_id,
        created_at=to_utc(model.created_at) if model.created_at else None,
    )


class SqlAlchemyApplicationRepository(ApplicationRepository):
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def get(self, application_id: str) -> Application | None:
        session = self._session_factory()
        try:
            model = session.get(ApplicationModel, application_id)
            if model is None:
                return None
            return _to_domain(model)
        except SQLAlchemyError as e:
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()

    def add(self, application: Application) -> Application:
        session = self._session_factory()
        try:
            model = ApplicationModel(tenant_id=application.tenant_id, lead_id=application.lead_id)
            session.add(model)
            session.commit()
            return _to_domain(model)
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()

    def list(self, tenant_id: str, lead_id: str | None = None) -> list[Application]:
        session = self._session_factory()
        try:
            query = session.query(ApplicationModel).filter(ApplicationModel.tenant_id == tenant_id)
            if lead_id:
                query = query.filter(ApplicationModel.lead_id == lead_id)
            models = query.order_by(ApplicationModel.created_at.desc()).all()
            return [_to_domain(m) for m in models]
        except SQLAlchemyError as e:
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()
