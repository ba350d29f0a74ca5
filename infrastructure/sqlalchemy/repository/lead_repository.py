from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.domain.errors import PersistenceFailure
from core.domain.models.lead import Lead
from core.domain.ports.lead_repository import LeadRepository
from infrastructure.sqlalchemy.model.models import LeadModel
from infrastructure.sqlalchemy.repository._utils import to_utc


def _to_domain(model: LeadModel) -> Lead:
    return Lead(
        id=model.id,
        tenant_id=model.tenant_id,
        owner_id=model.owner_id,
        stage=model.stage,
        created_at=to_utc(model.created_at) if model.created_at else None,
    )


class SqlAlchemyLeadRepository(LeadRepository):
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def get(self, lead_id: str) -> Lead | None:
        session = self._session_factory()
        try:
            model = session.get(LeadModel, lead_id)
            return _to_domain(model) if model is not None else None
        except SQLAlchemyError as e:
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()

    def add(self, lead: Lead) -> Lead:
        session = self._session_factory()
        try:
            model = LeadModel(tenant_id=lead.tenant_id, owner_id=lead.owner_id, stage=lead.stage)
            session.add(model)
            session.commit()
            return _to_domain(model)
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()

    def list(self, tenant_id: str) -> list[Lead]:
        session = self._session_factory()
        try:
            models = (
                session.query(LeadModel)
                .filter(LeadModel.tenant_id == tenant_id)
                .order_by(LeadModel.created_at.desc())
                .all()
            )
            return [_to_domain(m) for m in models]
        except SQLAlchemyError as e:
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()
