from datetime import timezone

from peewee import Database, PeeweeException

from core.domain.errors import PersistenceFailure
from core.domain.models.lead import Lead
from core.domain.ports.lead_repository import LeadRepository
from infrastructure.peewee.model.models import LeadModel


def _to_domain(model: LeadModel) -> Lead:
    return Lead(
        id=model.id,
        tenant_id=model.tenant_id,
        owner_id=model.owner_id,
        stage=model.stage,
        created_at=model.created_at.replace(tzinfo=timezone.utc),
    )


class PeeweeLeadRepository(LeadRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    def get(self, lead_id: str) -> Lead | None:
        try:
            model = LeadModel.get_or_none(LeadModel.id == lead_id)
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e
        return _to_domain(model) if model is not None else None

    def add(self, lead: Lead) -> Lead:
        try:
            with self._db.atomic():
                model = LeadModel.create(
                    tenant_id=lead.tenant_id,
                    owner_id=lead.owner_id,
                    stage=lead.stage,
                )
            return _to_domain(model)
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e

    def list(self, tenant_id: str) -> list[Lead]:
        query = (
            LeadModel.select()
            .where(LeadModel.tenant_id == tenant_id)
            .order_by(LeadModel.created_at.desc())
        )
        try:
            return [_to_domain(m) for m in query]
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e
