from datetime import datetime, timezone
from uuid import uuid4

from peewee import CharField, DateTimeField, Model

from infrastructure.peewee.session.db import database_proxy


def _new_id() -> str:
    return str(uuid4())


def naive_utc(value: datetime | None = None) -> datetime:
    # Peewee guarda timestamps sin zona: siempre en UTC.
    value = value or datetime.now(timezone.utc)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class BaseModel(Model):
    class Meta:
        database = database_proxy


class LeadModel(BaseModel):
    id = CharField(primary_key=True, default=_new_id)
    tenant_id = CharField(index=True)
    owner_id = CharField(null=True)
    stage = CharField(null=True)
    created_at = DateTimeField(default=naive_utc)

    class Meta:
        table_name = "leads"


class ApplicationModel(BaseModel):
    id = CharField(primary_key=True, default=_new_id)
    tenant_id = CharField(index=True)
    lead_id = CharField(index=True)
    created_at = DateTimeField(default=naive_utc)

    class Meta:
        table_name = "applications"


class TaskModel(BaseModel):
    id = CharField(primary_key=True, default=_new_id)
    application_id = CharField(index=True)
    tenant_id = CharField(index=True)
    type = CharField()
    due_at = DateTimeField(index=True)
    status = CharField(default="pending")
    created_at = DateTimeField(default=naive_utc)

    class Meta:
        table_name = "tasks"


ALL_MODELS = [LeadModel, ApplicationModel, TaskModel]
