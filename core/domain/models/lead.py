from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Lead:
    tenant_id: str
    owner_id: str | None = None
    stage: str | None = None
    id: str | None = None
    created_at: datetime | None = None
