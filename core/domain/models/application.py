from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Application:
    tenant_id: str
    lead_id: str
    id: str | None = None
    created_at: datetime | None = None
