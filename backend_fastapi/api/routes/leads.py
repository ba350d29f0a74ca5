from fastapi import APIRouter, Depends, HTTPException, status

from backend_fastapi.api.deps import create_lead_use_case, current_tenant, list_leads_use_case
from core.application.create_lead import CreateLeadCommand, CreateLeadUseCase
from core.application.list_leads import ListLeadsUseCase
from core.domain.errors import PersistenceFailure
from core.domain.models.lead import Lead

router = APIRouter(prefix="/leads", tags=["leads"])


@router.get("", response_model=list[Lead], summary="Listar leads")
def list_leads(
    tenant_id: str = Depends(current_tenant),
    use_case: ListLeadsUseCase = Depends(list_leads_use_case),
) -> list[Lead]:
    try:
        return use_case.execute(tenant_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=e.details)


@router.post(
    "",
    response_model=Lead,
    status_code=status.HTTP_201_CREATED,
    summary="Crear un lead",
)
def create_lead(
    cmd: CreateLeadCommand,
    tenant_id: str = Depends(current_tenant),
    use_case: CreateLeadUseCase = Depends(create_lead_use_case),
) -> Lead:
    """
    - **owner_id**: responsable opcional.
    - **stage**: etapa opcional del embudo.
    """
    try:
        return use_case.execute(tenant_id, cmd)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=e.details)
