from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend_fastapi.api.deps import (
    create_application_use_case,
    current_tenant,
    list_applications_use_case,
)
from core.application.create_application import (
    CreateApplicationCommand,
    CreateApplicationUseCase,
)
from core.application.list_applications import ListApplicationsCommand, ListApplicationsUseCase
from core.domain.errors import LeadNotFound, PersistenceFailure
from core.domain.models.application import Application

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("", response_model=list[Application], summary="Listar solicitudes")
def list_applications(
    lead_id: str | None = Query(None, description="Filtrar por lead"),
    tenant_id: str = Depends(current_tenant),
    use_case: ListApplicationsUseCase = Depends(list_applications_use_case),
) -> list[Application]:
    try:
        return use_case.execute(ListApplicationsCommand(tenant_id=tenant_id, lead_id=lead_id))
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=e.details)


@router.post(
    "",
    response_model=Application,
    status_code=status.HTTP_201_CREATED,
    summary="Crear una solicitud para un lead",
)
def create_application(
    cmd: CreateApplicationCommand,
    tenant_id: str = Depends(current_tenant),
    use_case: CreateApplicationUseCase = Depends(create_application_use_case),
) -> Application:
    """
    - **lead_id**: lead del tenant al que pertenece la solicitud.
    """
    try:
        return use_case.execute(tenant_id, cmd)
    except LeadNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=e.details)
