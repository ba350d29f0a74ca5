from fastapi import APIRouter, Depends, HTTPException, Query

from backend_fastapi.api.deps import (
    complete_task_use_case,
    current_tenant,
    list_tasks_use_case,
    list_today_tasks_use_case,
)
from core.application.complete_task import CompleteTaskUseCase
from core.application.list_tasks import ListTasksCommand, ListTasksUseCase
from core.application.list_today_tasks import ListTodayTasksUseCase
from core.domain.errors import PersistenceFailure, TaskNotFound
from core.domain.models.task import Task, TaskStatus, TaskType

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get(
    "",
    response_model=list[Task],
    summary="Listar las tareas del tenant",
)
def list_tasks(
    status: TaskStatus | None = Query(None, description="Filtrar por estado"),
    task_type: TaskType | None = Query(None, alias="type", description="Filtrar por tipo"),
    tenant_id: str = Depends(current_tenant),
    use_case: ListTasksUseCase = Depends(list_tasks_use_case),
) -> list[Task]:
    """
    Tareas ordenadas por vencimiento ascendente.
    """
    try:
        return use_case.execute(ListTasksCommand(tenant_id=tenant_id, status=status, task_type=task_type))
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=e.details)


@router.get(
    "/today",
    response_model=list[Task],
    summary="Tareas pendientes que vencen hoy",
)
def list_today_tasks(
    tenant_id: str = Depends(current_tenant),
    use_case: ListTodayTasksUseCase = Depends(list_today_tasks_use_case),
) -> list[Task]:
    try:
        return use_case.execute(tenant_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=e.details)


@router.post(
    "/{task_id}/complete",
    response_model=Task,
    summary="Marcar una tarea como completada",
)
def complete_task(
    task_id: str,
    tenant_id: str = Depends(current_tenant),
    use_case: CompleteTaskUseCase = Depends(complete_task_use_case),
) -> Task:
    """
    Pasa la tarea a `completed`. Si ya lo estaba, se devuelve sin cambios.

    - **task_id**: id de la tarea.
    """
    try:
        return use_case.execute(task_id, tenant_id)
    except TaskNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=e.details)
