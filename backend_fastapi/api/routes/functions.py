import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse

from backend_fastapi.api.deps import create_task_use_case
from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.domain.errors import PersistenceFailure, TaskValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def json_response(content: dict, status_code: int) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


@router.options("/create-task", include_in_schema=False)
def create_task_preflight() -> PlainTextResponse:
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post("/create-task", summary="Crear una tarea de seguimiento")
async def create_task(
    request: Request,
    use_case: CreateTaskUseCase = Depends(create_task_use_case),
) -> JSONResponse:
    """
    Valida y crea una tarea para una solicitud existente y emite `task.created`.

    - **application_id**: id de la solicitud (el tenant se toma de ella).
    - **task_type**: `call`, `email` o `review`.
    - **due_at**: timestamp ISO-8601 estrictamente futuro.
    """
    try:
        payload = await request.json()
        cmd = CreateTaskCommand.from_payload(payload)
        result = await run_in_threadpool(use_case.execute, cmd)
    except TaskValidationError as e:
        logger.info(f"Petición de tarea rechazada ({e.kind}): {e}")
        return json_response({"error": str(e)}, 400)
    except PersistenceFailure as e:
        return json_response({"error": "Failed to create task", "details": e.details}, 500)
    except Exception as e:
        logger.exception(f"Error inesperado creando tarea: {e}")
        return json_response({"error": "Internal server error", "details": str(e)}, 500)

    return json_response({"success": True, "task_id": result.task_id}, 200)
