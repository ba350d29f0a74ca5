from fastapi import Depends, Header, HTTPException, status
from jose import ExpiredSignatureError, JWTError, jwt

from core.application.complete_task import CompleteTaskUseCase
from core.application.create_application import CreateApplicationUseCase
from core.application.create_lead import CreateLeadUseCase
from core.application.create_task import CreateTaskUseCase
from core.application.list_applications import ListApplicationsUseCase
from core.application.list_leads import ListLeadsUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.list_today_tasks import ListTodayTasksUseCase
from core.domain.errors import ConfigurationError
from infrastructure.config import Settings, get_settings
from infrastructure.container import (
    get_complete_task_use_case,
    get_create_application_use_case,
    get_create_lead_use_case,
    get_create_task_use_case,
    get_list_applications_use_case,
    get_list_leads_use_case,
    get_list_tasks_use_case,
    get_list_today_tasks_use_case,
)



def settings() -> Settings:
    return get_settings()


def _extract_token(authorization: str | None) -> str | None:
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


def current_tenant(
    authorization: str | None = Header(None),
    cfg: Settings = Depends(settings),
) -> str:
    """
    Resuelve el tenant de la sesión a partir del JWT del header Authorization.

    El tenant es `user_metadata.tenant_id` y, si no existe, el `sub` del usuario.
    """
    if not cfg.jwt_secret:
        raise ConfigurationError(["JWT_SECRET"])

    token = _extract_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        # Los tokens de sesión llevan aud=authenticated; no se valida aquí.
        payload = jwt.decode(
            token,
            cfg.jwt_secret,
            algorithms=[cfg.jwt_algorithm],
            options={"verify_aud": False},
        )
    except ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has expired")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    metadata = payload.get("user_metadata") or {}
    tenant_id = metadata.get("tenant_id") or payload.get("sub")
    if not tenant_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token: missing user")
    return str(tenant_id)


def create_task_use_case(cfg: Settings = Depends(settings)) -> CreateTaskUseCase:
    return get_create_task_use_case(cfg)


def list_tasks_use_case(cfg: Settings = Depends(settings)) -> ListTasksUseCase:
    return get_list_tasks_use_case(cfg)


def list_today_tasks_use_case(cfg: Settings = Depends(settings)) -> ListTodayTasksUseCase:
    return get_list_today_tasks_use_case(cfg)


def complete_task_use_case(cfg: Settings = Depends(settings)) -> CompleteTaskUseCase:
    return get_complete_task_use_case(cfg)


def create_lead_use_case(cfg: Settings = Depends(settings)) -> CreateLeadUseCase:
    return get_create_lead_use_case(cfg)


def list_leads_use_case(cfg: Settings = Depends(settings)) -> ListLeadsUseCase:
    return get_list_leads_use_case(cfg)


def create_application_use_case(cfg: Settings = Depends(settings)) -> CreateApplicationUseCase:
    return get_create_application_use_case(cfg)


def list_applications_use_case(cfg: Settings = Depends(settings)) -> ListApplicationsUseCase:
    return get_list_applications_use_case(cfg)
