"""
Tests HTTP de leads, solicitudes y tareas del dashboard (tenant desde el JWT).
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from backend_fastapi.api import deps
from backend_fastapi.main import app
from core.application.complete_task import CompleteTaskUseCase
from core.application.create_application import CreateApplicationUseCase
from core.application.create_lead import CreateLeadUseCase
from core.application.list_applications import ListApplicationsUseCase
from core.application.list_leads import ListLeadsUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.list_today_tasks import ListTodayTasksUseCase
from core.domain.models.task import Task, TaskStatus, TaskType

from fakes import InMemoryApplicationRepository, InMemoryLeadRepository, InMemoryTaskRepository

SECRET = "test-jwt-secret"


def _token(sub: str = "user-1", tenant_id: str | None = None, **extra) -> str:
    claims = {"sub": sub, "aud": "authenticated", **extra}
    if tenant_id:
        claims["user_metadata"] = {"tenant_id": tenant_id}
    return jwt.encode(claims, SECRET, algorithm="HS256")


def _auth(**kwargs) -> dict:
    return {"Authorization": f"Bearer {_token(**kwargs)}"}


@pytest.fixture
def repos():
    return {
        "tasks": InMemoryTaskRepository(),
        "applications": InMemoryApplicationRepository(),
        "leads": InMemoryLeadRepository(),
    }


@pytest.fixture
def client(repos, monkeypatch):
    monkeypatch.setenv("JWT_SECRET", SECRET)
    today_noon = datetime.now(timezone.utc).replace(hour=12, minute=0, second=0, microsecond=0)
    overrides = {
        deps.list_tasks_use_case: lambda: ListTasksUseCase(repos["tasks"]),
        deps.list_today_tasks_use_case: lambda: ListTodayTasksUseCase(
            repos["tasks"], clock=lambda: today_noon
        ),
        deps.complete_task_use_case: lambda: CompleteTaskUseCase(repos["tasks"]),
        deps.create_lead_use_case: lambda: CreateLeadUseCase(repos["leads"]),
        deps.list_leads_use_case: lambda: ListLeadsUseCase(repos["leads"]),
        deps.create_application_use_case: lambda: CreateApplicationUseCase(
            repos["applications"], repos["leads"]
        ),
        deps.list_applications_use_case: lambda: ListApplicationsUseCase(repos["applications"]),
    }
    app.dependency_overrides.update(overrides)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestAutenticacion:
    def test_sin_token_401(self, client):
        assert client.get("/leads").status_code == 401

    def test_token_con_otra_firma_401(self, client):
        bad = jwt.encode({"sub": "user-1"}, "otro-secreto", algorithm="HS256")
        response = client.get("/leads", headers={"Authorization": f"Bearer {bad}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_token_caducado_401(self, client):
        expired = int((datetime.now(timezone.utc) - timedelta(minutes=5)).timestamp())
        response = client.get("/leads", headers=_auth(exp=expired))

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_sin_jwt_secret_es_error_de_configuracion(self, client, monkeypatch):
        monkeypatch.delenv("JWT_SECRET")

        response = client.get("/leads", headers=_auth())

        assert response.status_code == 500
        assert response.json()["error"] == "Missing backend configuration"

    def test_tenant_por_defecto_es_el_usuario(self, client, repos):
        client.post("/leads", json={}, headers=_auth(sub="user-9"))

        assert [l.tenant_id for l in repos["leads"].data.values()] == ["user-9"]


class TestLeadsYSolicitudes:
    def test_crear_y_listar_leads(self, client):
        created = client.post("/leads", json={"stage": "contacted"}, headers=_auth(tenant_id="t1"))
        client.post("/leads", json={}, headers=_auth(tenant_id="t2"))

        assert created.status_code == 201
        assert created.json()["tenant_id"] == "t1"

        listed = client.get("/leads", headers=_auth(tenant_id="t1")).json()
        assert [l["stage"] for l in listed] == ["contacted"]

    def test_crear_solicitud_y_filtrar_por_lead(self, client):
        lead_id = client.post("/leads", json={}, headers=_auth(tenant_id="t1")).json()["id"]

        created = client.post("/applications", json={"lead_id": lead_id}, headers=_auth(tenant_id="t1"))
        filtered = client.get(
            "/applications", params={"lead_id": lead_id}, headers=_auth(tenant_id="t1")
        )

        assert created.status_code == 201
        assert [a["id"] for a in filtered.json()] == [created.json()["id"]]

    def test_solicitud_con_lead_de_otro_tenant_404(self, client):
        lead_id = client.post("/leads", json={}, headers=_auth(tenant_id="t2")).json()["id"]

        response = client.post("/applications", json={"lead_id": lead_id}, headers=_auth(tenant_id="t1"))

        assert response.status_code == 404


class TestTareas:
    @pytest.fixture
    def seeded(self, repos):
        tasks = repos["tasks"]
        noon = datetime.now(timezone.utc).replace(hour=12, minute=0, second=0, microsecond=0)

        def add(tenant_id, due_at, task_type=TaskType.CALL, status=TaskStatus.PENDING):
            return tasks.add(
                Task(application_id="app-1", tenant_id=tenant_id, type=task_type, due_at=due_at, status=status)
            )

        return {
            "today_call": add("t1", noon + timedelta(hours=2)),
            "today_done": add("t1", noon, status=TaskStatus.COMPLETED),
            "tomorrow_email": add("t1", noon + timedelta(days=1), TaskType.EMAIL),
            "other_tenant": add("t2", noon),
        }

    def test_listar_con_filtros(self, client, seeded):
        headers = _auth(tenant_id="t1")

        everything = client.get("/tasks", headers=headers).json()
        emails = client.get("/tasks", params={"type": "email"}, headers=headers).json()
        completed = client.get("/tasks", params={"status": "completed"}, headers=headers).json()

        assert [t["id"] for t in everything] == [
            seeded["today_done"],
            seeded["today_call"],
            seeded["tomorrow_email"],
        ]
        assert [t["id"] for t in emails] == [seeded["tomorrow_email"]]
        assert completed[0]["status"] == "completed"

    def test_filtro_desconocido_422(self, client, seeded):
        response = client.get("/tasks", params={"type": "fax"}, headers=_auth(tenant_id="t1"))

        assert response.status_code == 422

    def test_tareas_de_hoy(self, client, seeded):
        today = client.get("/tasks/today", headers=_auth(tenant_id="t1")).json()

        assert [t["id"] for t in today] == [seeded["today_call"]]

    def test_completar_tarea(self, client, seeded, repos):
        response = client.post(f"/tasks/{seeded['today_call']}/complete", headers=_auth(tenant_id="t1"))

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert repos["tasks"].get(seeded["today_call"]).status is TaskStatus.COMPLETED

    def test_completar_tarea_ajena_o_inexistente_404(self, client, seeded):
        headers = _auth(tenant_id="t1")

        assert client.post(f"/tasks/{seeded['other_tenant']}/complete", headers=headers).status_code == 404
        assert client.post("/tasks/no-existe/complete", headers=headers).status_code == 404
