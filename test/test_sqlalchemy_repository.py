import unittest
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import OperationalError

from core.domain.errors import PersistenceFailure
from core.domain.models.application import Application
from core.domain.models.lead import Lead
from core.domain.models.task import Task, TaskStatus, TaskType
from infrastructure.sqlalchemy.repository.application_repository import (
    SqlAlchemyApplicationRepository,
)
from infrastructure.sqlalchemy.repository.lead_repository import SqlAlchemyLeadRepository
from infrastructure.sqlalchemy.repository.task_repository import SqlAlchemyTaskRepository
from infrastructure.sqlalchemy.session.db import Base, build_engine, build_session_factory, init_db

DUE = datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc)


class SqlAlchemyRepositoriesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = build_engine("sqlite:///:memory:")
        init_db(self.engine)
        session_factory = build_session_factory(self.engine)
        self.leads = SqlAlchemyLeadRepository(session_factory)
        self.applications = SqlAlchemyApplicationRepository(session_factory)
        self.tasks = SqlAlchemyTaskRepository(session_factory)

        lead = self.leads.add(Lead(tenant_id="t1", stage="new"))
        self.application = self.applications.add(Application(tenant_id="t1", lead_id=lead.id))

    def tearDown(self) -> None:
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    def _add_task(self, due_at: datetime = DUE, **kwargs) -> str:
        return self.tasks.add(
            Task(
                application_id=self.application.id,
                tenant_id=kwargs.pop("tenant_id", "t1"),
                type=kwargs.pop("type", TaskType.REVIEW),
                due_at=due_at,
                **kwargs,
            )
        )

    def test_add_devuelve_id_generado_y_get(self) -> None:
        task_id = self._add_task()

        loaded = self.tasks.get(task_id)

        self.assertIsNotNone(loaded)
        assert loaded is not None
        self.assertEqual(loaded.id, task_id)
        self.assertEqual(loaded.tenant_id, "t1")
        self.assertEqual(loaded.type, TaskType.REVIEW)
        self.assertEqual(loaded.status, TaskStatus.PENDING)
        self.assertEqual(loaded.due_at, DUE)
        self.assertIsNotNone(loaded.created_at)

    def test_due_at_con_offset_se_guarda_en_utc(self) -> None:
        madrid = timezone(timedelta(hours=2))
        task_id = self._add_task(due_at=datetime(2026, 10, 20, 11, 0, tzinfo=madrid))

        self.assertEqual(self.tasks.get(task_id).due_at, DUE)

    def test_get_inexistente(self) -> None:
        self.assertIsNone(self.tasks.get("no-existe"))
        self.assertIsNone(self.applications.get("no-existe"))

    def test_list_filtra_y_ordena(self) -> None:
        later = self._add_task(DUE + timedelta(hours=3), type=TaskType.CALL)
        sooner = self._add_task(DUE, type=TaskType.CALL)
        self._add_task(DUE, type=TaskType.EMAIL)
        self._add_task(DUE, tenant_id="t2", type=TaskType.CALL)

        calls = self.tasks.list("t1", task_type=TaskType.CALL)

        self.assertEqual([t.id for t in calls], [sooner, later])
        self.assertEqual(len(self.tasks.list("t1")), 3)

    def test_update_status_y_list_due_between(self) -> None:
        open_task = self._add_task(DUE)
        done_task = self._add_task(DUE + timedelta(hours=1))
        self._add_task(DUE + timedelta(days=1))

        self.tasks.update_status(done_task, TaskStatus.COMPLETED)
        start = DUE.replace(hour=0)
        today = self.tasks.list_due_between(
            "t1", start, start + timedelta(days=1), exclude_status=TaskStatus.COMPLETED
        )

        self.assertEqual([t.id for t in today], [open_task])
        self.assertEqual(self.tasks.get(done_task).status, TaskStatus.COMPLETED)

    def test_leads_y_solicitudes_por_tenant(self) -> None:
        other_lead = self.leads.add(Lead(tenant_id="t2"))
        self.applications.add(Application(tenant_id="t2", lead_id=other_lead.id))
        second = self.applications.add(Application(tenant_id="t1", lead_id=self.application.lead_id))

        self.assertEqual([l.stage for l in self.leads.list("t1")], ["new"])
        self.assertEqual(
            [a.id for a in self.applications.list("t1")], [second.id, self.application.id]
        )
        self.assertEqual(len(self.applications.list("t1", lead_id=other_lead.id)), 0)
        self.assertEqual(self.applications.get(self.application.id).tenant_id, "t1")

    def test_error_del_driver_se_traduce_a_persistence_failure(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

        with self.assertRaises(PersistenceFailure) as ctx:
            self._add_task()
        self.assertIsInstance(ctx.exception.__cause__, OperationalError)


if __name__ == "__main__":
    unittest.main()
