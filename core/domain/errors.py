"""
Errores de dominio del CRM.

Taxonomía:
    TaskValidationError → errores del cliente (400). Nada se ha escrito todavía.
    PersistenceFailure  → el almacén de datos rechazó o no pudo completar la operación (500).
    NotificationFailure → fallo del canal realtime. Nunca llega al cliente.
    ConfigurationError  → faltan credenciales del backend (500, no se intenta nada).
    TaskNotFound / LeadNotFound → recurso inexistente para el tenant (404).
"""


class TaskValidationError(ValueError):
    """Base de los errores de validación de la creación de tareas."""

    message = "Invalid request"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidTaskType(TaskValidationError):
    message = "Invalid task_type. Must be one of: call, email, review"


class MissingApplicationId(TaskValidationError):
    message = "application_id is required"


class MissingDueAt(TaskValidationError):
    message = "due_at is required"


class InvalidDueAtFormat(TaskValidationError):
    message = "Invalid due_at timestamp format"


class DueAtNotFuture(TaskValidationError):
    message = "due_at must be a future timestamp"


class ApplicationNotFound(TaskValidationError):
    message = "Application not found"


class PersistenceFailure(Exception):
    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details


class NotificationFailure(Exception):
    pass


class ConfigurationError(Exception):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing environment variables: {', '.join(missing)}")
        self.missing = missing


class TaskNotFound(ValueError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task con id {task_id} no encontrada")
        self.task_id = task_id


class LeadNotFound(ValueError):
    def __init__(self, lead_id: str) -> None:
        super().__init__(f"Lead con id {lead_id} no encontrado")
        self.lead_id = lead_id
