import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend_fastapi.api.routes.applications import router as applications_router
from backend_fastapi.api.routes.functions import CORS_HEADERS
from backend_fastapi.api.routes.functions import router as functions_router
from backend_fastapi.api.routes.leads import router as leads_router
from backend_fastapi.api.routes.tasks import router as tasks_router
from core.domain.errors import ConfigurationError
from infrastructure.config import get_cors_settings

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

app = FastAPI(title="CRM Task Intake API")

app.add_middleware(CORSMiddleware, **get_cors_settings())


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    # Se resuelve antes de leer el body: ninguna operación llega a intentarse.
    logger.error(f"Configuración incompleta del backend: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Missing backend configuration", "details": str(exc)},
        headers=CORS_HEADERS,
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Errores fuera del try de las rutas, p. ej. al construir engines o conectar en las dependencias.
    logger.exception(f"Error inesperado en {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
        headers=CORS_HEADERS,
    )


app.include_router(functions_router)
app.include_router(leads_router)
app.include_router(applications_router)
app.include_router(tasks_router)
