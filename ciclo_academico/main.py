"""Punto de entrada de la aplicación FastAPI."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ciclo_academico.api import router as api_router
from ciclo_academico.core.config import settings
from ciclo_academico.core.database import init_db
from ciclo_academico.models import *  # noqa: F401, F403 - Registra modelos en Base.metadata antes de init_db

logger = logging.getLogger(__name__)

# Documentación Swagger: disponible en /docs (OpenAPI 3.0)
OPENAPI_TAGS = [
    {
        "name": "api",
        "description": "Endpoints generales de la API v1.",
    },
    {
        "name": "anios",
        "description": "Años académicos: crear, listar, cambiar estado, activar y consultar permisos e ingreso de notas.",
    },
    {
        "name": "bimestres",
        "description": "Bimestres: fechas de evaluación, candado y apertura forzada.",
    },
    {
        "name": "salud",
        "description": "Comprobación del estado del servicio.",
    },
]


def configurar_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="[%(asctime)s] %(levelname)s in %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestiona el ciclo de vida: inicio y cierre de la aplicación."""
    configurar_logging()
    await init_db()
    logger.info("%s iniciado (zona horaria escolar: %s)", settings.app_name, settings.school_timezone)
    yield


app = FastAPI(
    title=settings.app_name,
    description="""
API REST del **ciclo académico**: años académicos, bimestres y las reglas que
deciden si un año admite matrícula, si un bimestre admite notas y cuál es el
único año operativo.

- **Swagger UI:** [GET /docs](/docs)
- **ReDoc:** [GET /redoc](/redoc)
""",
    version="0.1.0",
    openapi_tags=OPENAPI_TAGS,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS: permitir acceso desde cualquier origen (frontend en otro puerto/dominio)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get(
    "/health",
    tags=["salud"],
    summary="Estado del servicio",
    response_description="Indica que la API está en ejecución",
)
async def health_check():
    """Comprueba que el servicio está activo."""
    return {"status": "ok", "message": "Servicio en ejecución"}
