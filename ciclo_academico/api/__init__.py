"""Routers de la API."""
from fastapi import APIRouter

from ciclo_academico.api.endpoints import anios, bimestres

router = APIRouter()
router.include_router(anios.router)
router.include_router(bimestres.router)


@router.get(
    "/",
    tags=["api"],
    summary="Raíz de la API v1",
    response_description="Mensaje de bienvenida y enlace a la documentación",
)
async def api_root():
    """Información básica de la API y enlace a la documentación Swagger."""
    return {"message": "Ciclo Académico API v1", "docs": "/docs", "redoc": "/redoc"}
