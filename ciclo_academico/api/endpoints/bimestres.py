"""Endpoints de bimestres: fechas, candado y apertura forzada."""
from fastapi import APIRouter, Depends

from ciclo_academico.api.deps import get_lifecycle_service, http_error
from ciclo_academico.core.exceptions import CicloAcademicoError
from ciclo_academico.schemas.academic_year import PeriodPatch, YearListResponse
from ciclo_academico.services.lifecycle_service import LifecycleService
from ciclo_academico.services.read_only import operating_year

router = APIRouter(prefix="/bimestres", tags=["bimestres"])


@router.patch(
    "/{period_id}",
    response_model=YearListResponse,
    summary="Actualizar bimestre",
    description="Solo se envían los campos a modificar. Un bimestre de un año cerrado no se puede editar.",
    responses={
        404: {"description": "Bimestre no encontrado"},
        409: {"description": "El año del bimestre está cerrado"},
        422: {"description": "Fechas inválidas o superpuestas con otro bimestre"},
    },
)
async def actualizar_bimestre(
    period_id: int,
    body: PeriodPatch,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    try:
        years = await service.update_period(period_id, body)
    except CicloAcademicoError as exc:
        raise http_error(exc) from exc
    operativo = operating_year(years)
    return YearListResponse(anios=years, operating_year_id=operativo.id if operativo else None)
