"""Endpoints de años académicos: listar, crear, cambiar estado y activar."""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from ciclo_academico.api.deps import get_lifecycle_service, http_error
from ciclo_academico.core.exceptions import CicloAcademicoError
from ciclo_academico.schemas.academic_year import (
    EntryCheckResponse,
    StatusChangeRequest,
    Year,
    YearCreate,
    YearListResponse,
    YearPermissions,
)
from ciclo_academico.services.entry_window import (
    can_enroll,
    can_modify_academic_data,
    entry_badge,
)
from ciclo_academico.services.lifecycle_service import LifecycleService
from ciclo_academico.services.read_only import is_read_only, operating_year
from ciclo_academico.services.transitions import valid_transitions

router = APIRouter(prefix="/anios", tags=["anios"])


def _lista(years: list[Year]) -> YearListResponse:
    operativo = operating_year(years)
    return YearListResponse(
        anios=years,
        operating_year_id=operativo.id if operativo else None,
    )


@router.get(
    "",
    response_model=YearListResponse,
    summary="Listar años académicos",
)
async def listar_anios(service: LifecycleService = Depends(get_lifecycle_service)):
    try:
        return _lista(await service.load_years())
    except CicloAcademicoError as exc:
        raise http_error(exc) from exc


@router.post(
    "",
    response_model=Year,
    status_code=status.HTTP_201_CREATED,
    summary="Aperturar nuevo ciclo académico",
    description="Crea un año en planificación con sus bimestres (por defecto cuatro).",
)
async def crear_anio(
    body: YearCreate,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    try:
        return await service.create_year(body.year, body.periods)
    except CicloAcademicoError as exc:
        raise http_error(exc) from exc


@router.get(
    "/{year_id}",
    response_model=Year,
    summary="Detalle de un año académico",
)
async def obtener_anio(
    year_id: int,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    try:
        return await service.get_year(year_id)
    except CicloAcademicoError as exc:
        raise http_error(exc) from exc


@router.get(
    "/{year_id}/permisos",
    response_model=YearPermissions,
    summary="Permisos derivados del estado del año",
    description="Matrícula, edición académica y solo lectura para los módulos dependientes.",
)
async def permisos_anio(
    year_id: int,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    try:
        year = await service.get_year(year_id)
    except CicloAcademicoError as exc:
        raise http_error(exc) from exc
    return YearPermissions(
        year_id=year.id,
        status=year.status,
        can_enroll=can_enroll(year),
        can_modify_academic_data=can_modify_academic_data(year),
        is_read_only=is_read_only(year),
        valid_transitions=sorted(valid_transitions(year.status), key=lambda s: s.value),
    )


@router.patch(
    "/{year_id}/estado",
    response_model=YearListResponse,
    summary="Cambiar estado del año",
    responses={409: {"description": "Transición no permitida"}},
)
async def cambiar_estado(
    year_id: int,
    body: StatusChangeRequest,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    try:
        return _lista(await service.change_status(year_id, body.status))
    except CicloAcademicoError as exc:
        raise http_error(exc) from exc


@router.patch(
    "/{year_id}/activar",
    response_model=YearListResponse,
    summary="Activar año académico",
    description="Activa el año, lo abre y degrada al año operativo anterior.",
)
async def activar_anio(
    year_id: int,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    try:
        return _lista(await service.activate_year(year_id))
    except CicloAcademicoError as exc:
        raise http_error(exc) from exc


@router.get(
    "/{year_id}/bimestres/{period_id}/ingreso",
    response_model=EntryCheckResponse,
    summary="¿Se pueden registrar notas en el bimestre?",
)
async def validar_ingreso(
    year_id: int,
    period_id: int,
    service: LifecycleService = Depends(get_lifecycle_service),
    fecha: Annotated[date | None, Query(description="Fecha a evaluar (por defecto hoy)")] = None,
):
    fecha = fecha or service.today()
    try:
        check = await service.entry_check(year_id, period_id, fecha)
    except CicloAcademicoError as exc:
        raise http_error(exc) from exc
    return EntryCheckResponse(
        year_id=year_id,
        period_id=period_id,
        fecha=fecha,
        check=check,
        message=check.reason.message,
        badge=entry_badge(check),
    )
