"""Dependencias compartidas por los endpoints."""
from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ciclo_academico.core.database import get_db
from ciclo_academico.core.exceptions import (
    CicloAcademicoError,
    InvalidPeriodDates,
    InvalidTransition,
    PeriodFrozen,
    PeriodNotFound,
    PeriodOverlap,
    PersistenceFailure,
    YearNotFound,
)
from ciclo_academico.services.lifecycle_service import LifecycleService
from ciclo_academico.services.student_status import SqlStudentStatusReset
from ciclo_academico.services.year_repository import SqlYearRepository

# Código HTTP para cada error del dominio
ERROR_STATUS = {
    YearNotFound: status.HTTP_404_NOT_FOUND,
    PeriodNotFound: status.HTTP_404_NOT_FOUND,
    InvalidTransition: status.HTTP_409_CONFLICT,
    PeriodFrozen: status.HTTP_409_CONFLICT,
    InvalidPeriodDates: 422,
    PeriodOverlap: 422,
    PersistenceFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def get_lifecycle_service(db: AsyncSession = Depends(get_db)) -> LifecycleService:
    """Servicio de ciclo de vida ligado a la sesión (y transacción) de la request."""
    return LifecycleService(SqlYearRepository(db), SqlStudentStatusReset(db))


def http_error(exc: CicloAcademicoError) -> HTTPException:
    """Traduce un error del dominio a HTTPException con el mensaje para el operador."""
    code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=str(exc))
