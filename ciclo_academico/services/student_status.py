"""Reinicio del estado de matrícula de los estudiantes al cerrar un año."""
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ciclo_academico.core.exceptions import SideEffectFailure
from ciclo_academico.models import EstadoAcademico, Estudiante
from ciclo_academico.models.student import ESTADOS_MATRICULA_VIGENTE


class SqlStudentStatusReset:
    """Marca como 'Sin Matrícula' a los estudiantes matriculados en el año cerrado.

    Corre en un SAVEPOINT: si falla, se revierte solo este paso y el cambio
    de estado del año ya registrado en la transacción se conserva.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def __call__(self, year_id: int) -> int:
        stmt = (
            update(Estudiante)
            .where(
                Estudiante.academic_year_id == year_id,
                Estudiante.academic_status.in_(ESTADOS_MATRICULA_VIGENTE),
            )
            .values(academic_status=EstadoAcademico.SIN_MATRICULA)
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise SideEffectFailure(year_id) from exc
        return result.rowcount
