"""Persistencia de años académicos y bimestres con SQLAlchemy asíncrono."""
import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ciclo_academico.core.exceptions import PeriodNotFound, PersistenceFailure, YearNotFound
from ciclo_academico.models import AnioAcademico, Bimestre, YearStatus
from ciclo_academico.schemas.academic_year import PeriodCreate, Year, YearPatch

logger = logging.getLogger(__name__)


class SqlYearRepository:
    """Adaptador de persistencia; trabaja dentro de la transacción de la sesión."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def load_years(self) -> list[Year]:
        q = (
            select(AnioAcademico)
            .options(selectinload(AnioAcademico.periods))
            .order_by(AnioAcademico.year.desc(), AnioAcademico.id.desc())
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(q)
        except SQLAlchemyError as exc:
            raise PersistenceFailure("cargar los años académicos") from exc
        return [Year.model_validate(a) for a in result.scalars().all()]

    async def get_year(self, year_id: int) -> Year:
        q = (
            select(AnioAcademico)
            .options(selectinload(AnioAcademico.periods))
            .where(AnioAcademico.id == year_id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(q)
        except SQLAlchemyError as exc:
            raise PersistenceFailure("cargar el año académico") from exc
        anio = result.scalar_one_or_none()
        if anio is None:
            raise YearNotFound(year_id)
        return Year.model_validate(anio)

    async def save_year_patch(self, year_id: int, fields: dict) -> None:
        anio = await self.session.get(AnioAcademico, year_id)
        if anio is None:
            raise YearNotFound(year_id)
        self._assign(anio, fields)
        await self._flush("actualizar el año académico")

    async def save_period_patch(self, period_id: int, fields: dict) -> None:
        bimestre = await self.session.get(Bimestre, period_id)
        if bimestre is None:
            raise PeriodNotFound(period_id)
        self._assign(bimestre, fields)
        await self._flush("actualizar el bimestre")

    async def create_year(self, year_value: int, periods: Iterable[PeriodCreate]) -> Year:
        anio = AnioAcademico(
            year=year_value,
            status=YearStatus.PLANNING.value,
            is_operating=False,
            periods=[Bimestre(**p.model_dump()) for p in periods],
        )
        self.session.add(anio)
        await self._flush("crear el año académico")
        return await self.get_year(anio.id)

    async def apply_activation(self, demotions: Iterable[YearPatch], promotion: YearPatch) -> None:
        """Aplica el lote de activación en la transacción actual.

        Las degradaciones se envían antes que la promoción para que nunca
        haya dos años operativos visibles a la vez.
        """
        for patch in demotions:
            await self.save_year_patch(patch.id, patch.fields())
        await self.save_year_patch(promotion.id, promotion.fields())

    @staticmethod
    def _assign(obj, fields: dict) -> None:
        for campo, valor in fields.items():
            if isinstance(valor, YearStatus):
                valor = valor.value
            setattr(obj, campo, valor)

    async def _flush(self, operation: str) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            logger.error("Fallo al %s: %s", operation, exc)
            raise PersistenceFailure(operation) from exc
