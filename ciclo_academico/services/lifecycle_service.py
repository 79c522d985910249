"""Orquestador del ciclo de vida de años académicos y bimestres.

Es el único componente que escribe `status`, `is_operating`, `is_locked` e
`is_force_open`. Valida con las funciones puras antes de tocar la
persistencia y devuelve siempre datos recién cargados.
"""
import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Protocol

from ciclo_academico.core.config import settings
from ciclo_academico.core.exceptions import (
    InvalidPeriodDates,
    InvalidTransition,
    PeriodFrozen,
    PeriodNotFound,
    PeriodOverlap,
    SideEffectFailure,
    YearNotFound,
)
from ciclo_academico.models.academic_year import YearStatus
from ciclo_academico.schemas.academic_year import (
    EntryCheck,
    Period,
    PeriodCreate,
    PeriodPatch,
    Year,
    YearPatch,
)
from ciclo_academico.services.activation import plan_activation
from ciclo_academico.services.entry_window import can_enter_data, school_today
from ciclo_academico.services.read_only import is_read_only, operating_year
from ciclo_academico.services.transitions import can_transition, explain_invalid

logger = logging.getLogger(__name__)


class YearStore(Protocol):
    """Lo que el motor necesita del almacenamiento."""

    async def load_years(self) -> list[Year]: ...

    async def save_year_patch(self, year_id: int, fields: dict) -> None: ...

    async def save_period_patch(self, period_id: int, fields: dict) -> None: ...

    async def create_year(self, year_value: int, periods: Iterable[PeriodCreate]) -> Year: ...

    async def apply_activation(self, demotions: Iterable[YearPatch], promotion: YearPatch) -> None: ...


class StudentStatusReset(Protocol):
    async def __call__(self, year_id: int) -> int: ...


# (nombre, inicio MM-DD, fin MM-DD, bloqueado) de los bimestres de un año nuevo
DEFAULT_BIMESTRES = [
    ("I Bimestre", "03-01", "05-15", False),
    ("II Bimestre", "05-20", "07-25", True),
    ("III Bimestre", "08-10", "10-15", True),
    ("IV Bimestre", "10-20", "12-20", True),
]


def default_periods(year_value: int) -> list[PeriodCreate]:
    """Bimestres por defecto para `year_value`, sin superposición de fechas."""
    return [
        PeriodCreate(
            name=nombre,
            start_date=date.fromisoformat(f"{year_value}-{inicio}"),
            end_date=date.fromisoformat(f"{year_value}-{fin}"),
            is_locked=bloqueado,
        )
        for nombre, inicio, fin, bloqueado in DEFAULT_BIMESTRES
    ]


def next_year_value(years: Iterable[Year], today: date) -> int:
    """Siguiente año a aperturar: uno más que el mayor entre los existentes y el actual."""
    return max([y.year for y in years] + [today.year]) + 1


def _overlaps(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start <= b_end and b_start <= a_end


class LifecycleService:
    """Operaciones administrativas sobre años académicos y bimestres."""

    def __init__(
        self,
        store: YearStore,
        reset_students: StudentStatusReset,
        today: Callable[[], date] = school_today,
        enforce_period_overlap: bool | None = None,
    ) -> None:
        self.store = store
        self.reset_students = reset_students
        self.today = today
        if enforce_period_overlap is None:
            enforce_period_overlap = settings.enforce_period_overlap
        self.enforce_period_overlap = enforce_period_overlap

    async def load_years(self) -> list[Year]:
        return await self.store.load_years()

    async def get_year(self, year_id: int) -> Year:
        years = await self.store.load_years()
        return self._find_year(years, year_id)

    async def get_operating_year(self) -> Year | None:
        return operating_year(await self.store.load_years())

    async def change_status(self, year_id: int, new_status: YearStatus | str) -> list[Year]:
        """Cambia el estado de un año según la tabla de transiciones.

        Al cerrar un año se reinicia la matrícula de sus estudiantes. Ese paso
        es de mejor esfuerzo: si falla se registra en el log y el cierre se
        mantiene.
        """
        year = self._find_year(await self.store.load_years(), year_id)
        try:
            new_status = YearStatus(new_status)
        except ValueError:
            raise InvalidTransition(
                year.status, new_status, f'Estado desconocido: "{new_status}"'
            ) from None

        if not can_transition(year.status, new_status):
            logger.warning(
                "Transición rechazada para año %s: %s -> %s",
                year.year, year.status.value, new_status.value,
            )
            raise InvalidTransition(
                year.status, new_status, explain_invalid(year.status, new_status)
            )

        await self.store.save_year_patch(year_id, {"status": new_status})
        logger.info(
            "Año %s cambió de %s a %s", year.year, year.status.value, new_status.value
        )

        if new_status == YearStatus.CLOSED:
            try:
                reiniciados = await self.reset_students(year_id)
            except Exception:
                logger.exception("%s", SideEffectFailure(year_id))
            else:
                logger.info(
                    "Año %s cerrado: %s estudiante(s) pasaron a Sin Matrícula",
                    year.year, reiniciados,
                )

        return await self.store.load_years()

    async def activate_year(self, year_id: int) -> list[Year]:
        """Deja a `year_id` como único año operativo y abierto."""
        years = await self.store.load_years()
        plan = plan_activation(year_id, years)
        if not plan.success:
            raise YearNotFound(year_id)

        target = self._find_year(years, year_id)
        if target.status == YearStatus.CLOSED:
            # Un año cerrado solo vuelve a circular pasando por planificación
            raise InvalidTransition(
                target.status, YearStatus.OPEN,
                explain_invalid(target.status, YearStatus.OPEN),
            )

        await self.store.apply_activation(plan.demotions, plan.promotion)
        logger.info(
            "Año %s activado; %s año(s) degradado(s)", target.year, len(plan.demotions)
        )
        return await self.store.load_years()

    async def update_period(self, period_id: int, patch: PeriodPatch | dict) -> list[Year]:
        """Modifica fechas, candado o apertura forzada de un bimestre."""
        if isinstance(patch, dict):
            patch = PeriodPatch(**patch)
        years = await self.store.load_years()
        period, year = self._find_period(years, period_id)

        if is_read_only(year):
            logger.warning("Edición rechazada: bimestre %s de año cerrado %s", period_id, year.year)
            raise PeriodFrozen(period_id, year.id)

        fields = patch.fields()
        start = fields.get("start_date", period.start_date)
        end = fields.get("end_date", period.end_date)
        if start > end:
            raise InvalidPeriodDates(period_id)

        if self.enforce_period_overlap and ("start_date" in fields or "end_date" in fields):
            for other in year.periods:
                if other.id != period_id and _overlaps(start, end, other.start_date, other.end_date):
                    raise PeriodOverlap(period_id, other.name)

        if fields:
            await self.store.save_period_patch(period_id, fields)
            logger.info("Bimestre %s actualizado: %s", period.name, fields)
        return await self.store.load_years()

    async def create_year(
        self,
        year_value: int | None = None,
        periods: Iterable[PeriodCreate] | None = None,
    ) -> Year:
        """Crea un año en planificación; no toca la marca operativa de otros años."""
        if year_value is None:
            year_value = next_year_value(await self.store.load_years(), self.today())
        if periods is None:
            periods = default_periods(year_value)
        year = await self.store.create_year(year_value, list(periods))
        logger.info("Ciclo académico %s creado con %s bimestre(s)", year.year, len(year.periods))
        return year

    async def entry_check(
        self, year_id: int, period_id: int, now: date | datetime | None = None
    ) -> EntryCheck:
        """Valida el ingreso de notas con datos recién cargados."""
        years = await self.store.load_years()
        period, year = self._find_period(years, period_id)
        if year.id != year_id:
            raise PeriodNotFound(period_id)
        return can_enter_data(period, year, now if now is not None else self.today())

    @staticmethod
    def _find_year(years: Iterable[Year], year_id: int) -> Year:
        for year in years:
            if year.id == year_id:
                return year
        raise YearNotFound(year_id)

    @staticmethod
    def _find_period(years: Iterable[Year], period_id: int) -> tuple[Period, Year]:
        for year in years:
            for period in year.periods:
                if period.id == period_id:
                    return period, year
        raise PeriodNotFound(period_id)
