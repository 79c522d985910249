"""Validación de la ventana de ingreso de notas y asistencia por bimestre."""
from datetime import date, datetime
from zoneinfo import ZoneInfo

from ciclo_academico.core.config import settings
from ciclo_academico.models.academic_year import YearStatus
from ciclo_academico.schemas.academic_year import (
    EntryBadge,
    EntryCheck,
    EntryReason,
    Period,
    Year,
)


def school_today() -> date:
    """Fecha de hoy en la zona horaria del colegio, no la del servidor."""
    return datetime.now(ZoneInfo(settings.school_timezone)).date()


def _as_date(now: date | datetime | None) -> date:
    # La ventana se evalúa por día calendario, sin hora
    if now is None:
        return school_today()
    if isinstance(now, datetime):
        return now.date()
    return now


def is_in_window(period: Period, now: date | datetime | None = None) -> bool:
    """True si `now` cae entre start_date y end_date, ambos inclusive."""
    today = _as_date(now)
    return period.start_date <= today <= period.end_date


def can_enter_data(
    period: Period, year: Year, now: date | datetime | None = None
) -> EntryCheck:
    """Decide si un docente puede registrar notas/asistencia en el bimestre.

    Orden de evaluación (gana el primer fallo):
    año no operativo, bimestre bloqueado sin apertura forzada, fuera de fechas.
    La apertura forzada habilita el ingreso aun fuera de fechas o con candado.
    """
    in_window = is_in_window(period, now)
    forced = bool(period.is_force_open)
    year_active = bool(year.is_operating)

    if not year_active:
        return EntryCheck(
            allowed=False,
            reason=EntryReason.YEAR_NOT_OPERATING,
            in_window=in_window,
            forced=forced,
            year_active=False,
        )

    if period.is_locked and not forced:
        return EntryCheck(
            allowed=False,
            reason=EntryReason.PERIOD_LOCKED,
            in_window=in_window,
            forced=forced,
            year_active=year_active,
        )

    allowed = in_window or forced
    return EntryCheck(
        allowed=allowed,
        reason=EntryReason.PERMITTED if allowed else EntryReason.OUTSIDE_WINDOW,
        in_window=in_window,
        forced=forced,
        year_active=year_active,
    )


def can_enroll(year: Year) -> bool:
    """La matrícula se permite en planificación y en año abierto."""
    return year.status in (YearStatus.PLANNING, YearStatus.OPEN)


def can_modify_academic_data(year: Year) -> bool:
    """Notas y datos académicos solo en el año abierto y operativo."""
    return year.status == YearStatus.OPEN and year.is_operating


def entry_badge(check: EntryCheck) -> EntryBadge:
    """Clasifica el resultado de can_enter_data para la interfaz."""
    if not check.year_active:
        return EntryBadge.YEAR_INACTIVE
    if check.allowed:
        return EntryBadge.FORCED_OPEN if check.forced else EntryBadge.OPEN
    if not check.in_window:
        return EntryBadge.OUT_OF_WINDOW
    return EntryBadge.DISABLED
