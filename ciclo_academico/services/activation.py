"""Cálculo de los cambios necesarios para activar un año académico."""
from collections.abc import Iterable

from ciclo_academico.models.academic_year import YearStatus
from ciclo_academico.schemas.academic_year import ActivationPlan, Year, YearPatch

YEAR_NOT_FOUND_ERROR = "Año no encontrado"


def plan_activation(target_id: int, all_years: Iterable[Year]) -> ActivationPlan:
    """Calcula el lote de parches que deja a `target_id` como único año operativo.

    El año objetivo pasa a abierto y operativo. Todo otro año marcado como
    operativo (debería haber uno como máximo, pero se toleran varios) deja de
    serlo; si estaba abierto pasa a cerrado, en otro caso conserva su estado.
    No lanza excepciones: un objetivo inexistente se informa en `errors`.
    """
    years = list(all_years)
    if not any(y.id == target_id for y in years):
        return ActivationPlan(updates=[], errors=[YEAR_NOT_FOUND_ERROR])

    updates = [YearPatch(id=target_id, is_operating=True, status=YearStatus.OPEN)]
    for year in years:
        if year.id == target_id or not year.is_operating:
            continue
        new_status = YearStatus.CLOSED if year.status == YearStatus.OPEN else year.status
        updates.append(YearPatch(id=year.id, is_operating=False, status=new_status))

    return ActivationPlan(updates=updates, errors=[])


def apply_patches(years: Iterable[Year], patches: Iterable[YearPatch]) -> list[Year]:
    """Devuelve copias de `years` con los parches aplicados (sin I/O)."""
    by_id = {p.id: p.fields() for p in patches}
    return [
        y.model_copy(update=by_id[y.id]) if y.id in by_id else y
        for y in years
    ]
