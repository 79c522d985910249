"""Solo lectura derivada del estado del año y selección del año operativo.

Matrícula, edición de personal y carga horaria deben consultar
`is_read_only` en lugar de derivarlo por su cuenta.
"""
from collections.abc import Sequence

from ciclo_academico.models.academic_year import YearStatus
from ciclo_academico.schemas.academic_year import Year


def is_read_only(year: Year) -> bool:
    """Un año cerrado es de solo consulta; no importa si es el operativo."""
    return year.status == YearStatus.CLOSED


def operating_year(years: Sequence[Year]) -> Year | None:
    return next((y for y in years if y.is_operating), None)


def resolve_selected_year(years: Sequence[Year], selected_id: int | None = None) -> Year | None:
    """Año a mostrar: el seleccionado si sigue existiendo, si no el operativo, si no el primero."""
    if selected_id is not None:
        selected = next((y for y in years if y.id == selected_id), None)
        if selected is not None:
            return selected
    return operating_year(years) or (years[0] if years else None)
