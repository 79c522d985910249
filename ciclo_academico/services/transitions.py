"""Tabla de transiciones de estado de un año académico.

planificación -> abierto -> cerrado -> planificación (nuevo ciclo).
No hay lazos sobre el mismo estado ni saltos.
"""
from ciclo_academico.models.academic_year import YearStatus

YEAR_STATUS_TRANSITIONS: dict[YearStatus, frozenset[YearStatus]] = {
    YearStatus.PLANNING: frozenset({YearStatus.OPEN}),
    YearStatus.OPEN: frozenset({YearStatus.CLOSED}),
    YearStatus.CLOSED: frozenset({YearStatus.PLANNING}),
}


def valid_transitions(status: YearStatus | str) -> frozenset[YearStatus]:
    """Estados a los que se puede pasar desde `status`."""
    return YEAR_STATUS_TRANSITIONS.get(YearStatus(status), frozenset())


def can_transition(from_: YearStatus | str, to: YearStatus | str) -> bool:
    return YearStatus(to) in valid_transitions(from_)


def explain_invalid(from_: YearStatus | str, to: YearStatus | str) -> str:
    """Mensaje para el operador; cadena vacía si la transición es válida."""
    if can_transition(from_, to):
        return ""
    return (
        f'No se puede cambiar de "{YearStatus(from_).label}" a "{YearStatus(to).label}". '
        "Transición no permitida por las reglas de negocio."
    )
