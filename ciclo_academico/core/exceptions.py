"""Errores del motor de ciclo académico.

Los errores de validación (transición, año/bimestre inexistente, bimestre
congelado, fechas) se lanzan siempre antes de cualquier escritura.
"""


class CicloAcademicoError(Exception):
    """Base de todos los errores del dominio."""


class InvalidTransition(CicloAcademicoError):
    """Cambio de estado fuera de la tabla de transiciones."""

    def __init__(self, from_status, to_status, message: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(message)


class YearNotFound(CicloAcademicoError):
    def __init__(self, year_id: int):
        self.year_id = year_id
        super().__init__(f"Año académico {year_id} no encontrado")


class PeriodNotFound(CicloAcademicoError):
    def __init__(self, period_id: int):
        self.period_id = period_id
        super().__init__(f"Bimestre {period_id} no encontrado")


class PeriodFrozen(CicloAcademicoError):
    """Edición de un bimestre cuyo año está cerrado."""

    def __init__(self, period_id: int, year_id: int):
        self.period_id = period_id
        self.year_id = year_id
        super().__init__(
            f"El bimestre {period_id} pertenece a un año cerrado y no puede modificarse"
        )


class InvalidPeriodDates(CicloAcademicoError):
    def __init__(self, period_id: int):
        self.period_id = period_id
        super().__init__(
            f"La fecha de inicio del bimestre {period_id} es posterior a su fecha de fin"
        )


class PeriodOverlap(CicloAcademicoError):
    def __init__(self, period_id: int, other_name: str):
        self.period_id = period_id
        self.other_name = other_name
        super().__init__(
            f"Las fechas del bimestre {period_id} se superponen con '{other_name}'"
        )


class PersistenceFailure(CicloAcademicoError):
    """El almacenamiento rechazó la escritura. No se reintenta."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Error de persistencia al {operation}")


class SideEffectFailure(CicloAcademicoError):
    """Falló el reinicio de matrículas tras cerrar un año (no fatal)."""

    def __init__(self, year_id: int):
        self.year_id = year_id
        super().__init__(
            f"No se pudo reiniciar el estado de los estudiantes del año {year_id}"
        )
