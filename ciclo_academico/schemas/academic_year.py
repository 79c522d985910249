"""Esquemas para años académicos, bimestres y validaciones de ingreso."""
import enum
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ciclo_academico.models.academic_year import YearStatus


class Period(BaseModel):
    """Bimestre tal como lo ven los consumidores."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    start_date: date
    end_date: date
    is_locked: bool = False
    is_force_open: bool = False

    @field_validator("is_locked", "is_force_open", mode="before")
    @classmethod
    def none_es_false(cls, v):
        return bool(v) if v is not None else False


class Year(BaseModel):
    """Año académico con sus bimestres ordenados."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    year: int
    status: YearStatus
    is_operating: bool = False
    start_date: date | None = None
    end_date: date | None = None
    periods: list[Period] = Field(default_factory=list)


class YearPatch(BaseModel):
    """Cambio de campos de un año; los campos en None no se tocan."""
    id: int
    is_operating: bool | None = None
    status: YearStatus | None = None

    def fields(self) -> dict:
        return self.model_dump(exclude={"id"}, exclude_none=True)


class ActivationPlan(BaseModel):
    """Lote de cambios para dejar un único año operativo."""
    updates: list[YearPatch] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def promotion(self) -> YearPatch | None:
        # El planificador siempre emite primero el parche del año objetivo
        return self.updates[0] if self.updates else None

    @property
    def demotions(self) -> list[YearPatch]:
        return self.updates[1:]


class PeriodCreate(BaseModel):
    """Bimestre a crear junto con un año."""
    name: str = Field(description="Nombre del bimestre (ej. I Bimestre)")
    start_date: date
    end_date: date
    is_locked: bool = False
    is_force_open: bool = False


class PeriodPatch(BaseModel):
    """Request para modificar fechas, candado o apertura forzada de un bimestre."""
    start_date: date | None = None
    end_date: date | None = None
    is_locked: bool | None = None
    is_force_open: bool | None = None

    def fields(self) -> dict:
        return self.model_dump(exclude_none=True)


class YearCreate(BaseModel):
    """Request para crear un año académico en planificación."""
    year: int | None = Field(
        default=None, ge=1000, le=9999,
        description="Año calendario; si se omite se usa el siguiente disponible",
    )
    periods: list[PeriodCreate] | None = Field(
        default=None, description="Bimestres; si se omiten se usan los cuatro por defecto",
    )


class StatusChangeRequest(BaseModel):
    """Request para cambiar el estado de un año."""
    status: YearStatus = Field(description="planificación, abierto o cerrado")


class YearListResponse(BaseModel):
    """Lista de años académicos y el año operativo actual."""
    anios: list[Year]
    operating_year_id: int | None = None


class YearPermissions(BaseModel):
    """Permisos derivados del estado de un año para los módulos dependientes."""
    year_id: int
    status: YearStatus
    can_enroll: bool
    can_modify_academic_data: bool
    is_read_only: bool
    valid_transitions: list[YearStatus]


class EntryReason(str, enum.Enum):
    """Motivo del resultado de la validación de ingreso de notas."""
    PERMITTED = "permitido"
    YEAR_NOT_OPERATING = "anio_no_operativo"
    PERIOD_LOCKED = "bimestre_bloqueado"
    OUTSIDE_WINDOW = "fuera_de_periodo"

    @property
    def message(self) -> str:
        return _REASON_MESSAGES[self]


_REASON_MESSAGES = {
    EntryReason.PERMITTED: "Permitido",
    EntryReason.YEAR_NOT_OPERATING: "El año académico no está activo",
    EntryReason.PERIOD_LOCKED: "El bimestre está bloqueado",
    EntryReason.OUTSIDE_WINDOW: "Fuera del período de evaluación",
}


class EntryCheck(BaseModel):
    """Resultado de can_enter_data; los cuatro indicadores son independientes."""
    allowed: bool
    reason: EntryReason
    in_window: bool
    forced: bool
    year_active: bool


class EntryBadge(str, enum.Enum):
    """Clasificación visual del estado de ingreso de un bimestre."""
    YEAR_INACTIVE = "AÑO INACTIVO"
    FORCED_OPEN = "FORZADO ABIERTO"
    OPEN = "ABIERTO PARA NOTAS"
    OUT_OF_WINDOW = "FUERA DE PERÍODO"
    DISABLED = "INGRESO DESHABILITADO"


class EntryCheckResponse(BaseModel):
    """Respuesta del endpoint de validación de ingreso."""
    year_id: int
    period_id: int
    fecha: date
    check: EntryCheck
    message: str
    badge: EntryBadge
