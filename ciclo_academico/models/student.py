"""Modelo Estudiante (solo los campos que el cierre de año necesita)."""
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, Identity, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ciclo_academico.core.database import Base

if TYPE_CHECKING:
    from ciclo_academico.models.academic_year import AnioAcademico


class EstadoAcademico:
    """Valores permitidos para el estado académico del estudiante."""
    ACTIVO = "Activo"
    TRASLADADO = "Trasladado"
    RETIRADO = "Retirado"
    RESERVA = "Reserva"
    MATRICULADO = "Matriculado"
    SIN_MATRICULA = "Sin Matrícula"


# Estados que cuentan como "matriculado actualmente" en un año
ESTADOS_MATRICULA_VIGENTE = (EstadoAcademico.ACTIVO, EstadoAcademico.MATRICULADO)


class Estudiante(Base):
    """Estudiante vinculado al año académico en que está matriculado."""

    __tablename__ = "estudiantes"

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), Identity(), primary_key=True)
    dni: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    academic_status: Mapped[str] = mapped_column(
        Text, nullable=False, default=EstadoAcademico.SIN_MATRICULA
    )
    academic_year_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("anios_academicos.id"), nullable=True
    )

    academic_year: Mapped["AnioAcademico | None"] = relationship("AnioAcademico")
