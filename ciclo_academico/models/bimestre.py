"""Modelo Bimestre (periodo de evaluación dentro de un año académico)."""
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, Date, ForeignKey, Identity, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ciclo_academico.core.database import Base

if TYPE_CHECKING:
    from ciclo_academico.models.academic_year import AnioAcademico


class Bimestre(Base):
    """Ventana de ingreso de notas/asistencia con candado y apertura forzada."""

    __tablename__ = "bimestres"

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), Identity(), primary_key=True)
    academic_year_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("anios_academicos.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_locked: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    is_force_open: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    academic_year: Mapped["AnioAcademico"] = relationship(
        "AnioAcademico", back_populates="periods"
    )
