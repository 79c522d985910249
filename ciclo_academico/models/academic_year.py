"""Modelo AnioAcademico (ciclo académico de un año calendario)."""
import enum
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, Date, Identity, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ciclo_academico.core.database import Base

if TYPE_CHECKING:
    from ciclo_academico.models.bimestre import Bimestre


class YearStatus(str, enum.Enum):
    """Estados del ciclo de vida de un año académico."""
    PLANNING = "planificación"
    OPEN = "abierto"
    CLOSED = "cerrado"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    YearStatus.PLANNING: "Planificación",
    YearStatus.OPEN: "Abierto",
    YearStatus.CLOSED: "Cerrado",
}


class AnioAcademico(Base):
    """Año académico con estado, marca de año operativo y sus bimestres."""

    __tablename__ = "anios_academicos"
    __table_args__ = (
        # A lo sumo un año operativo a nivel de base de datos
        Index(
            "uq_anios_academicos_operativo",
            "is_operating",
            unique=True,
            postgresql_where=text("is_operating"),
            sqlite_where=text("is_operating"),
        ),
    )

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), Identity(), primary_key=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        Text, nullable=False, default=YearStatus.PLANNING.value
    )
    is_operating: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    periods: Mapped[list["Bimestre"]] = relationship(
        "Bimestre",
        back_populates="academic_year",
        cascade="all, delete-orphan",
        order_by="[Bimestre.start_date, Bimestre.id]",
    )
