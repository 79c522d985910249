"""Modelos SQLAlchemy (tablas de la base de datos)."""
from ciclo_academico.models.academic_year import AnioAcademico, YearStatus
from ciclo_academico.models.bimestre import Bimestre
from ciclo_academico.models.student import Estudiante, EstadoAcademico

__all__ = [
    "AnioAcademico",
    "YearStatus",
    "Bimestre",
    "Estudiante",
    "EstadoAcademico",
]
