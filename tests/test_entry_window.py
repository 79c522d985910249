from datetime import date, datetime, timezone

import pytest

from ciclo_academico.models.academic_year import YearStatus
from ciclo_academico.schemas.academic_year import EntryBadge, EntryReason, Period, Year
from ciclo_academico.services import entry_window
from ciclo_academico.services.entry_window import (
    can_enroll,
    can_enter_data,
    can_modify_academic_data,
    entry_badge,
    is_in_window,
    school_today,
)


def bimestre(**kwargs) -> Period:
    datos = dict(
        id=1, name="I", start_date=date(2025, 3, 1), end_date=date(2025, 5, 15),
        is_locked=False, is_force_open=False,
    )
    datos.update(kwargs)
    return Period(**datos)


def anio(status=YearStatus.OPEN, is_operating=True) -> Year:
    return Year(id=2025, year=2025, status=status, is_operating=is_operating)


def test_escenario_a_dentro_de_la_ventana():
    check = can_enter_data(bimestre(), anio(), date(2025, 4, 1))
    assert check.allowed is True
    assert check.reason == EntryReason.PERMITTED
    assert check.in_window is True
    assert check.forced is False
    assert check.year_active is True


def test_escenario_b_pasada_la_ventana():
    check = can_enter_data(bimestre(), anio(), date(2025, 6, 1))
    assert check.allowed is False
    assert check.reason == EntryReason.OUTSIDE_WINDOW
    assert check.in_window is False
    assert check.forced is False


def test_ventana_inclusiva_en_ambos_extremos():
    assert is_in_window(bimestre(), date(2025, 3, 1))
    assert is_in_window(bimestre(), date(2025, 5, 15))
    assert not is_in_window(bimestre(), date(2025, 2, 28))
    assert not is_in_window(bimestre(), date(2025, 5, 16))


def test_la_hora_del_dia_no_cuenta():
    assert can_enter_data(bimestre(), anio(), datetime(2025, 5, 15, 23, 59)).allowed


def test_bloqueado_rechaza_aun_dentro_de_la_ventana():
    check = can_enter_data(bimestre(is_locked=True), anio(), date(2025, 4, 1))
    assert check.allowed is False
    assert check.reason == EntryReason.PERIOD_LOCKED
    assert check.in_window is True


@pytest.mark.parametrize("bloqueado", [True, False])
def test_apertura_forzada_fuera_de_fechas_y_con_candado(bloqueado):
    check = can_enter_data(
        bimestre(is_locked=bloqueado, is_force_open=True), anio(), date(2025, 9, 1)
    )
    assert check.allowed is True
    assert check.forced is True
    assert check.in_window is False
    assert check.reason == EntryReason.PERMITTED


@pytest.mark.parametrize("bloqueado", [True, False])
@pytest.mark.parametrize("forzado", [True, False])
@pytest.mark.parametrize("fecha", [date(2025, 4, 1), date(2025, 9, 1)])
def test_anio_no_operativo_rechaza_siempre(bloqueado, forzado, fecha):
    check = can_enter_data(
        bimestre(is_locked=bloqueado, is_force_open=forzado), anio(is_operating=False), fecha
    )
    assert check.allowed is False
    assert check.reason == EntryReason.YEAR_NOT_OPERATING
    assert check.year_active is False
    assert check.forced is forzado


def test_force_open_ausente_equivale_a_falso():
    period = Period.model_validate(
        {"id": 1, "name": "I", "start_date": "2025-03-01", "end_date": "2025-05-15",
         "is_locked": True, "is_force_open": None}
    )
    assert period.is_force_open is False
    assert can_enter_data(period, anio(), date(2025, 4, 1)).reason == EntryReason.PERIOD_LOCKED


@pytest.mark.parametrize(
    "status,operativo,matricula,notas",
    [
        (YearStatus.PLANNING, False, True, False),
        (YearStatus.PLANNING, True, True, False),
        (YearStatus.OPEN, False, True, False),
        (YearStatus.OPEN, True, True, True),
        (YearStatus.CLOSED, False, False, False),
        (YearStatus.CLOSED, True, False, False),
    ],
)
def test_matricula_y_datos_academicos_son_reglas_distintas(status, operativo, matricula, notas):
    year = anio(status=status, is_operating=operativo)
    assert can_enroll(year) is matricula
    assert can_modify_academic_data(year) is notas


def test_insignias():
    assert entry_badge(can_enter_data(bimestre(), anio(is_operating=False), date(2025, 4, 1))) == EntryBadge.YEAR_INACTIVE
    assert entry_badge(can_enter_data(bimestre(), anio(), date(2025, 4, 1))) == EntryBadge.OPEN
    assert entry_badge(can_enter_data(bimestre(is_force_open=True), anio(), date(2025, 4, 1))) == EntryBadge.FORCED_OPEN
    assert entry_badge(can_enter_data(bimestre(), anio(), date(2025, 6, 1))) == EntryBadge.OUT_OF_WINDOW
    assert entry_badge(can_enter_data(bimestre(is_locked=True), anio(), date(2025, 4, 1))) == EntryBadge.DISABLED


def test_mensajes_de_motivo():
    assert EntryReason.PERIOD_LOCKED.message == "El bimestre está bloqueado"
    assert EntryReason.OUTSIDE_WINDOW.message == "Fuera del período de evaluación"


class RelojUTC(datetime):
    """Reloj fijo en 2025-05-16 02:00 UTC, que en Lima es aún 2025-05-15 21:00."""

    @classmethod
    def now(cls, tz=None):
        return datetime(2025, 5, 16, 2, 0, tzinfo=timezone.utc).astimezone(tz)


@pytest.fixture
def reloj_utc(monkeypatch):
    monkeypatch.setattr(entry_window, "datetime", RelojUTC)


def test_hoy_usa_la_zona_horaria_del_colegio(reloj_utc, monkeypatch):
    monkeypatch.setattr(entry_window.settings, "school_timezone", "America/Lima")
    assert school_today() == date(2025, 5, 15)
    monkeypatch.setattr(entry_window.settings, "school_timezone", "UTC")
    assert school_today() == date(2025, 5, 16)


def test_sin_fecha_la_ventana_se_evalua_con_el_dia_del_colegio(reloj_utc, monkeypatch):
    monkeypatch.setattr(entry_window.settings, "school_timezone", "America/Lima")
    assert is_in_window(bimestre())
    check = can_enter_data(bimestre(), anio())
    assert check.allowed is True
    assert check.reason == EntryReason.PERMITTED
