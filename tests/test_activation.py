from itertools import product

from ciclo_academico.models.academic_year import YearStatus
from ciclo_academico.schemas.academic_year import Year, YearPatch
from ciclo_academico.services.activation import (
    YEAR_NOT_FOUND_ERROR,
    apply_patches,
    plan_activation,
)


def anio(id_, status, is_operating=False) -> Year:
    return Year(id=id_, year=id_, status=status, is_operating=is_operating)


def test_escenario_c_activa_2026_y_cierra_2025():
    years = [anio(2025, YearStatus.OPEN, True), anio(2026, YearStatus.PLANNING)]
    plan = plan_activation(2026, years)
    assert plan.success
    assert plan.updates == [
        YearPatch(id=2026, is_operating=True, status=YearStatus.OPEN),
        YearPatch(id=2025, is_operating=False, status=YearStatus.CLOSED),
    ]


def test_objetivo_inexistente_no_lanza():
    plan = plan_activation(1999, [anio(2025, YearStatus.OPEN, True)])
    assert not plan.success
    assert plan.updates == []
    assert plan.errors == [YEAR_NOT_FOUND_ERROR]
    assert plan.promotion is None


def test_reafirma_el_anio_ya_operativo():
    years = [anio(2025, YearStatus.OPEN, True), anio(2024, YearStatus.CLOSED)]
    plan = plan_activation(2025, years)
    assert plan.updates == [YearPatch(id=2025, is_operating=True, status=YearStatus.OPEN)]
    assert plan.demotions == []


def test_tolera_varios_anios_operativos():
    years = [
        anio(2023, YearStatus.OPEN, True),
        anio(2024, YearStatus.CLOSED, True),
        anio(2025, YearStatus.PLANNING, True),
        anio(2026, YearStatus.PLANNING),
    ]
    plan = plan_activation(2026, years)
    degradados = {p.id: p for p in plan.demotions}
    assert set(degradados) == {2023, 2024, 2025}
    assert degradados[2023].status == YearStatus.CLOSED
    assert degradados[2024].status == YearStatus.CLOSED
    # Planificación no es destino válido de degradación: se conserva
    assert degradados[2025].status == YearStatus.PLANNING
    assert all(p.is_operating is False for p in plan.demotions)


def test_no_toca_anios_no_operativos():
    years = [anio(2024, YearStatus.OPEN), anio(2025, YearStatus.PLANNING)]
    plan = plan_activation(2025, years)
    assert [p.id for p in plan.updates] == [2025]


def test_siempre_queda_exactamente_un_anio_operativo():
    estados = list(YearStatus)
    for combinacion in product(product(estados, [True, False]), repeat=3):
        years = [anio(2023 + i, status, op) for i, (status, op) in enumerate(combinacion)]
        for objetivo in years:
            resultado = apply_patches(years, plan_activation(objetivo.id, years).updates)
            operativos = [y for y in resultado if y.is_operating]
            assert [y.id for y in operativos] == [objetivo.id]
            assert operativos[0].status == YearStatus.OPEN


def test_plan_es_puro():
    years = [anio(2025, YearStatus.OPEN, True), anio(2026, YearStatus.PLANNING)]
    plan_activation(2026, years)
    assert years[0].is_operating is True
    assert years[1].status == YearStatus.PLANNING
