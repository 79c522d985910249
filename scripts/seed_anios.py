"""Crea el año académico actual y el siguiente, y activa el actual si no hay año operativo."""
import asyncio
import logging

from ciclo_academico.core.database import AsyncSessionLocal, init_db
from ciclo_academico.models import *  # noqa: F401, F403
from ciclo_academico.models.academic_year import YearStatus
from ciclo_academico.services.entry_window import school_today
from ciclo_academico.services.lifecycle_service import LifecycleService
from ciclo_academico.services.student_status import SqlStudentStatusReset
from ciclo_academico.services.year_repository import SqlYearRepository


async def sembrar_anios(service: LifecycleService, actual: int) -> list[int]:
    """Crea `actual` y `actual + 1` si faltan; devuelve los años creados."""
    existentes = {y.year: y for y in await service.load_years()}
    print("Años existentes en la BD:", sorted(existentes) if existentes else "(ninguno)")

    creados = []
    for valor in (actual, actual + 1):
        if valor not in existentes:
            existentes[valor] = await service.create_year(valor)
            creados.append(valor)

    if await service.get_operating_year() is None:
        if existentes[actual].status == YearStatus.CLOSED:
            print(f"Año {actual} está cerrado; no se activa. Reabrirlo desde planificación")
        else:
            await service.activate_year(existentes[actual].id)
            print(f"Año {actual} activado como año operativo")
    return creados


async def seed_anios():
    await init_db()
    async with AsyncSessionLocal() as session:
        service = LifecycleService(SqlYearRepository(session), SqlStudentStatusReset(session))
        creados = await sembrar_anios(service, school_today().year)
        await session.commit()
        print(f"Años creados: {creados}" if creados else "No se crearon años nuevos")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed_anios())
