"""
Seed des donnees de demo / Demo data seeding.
Crée deux lignes et quelques titres au premier démarrage si la base est vide.
Creates two routes and a few credentials on first startup if the database is empty.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from smartpass.models.credential import Credential, PaymentStatus
from smartpass.models.route import Route
from smartpass.services.directory import RouteRegistry

log = logging.getLogger(__name__)

DEMO_ROUTES = [
    {"id": "B101", "route_name": "North Campus Loop", "driver_name": "Ramesh", "capacity": 40, "conductor_password": "buspass"},
    {"id": "B102", "route_name": "City Centre Express", "driver_name": "Suresh", "capacity": 52, "conductor_password": "buspass"},
]

DEMO_CREDENTIALS = [
    {"id": "S001", "name": "Asha Verma", "payment_status": PaymentStatus.PAID, "assigned_route_id": "B101", "stop": "Main Gate"},
    {"id": "S002", "name": "Rahul Nair", "payment_status": PaymentStatus.UNPAID, "assigned_route_id": "B101", "stop": "Library"},
    {"id": "S003", "name": "Meera Iyer", "payment_status": PaymentStatus.PAID, "assigned_route_id": "B102", "stop": "Market Road"},
]


async def seed_demo_data(session: AsyncSession) -> None:
    """Créer les données de démo sur base vide / Create demo data on an empty database."""
    credentials = (await session.execute(select(func.count(Credential.id)))).scalar()
    routes = (await session.execute(select(func.count(Route.id)))).scalar()

    if credentials or routes:
        log.info("%s route(s), %s credential(s) present, demo seed skipped", routes, credentials)
        return

    registry = RouteRegistry(session)
    for route in DEMO_ROUTES:
        await registry.create(dict(route))
    for credential in DEMO_CREDENTIALS:
        await registry.directory.create(dict(credential))
    await session.commit()
    log.info("Demo data seeded: %d routes, %d credentials", len(DEMO_ROUTES), len(DEMO_CREDENTIALS))
