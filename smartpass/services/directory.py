"""
Annuaire des titres et registre des lignes / Credential directory and route registry.
Collaborateurs de stockage injectes (session par requete) / Injected storage collaborators (per-request session).
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartpass.errors import ConflictError, NotFoundError, ValidationError
from smartpass.models.credential import Credential, PaymentStatus
from smartpass.models.route import Route
from smartpass.services.decision import CredentialView
from smartpass.utils.auth import hash_password

log = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _apply_changes(instance, changes: dict) -> None:
    """Appliquer une mise a jour partielle / Apply a partial update.
    null refuse sur une colonne NOT NULL / null rejected on a NOT NULL column.
    """
    columns = instance.__table__.columns
    for key, value in changes.items():
        if value is None and not columns[key].nullable:
            raise ValidationError(f"{key} cannot be null")
    for key, value in changes.items():
        setattr(instance, key, value)


class CredentialDirectory:
    """Lecture et gestion des titres / Credential reads and management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, credential_id: str) -> Credential | None:
        return await self.db.get(Credential, credential_id)

    async def view(self, credential_id: str) -> CredentialView | None:
        """Copie detachee de la session / Copy detached from the session."""
        credential = await self.get(credential_id)
        if credential is None:
            return None
        return CredentialView(
            id=credential.id,
            name=credential.name,
            payment_status=credential.payment_status,
            assigned_route_id=credential.assigned_route_id,
            stop=credential.stop,
        )

    async def find(
        self,
        route_id: str | None = None,
        payment_status: PaymentStatus | None = None,
    ) -> list[Credential]:
        """Scan filtre, trie par id / Filtered scan, ordered by id."""
        query = select(Credential).order_by(Credential.id)
        if route_id is not None:
            query = query.where(Credential.assigned_route_id == route_id)
        if payment_status is not None:
            query = query.where(Credential.payment_status == payment_status)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def any_assigned_to(self, route_id: str) -> bool:
        result = await self.db.execute(
            select(Credential.id).where(Credential.assigned_route_id == route_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def create(self, data: dict) -> Credential:
        if await self.get(data["id"]) is not None:
            raise ConflictError(f"Credential {data['id']} already exists")
        credential = Credential(**data, created_at=_now_iso())
        self.db.add(credential)
        await self.db.flush()
        log.info("Credential %s created on route %s", credential.id, credential.assigned_route_id)
        return credential

    async def update(self, credential_id: str, changes: dict) -> Credential:
        credential = await self.get(credential_id)
        if credential is None:
            raise NotFoundError(f"Credential {credential_id} not found")
        _apply_changes(credential, changes)
        await self.db.flush()
        return credential

    async def delete(self, credential_id: str) -> None:
        credential = await self.get(credential_id)
        if credential is None:
            raise NotFoundError(f"Credential {credential_id} not found")
        await self.db.delete(credential)
        await self.db.flush()


class RouteRegistry:
    """Lecture et gestion des lignes / Route reads and management."""

    def __init__(self, db: AsyncSession, directory: CredentialDirectory | None = None):
        self.db = db
        self.directory = directory or CredentialDirectory(db)

    async def get(self, route_id: str) -> Route | None:
        return await self.db.get(Route, route_id)

    async def find_all(self) -> list[Route]:
        result = await self.db.execute(select(Route).order_by(Route.id))
        return list(result.scalars().all())

    async def create(self, data: dict) -> Route:
        if await self.get(data["id"]) is not None:
            raise ConflictError(f"Route {data['id']} already exists")
        password = data.pop("conductor_password")
        route = Route(**data, conductor_credential_hash=hash_password(password))
        self.db.add(route)
        await self.db.flush()
        log.info("Route %s created", route.id)
        return route

    async def update(self, route_id: str, changes: dict) -> Route:
        route = await self.get(route_id)
        if route is None:
            raise NotFoundError(f"Route {route_id} not found")
        password = changes.pop("conductor_password", None)
        if password:
            route.conductor_credential_hash = hash_password(password)
        _apply_changes(route, changes)
        await self.db.flush()
        return route

    async def delete(self, route_id: str) -> None:
        """Supprimer une ligne sans titre assigne / Delete a route with no assigned credential."""
        route = await self.get(route_id)
        if route is None:
            raise NotFoundError(f"Route {route_id} not found")
        if await self.directory.any_assigned_to(route_id):
            log.warning("Refused deletion of route %s: credentials still assigned", route_id)
            raise ConflictError(
                f"Cannot delete route {route_id}. Credentials are currently assigned to this route."
            )
        await self.db.delete(route)
        await self.db.flush()
        log.info("Route %s deleted", route_id)
