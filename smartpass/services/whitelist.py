"""
Service liste blanche / Whitelist service.
Cote serveur de la synchronisation hors ligne : titres payes assignes a une ligne.
Server side of the offline sync: paid credentials assigned to a route.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from smartpass.models.credential import PaymentStatus
from smartpass.schemas.verification import WhitelistEntry
from smartpass.services.directory import CredentialDirectory


class WhitelistService:
    def __init__(self, db: AsyncSession):
        self.directory = CredentialDirectory(db)

    async def entries_for(self, route_id: str) -> list[WhitelistEntry]:
        """Entrees triees par id / Entries ordered by id."""
        credentials = await self.directory.find(route_id=route_id, payment_status=PaymentStatus.PAID)
        return [WhitelistEntry(credential_id=c.id, name=c.name) for c in credentials]
