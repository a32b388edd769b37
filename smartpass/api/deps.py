"""
Dépendances injectées dans les routes via Depends() / Dependencies injected into routes via Depends().
"""

from datetime import datetime
from typing import Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from smartpass.database import get_db
from smartpass.services.directory import CredentialDirectory, RouteRegistry
from smartpass.services.ledger import ScanLedger
from smartpass.services.trip_window import local_now
from smartpass.services.verification import VerificationService
from smartpass.services.whitelist import WhitelistService


def get_clock() -> Callable[[], datetime]:
    """Horloge du service (surchargeable en test) / Service clock (overridable in tests)."""
    return local_now


async def get_verification_service(
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> VerificationService:
    return VerificationService(db, clock=clock)


async def get_directory(db: AsyncSession = Depends(get_db)) -> CredentialDirectory:
    return CredentialDirectory(db)


async def get_registry(db: AsyncSession = Depends(get_db)) -> RouteRegistry:
    return RouteRegistry(db)


async def get_ledger(db: AsyncSession = Depends(get_db)) -> ScanLedger:
    return ScanLedger(db)


async def get_whitelist_service(db: AsyncSession = Depends(get_db)) -> WhitelistService:
    return WhitelistService(db)
