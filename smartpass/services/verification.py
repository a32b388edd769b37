"""
Service de verification / Verification service.
Sans etat : annuaire + journal injectes, horloge du service uniquement.
Stateless: injected directory + ledger, service clock only.
"""

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from smartpass.errors import ConflictError, TransientError
from smartpass.models.scan_record import TripWindow
from smartpass.services.decision import (
    CredentialView,
    Decision,
    Reason,
    build_decision,
    decide,
)
from smartpass.services.directory import CredentialDirectory
from smartpass.services.ledger import ScanLedger
from smartpass.services.trip_window import local_now

log = logging.getLogger(__name__)


class DirectorySource:
    """Source annuaire + journal serveur / Directory + server ledger source."""

    messages = {
        Reason.NOT_FOUND: "Credential {credential_id} not found in system.",
        Reason.UNPAID: "Payment outstanding. Access denied.",
        Reason.WRONG_ROUTE: "Wrong route, expected {assigned_route_id}.",
        Reason.DUPLICATE: "Pass already verified for the {trip_window} Trip today.",
        Reason.GRANTED: "Access granted for {trip_window} Trip. Welcome aboard.",
    }

    def __init__(self, directory: CredentialDirectory, ledger: ScanLedger):
        self.directory = directory
        self.ledger = ledger

    async def lookup(self, credential_id: str) -> CredentialView | None:
        return await self.directory.view(credential_id)

    async def has_boarded(
        self,
        credential_id: str,
        route_id: str,
        trip_window: TripWindow,
        calendar_date: str,
        now: datetime,
    ) -> bool:
        return await self.ledger.has_valid(credential_id, route_id, calendar_date, trip_window)


class VerificationService:
    def __init__(
        self,
        db: AsyncSession,
        clock: Callable[[], datetime] = local_now,
    ):
        self.db = db
        self.clock = clock
        self.ledger = ScanLedger(db)
        self.source = DirectorySource(CredentialDirectory(db), self.ledger)

    async def verify(self, credential_id: str, route_id: str) -> Decision:
        """Decider et journaliser exactement un enregistrement / Decide and log exactly one record.

        Les identifiants sont deja valides par le schema de requete.
        Identifiers are already validated by the request schema.
        """
        now = self.clock()
        try:
            decision = await decide(self.source, credential_id, route_id, now)
            try:
                await self.ledger.append(decision, credential_id, route_id, now)
            except ConflictError:
                # Un appel concurrent a gagne l'ecriture Valid / A concurrent call won the Valid write
                decision = build_decision(
                    self.source, Reason.DUPLICATE, credential_id, now, decision.credential,
                )
                await self.ledger.append(decision, credential_id, route_id, now)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            log.warning("Verification %s@%s aborted, store unavailable: %s", credential_id, route_id, exc)
            raise TransientError("Verification store unavailable") from exc

        log.info(
            "Verify %s@%s %s %s -> %s (%s)",
            credential_id, route_id, decision.calendar_date, decision.trip_window.value,
            decision.verdict.value, decision.reason.value,
        )
        return decision
