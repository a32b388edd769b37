"""
Journal des scans / Scan ledger.
Ajout seul : aucune mise a jour ni suppression / Append-only: no update nor delete.
"""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from smartpass.errors import ConflictError
from smartpass.models.scan_record import ScanRecord, TripWindow, Verdict
from smartpass.services.decision import Decision
from smartpass.services.trip_window import TripWindowService


class ScanLedger:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def has_valid(
        self,
        credential_id: str,
        route_id: str,
        calendar_date: str,
        trip_window: TripWindow,
    ) -> bool:
        """Un Valid existe-t-il deja pour cette cle ? / Does a Valid already exist for this key?"""
        result = await self.db.execute(
            select(ScanRecord.id).where(
                ScanRecord.credential_id == credential_id,
                ScanRecord.route_id == route_id,
                ScanRecord.calendar_date == calendar_date,
                ScanRecord.trip_window == trip_window,
                ScanRecord.verdict == Verdict.VALID,
            ).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def append(
        self,
        decision: Decision,
        credential_id: str,
        route_id: str,
        now: datetime,
    ) -> ScanRecord:
        """Ajouter un enregistrement / Append one record.

        Un second Valid pour la meme cle viole l'index unique partiel : la transaction
        est annulee et ConflictError est levee.
        A second Valid for the same key violates the partial unique index: the
        transaction is rolled back and ConflictError is raised.
        """
        record = ScanRecord(
            credential_id=credential_id,
            route_id=route_id,
            calendar_date=decision.calendar_date,
            trip_window=decision.trip_window,
            verdict=decision.verdict,
            message=decision.message,
            timestamp=TripWindowService.timestamp(now),
        )
        self.db.add(record)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            await self.db.rollback()
            raise ConflictError(
                f"Valid boarding already recorded for {credential_id}@{route_id} "
                f"{decision.calendar_date} {decision.trip_window.value}"
            ) from exc
        return record

    async def find(
        self,
        credential_id: str | None = None,
        route_id: str | None = None,
        calendar_date: str | None = None,
        verdict: Verdict | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[int, list[ScanRecord]]:
        """Lire le journal, plus recent d'abord / Read the ledger, newest first."""
        query = select(ScanRecord).order_by(ScanRecord.id.desc())
        count_query = select(func.count(ScanRecord.id))

        filters = []
        if credential_id:
            filters.append(ScanRecord.credential_id == credential_id)
        if route_id:
            filters.append(ScanRecord.route_id == route_id)
        if calendar_date:
            filters.append(ScanRecord.calendar_date == calendar_date)
        if verdict:
            filters.append(ScanRecord.verdict == verdict)
        if filters:
            query = query.where(*filters)
            count_query = count_query.where(*filters)

        total = await self.db.scalar(count_query) or 0
        result = await self.db.execute(query.offset(offset).limit(limit))
        return total, list(result.scalars().all())
