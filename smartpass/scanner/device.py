"""
Scanner conducteur / Conductor scanner.
Distant d'abord, repli local seulement si l'appel distant n'aboutit pas.
Remote first, local fallback only when the remote call fails to complete.
"""

import asyncio
import json
import logging
import re
from datetime import datetime, timedelta
from typing import Callable

from smartpass.config import settings
from smartpass.errors import SyncRequiredError, TransientError, ValidationError
from smartpass.models.scan_record import Verdict
from smartpass.scanner.client import VerificationClient
from smartpass.scanner.feedback import Feedback
from smartpass.scanner.fallback import verify_local
from smartpass.scanner.ledger import LocalLedger, LocalScan
from smartpass.scanner.snapshot import Snapshot, SnapshotStore
from smartpass.schemas.credential import ID_PATTERN
from smartpass.services.trip_window import TripWindowService, local_now

log = logging.getLogger(__name__)

_ID_RE = re.compile(ID_PATTERN)


def parse_scan_payload(payload: str) -> str:
    """Extraire l'id du titre d'un QR decode / Extract the credential id from a decoded QR.

    Accepte {"credentialId": "..."} ou un id brut / Accepts {"credentialId": "..."} or a bare id.
    """
    text = (payload or "").strip()
    credential_id = text
    if text.startswith("{"):
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ValidationError("QR code not recognizable.") from exc
        if not isinstance(data, dict):
            raise ValidationError("QR code not recognizable.")
        credential_id = data.get("credentialId") or data.get("credential_id")
    if not isinstance(credential_id, str) or not _ID_RE.match(credential_id):
        raise ValidationError("QR code not recognizable.")
    return credential_id


class ScannerDevice:
    """Appareil d'une ligne : scans et synchro jamais simultanes.
    Device bound to one route: scans and sync never run concurrently.
    """

    def __init__(
        self,
        route_id: str,
        client: VerificationClient,
        store: SnapshotStore | None = None,
        ledger: LocalLedger | None = None,
        clock: Callable[[], datetime] = local_now,
        duplicate_window: timedelta | None = None,
    ):
        self.route_id = route_id
        self.client = client
        self.store = store or SnapshotStore(settings.SNAPSHOT_PATH)
        self.ledger = ledger or LocalLedger()
        self.clock = clock
        self.duplicate_window = duplicate_window or timedelta(seconds=settings.LOCAL_DUPLICATE_WINDOW_SECONDS)
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> Snapshot | None:
        return self.store.get(self.route_id)

    def history(self) -> list[LocalScan]:
        """Historique des scans affiches, plus recent d'abord / Shown scans, newest first."""
        return self.ledger.entries()

    async def sync(self) -> Snapshot:
        """Telecharger la liste blanche et remplacer le snapshot / Download the whitelist and replace the snapshot.

        En cas d'echec, l'ancien snapshot reste en place / On failure, the previous snapshot stays.
        """
        async with self._lock:
            entries = await self.client.fetch_whitelist(self.route_id)
            snapshot = Snapshot(
                route_id=self.route_id,
                entries=entries,
                captured_at=TripWindowService.timestamp(self.clock()),
            )
            self.store.replace(snapshot)
        log.info("Snapshot for route %s synced: %d entries", self.route_id, len(entries))
        return snapshot

    async def scan(self, payload: str) -> Feedback:
        try:
            credential_id = parse_scan_payload(payload)
        except ValidationError as exc:
            return Feedback(verdict=Verdict.INVALID, message=exc.message)

        async with self._lock:
            try:
                response = await self.client.verify(credential_id, self.route_id)
            except TransientError:
                log.warning("Server unreachable, verifying %s offline", credential_id)
                return await self._verify_offline(credential_id)
            except ValidationError as exc:
                return Feedback(verdict=Verdict.ERROR, message=exc.message, credential_id=credential_id)

            # Verdict atteint : definitif / Reached verdict: final
            feedback = Feedback.from_response(response)
            self._record(credential_id, feedback)
            return feedback

    async def _verify_offline(self, credential_id: str) -> Feedback:
        now = self.clock()
        try:
            decision = await verify_local(
                credential_id, self.route_id, self.ledger, self.snapshot, now, self.duplicate_window,
            )
        except SyncRequiredError as exc:
            return Feedback(verdict=Verdict.ERROR, message=exc.message, offline=True, credential_id=credential_id)
        feedback = Feedback.from_decision(decision, offline=True)
        self._record(credential_id, feedback, now)
        return feedback

    def _record(self, credential_id: str, feedback: Feedback, now: datetime | None = None) -> None:
        self.ledger.append(LocalScan(
            credential_id=credential_id,
            route_id=self.route_id,
            verdict=feedback.verdict,
            message=feedback.message,
            timestamp=now or self.clock(),
            offline=feedback.offline,
        ))
