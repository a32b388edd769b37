"""
Verification locale de repli / Local verification fallback.
Meme procedure de decision que le serveur, sur le snapshot et le journal local.
Same decision procedure as the server, over the snapshot and the local ledger.
"""

from datetime import datetime, timedelta

from smartpass.config import settings
from smartpass.errors import SyncRequiredError
from smartpass.models.credential import PaymentStatus
from smartpass.models.scan_record import TripWindow
from smartpass.scanner.ledger import LocalLedger
from smartpass.scanner.snapshot import Snapshot
from smartpass.services.decision import CredentialView, Decision, Reason, decide


class SnapshotSource:
    """Source snapshot + journal local / Snapshot + local ledger source.

    Le snapshot ne contient que des titres payes de la ligne : un titre absent
    (inconnu ou impaye) donne simplement "pas sur la liste".
    The snapshot only holds paid credentials of the route: an absent one
    (unknown or unpaid) is simply "not on list".
    """

    messages = {
        Reason.NOT_FOUND: "Not on paid/assigned list (offline check).",
        Reason.UNPAID: "Not on paid/assigned list (offline check).",
        Reason.WRONG_ROUTE: "Not on paid/assigned list (offline check).",
        Reason.DUPLICATE: "Scanned recently (offline check).",
        Reason.GRANTED: "Welcome aboard, {first_name}! (offline)",
    }

    def __init__(self, snapshot: Snapshot, ledger: LocalLedger, duplicate_window: timedelta):
        self.snapshot = snapshot
        self.ledger = ledger
        self.duplicate_window = duplicate_window

    async def lookup(self, credential_id: str) -> CredentialView | None:
        entry = self.snapshot.find(credential_id)
        if entry is None:
            return None
        return CredentialView(
            id=entry.credential_id,
            name=entry.name,
            payment_status=PaymentStatus.PAID,
            assigned_route_id=self.snapshot.route_id,
        )

    async def has_boarded(
        self,
        credential_id: str,
        route_id: str,
        trip_window: TripWindow,
        calendar_date: str,
        now: datetime,
    ) -> bool:
        # Fenetre glissante, pas de fenetre de trajet / Trailing window, not the trip window
        return self.ledger.recent_valid(credential_id, route_id, now, self.duplicate_window) is not None


async def verify_local(
    credential_id: str,
    route_id: str,
    ledger: LocalLedger,
    snapshot: Snapshot | None,
    now: datetime,
    duplicate_window: timedelta | None = None,
) -> Decision:
    """Verifier sans reseau / Verify without network access.

    Sans snapshot pour la ligne, refuse de statuer (SyncRequiredError) plutot
    que de tout refuser.
    """
    if snapshot is None:
        raise SyncRequiredError("Server offline. Please sync first.")
    if snapshot.route_id != route_id:
        raise SyncRequiredError(f"Snapshot is for route {snapshot.route_id}. Please sync route {route_id} first.")

    window = duplicate_window or timedelta(seconds=settings.LOCAL_DUPLICATE_WINDOW_SECONDS)
    return await decide(SnapshotSource(snapshot, ledger, window), credential_id, route_id, now)
