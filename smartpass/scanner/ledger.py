"""Journal local de l'appareil / Device-local scan ledger (en memoire, ephemere / in-memory, ephemeral)."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from smartpass.models.scan_record import Verdict


@dataclass(frozen=True)
class LocalScan:
    credential_id: str
    route_id: str
    verdict: Verdict
    message: str
    timestamp: datetime
    offline: bool = False


class LocalLedger:
    """Sequence en ajout seul, un scan a la fois / Append-only sequence, one scan at a time."""

    def __init__(self):
        self._entries: list[LocalScan] = []

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, scan: LocalScan) -> None:
        self._entries.append(scan)

    def entries(self) -> list[LocalScan]:
        """Plus recent d'abord / Newest first."""
        return list(reversed(self._entries))

    def recent_valid(
        self,
        credential_id: str,
        route_id: str,
        now: datetime,
        window: timedelta,
    ) -> LocalScan | None:
        """Dernier Valid dans la fenetre glissante / Latest Valid within the trailing window."""
        for scan in reversed(self._entries):
            if now - scan.timestamp >= window:
                continue
            if (
                scan.credential_id == credential_id
                and scan.route_id == route_id
                and scan.verdict == Verdict.VALID
            ):
                return scan
        return None
