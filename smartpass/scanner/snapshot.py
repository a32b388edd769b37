"""
Snapshot hors ligne / Offline snapshot.
Sous-ensemble local des titres payes d'une ligne, remplace en bloc a chaque synchro.
Device-local subset of a route's paid credentials, replaced wholesale on each sync.
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel

from smartpass.schemas.verification import WhitelistEntry

log = logging.getLogger(__name__)


class Snapshot(BaseModel):
    route_id: str
    entries: list[WhitelistEntry]
    captured_at: str  # ISO 8601

    def find(self, credential_id: str) -> WhitelistEntry | None:
        for entry in self.entries:
            if entry.credential_id == credential_id:
                return entry
        return None


class SnapshotStore:
    """Snapshots par ligne, ecriture atomique optionnelle sur disque / Per-route snapshots, optional atomic disk write.

    Le snapshot precedent reste visible jusqu'a l'echange de reference.
    The previous snapshot stays visible until the reference swap.
    """

    def __init__(self, directory: str | Path | None = None):
        self.directory = Path(directory) if directory else None
        self._snapshots: dict[str, Snapshot] = {}
        if self.directory and self.directory.is_dir():
            for path in sorted(self.directory.glob("*.json")):
                snapshot = Snapshot.model_validate_json(path.read_text(encoding="utf-8"))
                self._snapshots[snapshot.route_id] = snapshot
            log.info("Loaded %d snapshot(s) from %s", len(self._snapshots), self.directory)

    def get(self, route_id: str) -> Snapshot | None:
        return self._snapshots.get(route_id)

    def replace(self, snapshot: Snapshot) -> None:
        if self.directory:
            self.directory.mkdir(parents=True, exist_ok=True)
            target = self.directory / f"{snapshot.route_id}.json"
            tmp = target.with_suffix(".json.tmp")
            tmp.write_text(snapshot.model_dump_json(), encoding="utf-8")
            os.replace(tmp, target)
        self._snapshots[snapshot.route_id] = snapshot
