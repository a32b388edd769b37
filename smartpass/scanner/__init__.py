"""
Cote appareil (scanner conducteur) / Device side (conductor scanner).
Aucun acces base de donnees : service distant + snapshot local.
No database access: remote service + local snapshot.
"""

from smartpass.scanner.client import VerificationClient
from smartpass.scanner.device import ScannerDevice, parse_scan_payload
from smartpass.scanner.fallback import SnapshotSource, verify_local
from smartpass.scanner.feedback import Feedback
from smartpass.scanner.ledger import LocalLedger, LocalScan
from smartpass.scanner.snapshot import Snapshot, SnapshotStore

__all__ = [
    "VerificationClient",
    "ScannerDevice",
    "parse_scan_payload",
    "SnapshotSource",
    "verify_local",
    "Feedback",
    "LocalLedger",
    "LocalScan",
    "Snapshot",
    "SnapshotStore",
]
