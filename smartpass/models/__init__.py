"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que create_all les détecte.
Import all models here so create_all can detect them.
"""

from smartpass.models.credential import Credential, PaymentStatus
from smartpass.models.route import Route
from smartpass.models.scan_record import ScanRecord, TripWindow, Verdict

__all__ = [
    "Credential",
    "PaymentStatus",
    "Route",
    "ScanRecord",
    "TripWindow",
    "Verdict",
]
