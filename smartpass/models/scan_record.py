"""Modele Journal des scans / Scan ledger record model."""

import enum

from sqlalchemy import Enum, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from smartpass.database import Base


class TripWindow(str, enum.Enum):
    """Fenetre de trajet / Trip window."""
    MORNING = "Morning"
    AFTERNOON = "Afternoon"


class Verdict(str, enum.Enum):
    """Resultat d'une verification / Verification outcome."""
    VALID = "Valid"
    DUPLICATE = "Duplicate"
    INVALID = "Invalid"
    ERROR = "Error"


class ScanRecord(Base):
    """Tentative de verification (immuable) / Verification attempt (immutable)."""
    __tablename__ = "scan_records"
    __table_args__ = (
        # Au plus un Valid par (titre, ligne, jour, fenetre) / At most one Valid per boarding key.
        # Les enums sont stockes par nom / Enums are stored by name.
        Index(
            "uq_scan_records_valid_boarding",
            "credential_id", "route_id", "calendar_date", "trip_window",
            unique=True,
            sqlite_where=text("verdict = 'VALID'"),
            postgresql_where=text("verdict = 'VALID'"),
        ),
        Index("ix_scan_records_lookup", "credential_id", "route_id", "calendar_date", "trip_window"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    credential_id: Mapped[str] = mapped_column(String(50), nullable=False)
    route_id: Mapped[str] = mapped_column(String(50), nullable=False)
    calendar_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    trip_window: Mapped[TripWindow] = mapped_column(Enum(TripWindow), nullable=False)
    verdict: Mapped[Verdict] = mapped_column(Enum(Verdict), nullable=False)
    message: Mapped[str | None] = mapped_column(Text)
    timestamp: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601

    def __repr__(self) -> str:
        return f"<ScanRecord {self.verdict.value} {self.credential_id}@{self.route_id} {self.calendar_date} {self.trip_window.value}>"
