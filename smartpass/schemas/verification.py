"""Schemas verification / Verification schemas — verify call, whitelist, ledger."""

from pydantic import BaseModel, ConfigDict, Field

from smartpass.models.scan_record import TripWindow, Verdict
from smartpass.schemas.credential import ID_PATTERN


# ─── Verify ───

class VerifyRequest(BaseModel):
    """Scan conducteur / Conductor scan. Aucune heure client acceptee / No client time accepted."""
    model_config = ConfigDict(extra="ignore")
    credential_id: str = Field(pattern=ID_PATTERN)
    route_id: str = Field(pattern=ID_PATTERN)


class CredentialSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    assigned_route_id: str | None = None
    stop: str | None = None


class VerifyResponse(BaseModel):
    verdict: Verdict
    message: str
    color: str
    trip_window: TripWindow | None = None
    credential: CredentialSummary | None = None


# ─── Whitelist (sync) ───

class WhitelistEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    credential_id: str
    name: str


# ─── Ledger ───

class ScanRecordRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    credential_id: str
    route_id: str
    calendar_date: str
    trip_window: TripWindow
    verdict: Verdict
    message: str | None = None
    timestamp: str


class ScanRecordPage(BaseModel):
    total: int
    items: list[ScanRecordRead]
