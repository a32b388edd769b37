"""Routes Journal des scans / Scan ledger API routes (lecture seule / read-only)."""

from fastapi import APIRouter, Depends, Query

from smartpass.models.scan_record import Verdict
from smartpass.schemas.verification import ScanRecordPage, ScanRecordRead
from smartpass.services.ledger import ScanLedger
from smartpass.api.deps import get_ledger

router = APIRouter()


@router.get("/", response_model=ScanRecordPage)
async def list_scans(
    credential_id: str | None = Query(default=None),
    route_id: str | None = Query(default=None),
    calendar_date: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    verdict: Verdict | None = Query(default=None),
    limit: int = Query(default=100, le=500),
    offset: int = Query(default=0, ge=0),
    ledger: ScanLedger = Depends(get_ledger),
):
    """Lister les tentatives de verification / List verification attempts."""
    total, records = await ledger.find(
        credential_id=credential_id,
        route_id=route_id,
        calendar_date=calendar_date,
        verdict=verdict,
        limit=limit,
        offset=offset,
    )
    return {"total": total, "items": [ScanRecordRead.model_validate(r) for r in records]}
