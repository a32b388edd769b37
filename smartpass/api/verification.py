"""Endpoint verification conducteur / Conductor verification endpoint.

Les verdicts metier (Invalid, Duplicate) sont des reponses 200 : ne pas rejouer.
Business verdicts (Invalid, Duplicate) are 200 responses: callers must not retry.
"""

from fastapi import APIRouter, Depends, Request

from smartpass.config import settings
from smartpass.rate_limit import limiter
from smartpass.schemas.verification import CredentialSummary, VerifyRequest, VerifyResponse
from smartpass.services.verification import VerificationService
from smartpass.api.deps import get_verification_service

router = APIRouter()


@router.post("/verify-pass", response_model=VerifyResponse)
@limiter.limit(settings.RATE_LIMIT_VERIFY)
async def verify_pass(
    request: Request,
    data: VerifyRequest,
    service: VerificationService = Depends(get_verification_service),
):
    """Verifier un titre scanne / Verify a scanned credential.
    Une requete mal formee est rejetee (422) avant toute lecture et n'est pas journalisee.
    """
    decision = await service.verify(data.credential_id, data.route_id)
    credential = None
    if decision.credential is not None:
        credential = CredentialSummary(
            id=decision.credential.id,
            name=decision.credential.name,
            assigned_route_id=decision.credential.assigned_route_id,
            stop=decision.credential.stop,
        )
    return VerifyResponse(
        verdict=decision.verdict,
        message=decision.message,
        color=decision.color,
        trip_window=decision.trip_window,
        credential=credential,
    )
