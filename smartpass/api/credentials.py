"""Routes Titres de transport / Credential API routes."""

from fastapi import APIRouter, Depends, HTTPException

from smartpass.models.credential import PaymentStatus
from smartpass.schemas.credential import CredentialCreate, CredentialRead, CredentialUpdate
from smartpass.services.directory import CredentialDirectory
from smartpass.api.deps import get_directory

router = APIRouter()


@router.get("/", response_model=list[CredentialRead])
async def list_credentials(
    route_id: str | None = None,
    payment_status: PaymentStatus | None = None,
    directory: CredentialDirectory = Depends(get_directory),
):
    """Lister les titres, filtres par ligne / statut / List credentials, filtered by route / status."""
    return await directory.find(route_id=route_id, payment_status=payment_status)


@router.get("/{credential_id}", response_model=CredentialRead)
async def get_credential(
    credential_id: str,
    directory: CredentialDirectory = Depends(get_directory),
):
    credential = await directory.get(credential_id)
    if not credential:
        raise HTTPException(status_code=404, detail="Credential not found")
    return credential


@router.post("/", response_model=CredentialRead, status_code=201)
async def create_credential(
    data: CredentialCreate,
    directory: CredentialDirectory = Depends(get_directory),
):
    return await directory.create(data.model_dump())


@router.put("/{credential_id}", response_model=CredentialRead)
async def update_credential(
    credential_id: str,
    data: CredentialUpdate,
    directory: CredentialDirectory = Depends(get_directory),
):
    return await directory.update(credential_id, data.model_dump(exclude_unset=True))


@router.delete("/{credential_id}", status_code=204)
async def delete_credential(
    credential_id: str,
    directory: CredentialDirectory = Depends(get_directory),
):
    await directory.delete(credential_id)
