"""Routes Lignes / Transit route API routes."""

from fastapi import APIRouter, Depends, HTTPException, Path

from smartpass.schemas.credential import ID_PATTERN
from smartpass.schemas.route import RouteCreate, RouteRead, RouteUpdate
from smartpass.schemas.verification import WhitelistEntry
from smartpass.services.directory import RouteRegistry
from smartpass.services.whitelist import WhitelistService
from smartpass.api.deps import get_registry, get_whitelist_service

router = APIRouter()


@router.get("/", response_model=list[RouteRead])
async def list_routes(registry: RouteRegistry = Depends(get_registry)):
    return await registry.find_all()


@router.get("/{route_id}", response_model=RouteRead)
async def get_route(
    route_id: str,
    registry: RouteRegistry = Depends(get_registry),
):
    route = await registry.get(route_id)
    if not route:
        raise HTTPException(status_code=404, detail="Route not found")
    return route


@router.get("/{route_id}/whitelist", response_model=list[WhitelistEntry])
async def get_whitelist(
    route_id: str = Path(pattern=ID_PATTERN),
    service: WhitelistService = Depends(get_whitelist_service),
):
    """Liste blanche pour la synchro hors ligne / Whitelist for the offline sync.
    Titres payes et assignes a la ligne, tries par id.
    """
    return await service.entries_for(route_id)


@router.post("/", response_model=RouteRead, status_code=201)
async def create_route(
    data: RouteCreate,
    registry: RouteRegistry = Depends(get_registry),
):
    return await registry.create(data.model_dump())


@router.put("/{route_id}", response_model=RouteRead)
async def update_route(
    route_id: str,
    data: RouteUpdate,
    registry: RouteRegistry = Depends(get_registry),
):
    return await registry.update(route_id, data.model_dump(exclude_unset=True))


@router.delete("/{route_id}", status_code=204)
async def delete_route(
    route_id: str,
    registry: RouteRegistry = Depends(get_registry),
):
    """Refuse (409) si des titres sont encore assignes / Refused (409) while credentials are assigned."""
    await registry.delete(route_id)
