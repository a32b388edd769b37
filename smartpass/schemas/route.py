"""Schémas Ligne / Route schemas."""

from pydantic import BaseModel, ConfigDict, Field

from smartpass.schemas.credential import ID_PATTERN


class RouteBase(BaseModel):
    route_name: str = Field(min_length=1, max_length=150)
    driver_name: str = Field(min_length=1, max_length=150)
    capacity: int = Field(default=0, ge=0)


class RouteCreate(RouteBase):
    id: str = Field(pattern=ID_PATTERN)
    # Mot de passe conducteur, stocke hashe / Conductor password, stored hashed
    conductor_password: str = Field(min_length=4, max_length=72)


class RouteUpdate(BaseModel):
    route_name: str | None = Field(default=None, min_length=1, max_length=150)
    driver_name: str | None = Field(default=None, min_length=1, max_length=150)
    capacity: int | None = Field(default=None, ge=0)
    conductor_password: str | None = Field(default=None, min_length=4, max_length=72)


class RouteRead(RouteBase):
    model_config = ConfigDict(from_attributes=True)
    id: str
