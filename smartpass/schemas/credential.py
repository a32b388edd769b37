"""Schémas Titre de transport / Credential schemas."""

from pydantic import BaseModel, ConfigDict, Field

from smartpass.models.credential import PaymentStatus

# Identifiants : 3 caracteres minimum / Identifiers: at least 3 characters
ID_PATTERN = r"^[A-Za-z0-9_\-]{3,50}$"


class CredentialBase(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    assigned_route_id: str = Field(pattern=ID_PATTERN)
    stop: str | None = Field(default=None, max_length=150)
    department: str | None = Field(default=None, max_length=100)


class CredentialCreate(CredentialBase):
    id: str = Field(pattern=ID_PATTERN)
    payment_status: PaymentStatus = PaymentStatus.UNPAID


class CredentialUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=150)
    payment_status: PaymentStatus | None = None
    assigned_route_id: str | None = Field(default=None, pattern=ID_PATTERN)
    stop: str | None = None
    department: str | None = None


class CredentialRead(CredentialBase):
    model_config = ConfigDict(from_attributes=True)
    id: str
    payment_status: PaymentStatus
    created_at: str | None = None
