"""Modele Titre de transport / Transit credential model."""

import enum

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from smartpass.database import Base


class PaymentStatus(str, enum.Enum):
    """Statut de paiement / Payment status."""
    PAID = "Paid"
    UNPAID = "Unpaid"


class Credential(Base):
    """Titre d'un usager / Rider pass record."""
    __tablename__ = "credentials"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus), default=PaymentStatus.UNPAID, nullable=False, index=True,
    )
    # Pas de FK : la seule regle referentielle est la garde de suppression de route
    # No FK: the only referential rule is the route deletion guard
    assigned_route_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    stop: Mapped[str | None] = mapped_column(String(150))
    department: Mapped[str | None] = mapped_column(String(100))
    created_at: Mapped[str | None] = mapped_column(String(32))  # ISO 8601

    def __repr__(self) -> str:
        return f"<Credential {self.id} route={self.assigned_route_id}>"
