"""Modèle Ligne / Route (vehicle) model."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from smartpass.database import Base


class Route(Base):
    __tablename__ = "routes"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    route_name: Mapped[str] = mapped_column(String(150), nullable=False)
    driver_name: Mapped[str] = mapped_column(String(150), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, default=0)
    conductor_credential_hash: Mapped[str] = mapped_column(String(100), nullable=False)  # bcrypt

    def __repr__(self) -> str:
        return f"<Route {self.id} {self.route_name}>"
