"""
Procedure de decision d'embarquement / Boarding decision procedure.
Fonction unique, parametree par une source de titres : annuaire (serveur) ou snapshot (appareil).
Single function, parameterized over a credential source: directory (server) or snapshot (device).
"""

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Protocol

from smartpass.models.credential import PaymentStatus
from smartpass.models.scan_record import TripWindow, Verdict
from smartpass.services.trip_window import TripWindowService


class Reason(str, enum.Enum):
    """Motif du verdict / Verdict reason."""
    NOT_FOUND = "NOT_FOUND"
    UNPAID = "UNPAID"
    WRONG_ROUTE = "WRONG_ROUTE"
    DUPLICATE = "DUPLICATE"
    GRANTED = "GRANTED"


REASON_VERDICTS: dict[Reason, Verdict] = {
    Reason.NOT_FOUND: Verdict.INVALID,
    Reason.UNPAID: Verdict.INVALID,
    Reason.WRONG_ROUTE: Verdict.INVALID,
    Reason.DUPLICATE: Verdict.DUPLICATE,
    Reason.GRANTED: Verdict.VALID,
}

# Classe d'affichage par verdict / Display class per verdict
VERDICT_COLORS: dict[Verdict, str] = {
    Verdict.VALID: "green",
    Verdict.DUPLICATE: "yellow",
    Verdict.INVALID: "red",
    Verdict.ERROR: "red",
}


@dataclass(frozen=True)
class CredentialView:
    """Vue lecture seule d'un titre / Read-only view of a credential."""
    id: str
    name: str
    payment_status: PaymentStatus
    assigned_route_id: str
    stop: str | None = None

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else self.id


@dataclass(frozen=True)
class Decision:
    verdict: Verdict
    reason: Reason
    message: str
    trip_window: TripWindow
    calendar_date: str
    credential: CredentialView | None = None

    @property
    def color(self) -> str:
        return VERDICT_COLORS[self.verdict]


class CredentialSource(Protocol):
    """Capacite de donnees de la decision / Data capability used by the decision.

    `messages` associe chaque motif a un gabarit str.format avec les champs
    credential_id, assigned_route_id, trip_window, first_name.
    """

    messages: Mapping[Reason, str]

    async def lookup(self, credential_id: str) -> CredentialView | None:
        ...

    async def has_boarded(
        self,
        credential_id: str,
        route_id: str,
        trip_window: TripWindow,
        calendar_date: str,
        now: datetime,
    ) -> bool:
        ...


def build_decision(
    source: CredentialSource,
    reason: Reason,
    credential_id: str,
    now: datetime,
    credential: CredentialView | None = None,
) -> Decision:
    """Construire un verdict et son message / Build a verdict and its message."""
    trip_window = TripWindowService.window_for(now)
    message = source.messages[reason].format(
        credential_id=credential_id,
        assigned_route_id=credential.assigned_route_id if credential else "",
        trip_window=trip_window.value,
        first_name=credential.first_name if credential else "",
    )
    return Decision(
        verdict=REASON_VERDICTS[reason],
        reason=reason,
        message=message,
        trip_window=trip_window,
        calendar_date=TripWindowService.calendar_date(now),
        credential=credential,
    )


async def decide(
    source: CredentialSource,
    credential_id: str,
    route_id: str,
    now: datetime,
) -> Decision:
    """Appliquer les regles dans l'ordre / Apply the rules in order.

    1. titre inconnu -> Invalid
    2. non paye -> Invalid
    3. mauvaise ligne -> Invalid
    4. deja embarque dans la fenetre -> Duplicate, sinon Valid
    """
    credential = await source.lookup(credential_id)
    if credential is None:
        return build_decision(source, Reason.NOT_FOUND, credential_id, now)
    if credential.payment_status != PaymentStatus.PAID:
        return build_decision(source, Reason.UNPAID, credential_id, now, credential)
    if credential.assigned_route_id != route_id:
        return build_decision(source, Reason.WRONG_ROUTE, credential_id, now, credential)

    trip_window = TripWindowService.window_for(now)
    calendar_date = TripWindowService.calendar_date(now)
    if await source.has_boarded(credential_id, route_id, trip_window, calendar_date, now):
        return build_decision(source, Reason.DUPLICATE, credential_id, now, credential)
    return build_decision(source, Reason.GRANTED, credential_id, now, credential)
