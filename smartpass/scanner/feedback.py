"""Retour visuel du scan / Scan display feedback."""

from dataclasses import dataclass, field

from smartpass.config import settings
from smartpass.models.scan_record import Verdict
from smartpass.schemas.verification import VerifyResponse
from smartpass.services.decision import VERDICT_COLORS, Decision


@dataclass(frozen=True)
class Feedback:
    """Ecran vert / jaune / rouge, ferme automatiquement / Green / yellow / red screen, auto-dismissed."""
    verdict: Verdict
    message: str
    offline: bool = False
    credential_id: str | None = None
    name: str | None = None
    dismiss_after: float = field(default_factory=lambda: settings.FEEDBACK_DISMISS_SECONDS)

    @property
    def color(self) -> str:
        return VERDICT_COLORS[self.verdict]

    @classmethod
    def from_response(cls, response: VerifyResponse) -> "Feedback":
        credential = response.credential
        return cls(
            verdict=response.verdict,
            message=response.message,
            credential_id=credential.id if credential else None,
            name=credential.name if credential else None,
        )

    @classmethod
    def from_decision(cls, decision: Decision, offline: bool = True) -> "Feedback":
        credential = decision.credential
        return cls(
            verdict=decision.verdict,
            message=decision.message,
            offline=offline,
            credential_id=credential.id if credential else None,
            name=credential.name if credential else None,
        )
