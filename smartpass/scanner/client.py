"""
Client HTTP du scanner / Scanner HTTP client.
Politique de transport (timeout) uniquement ici / Transport policy (timeout) lives here only.
"""

import logging

import httpx

from smartpass.config import settings
from smartpass.errors import TransientError, ValidationError
from smartpass.schemas.verification import VerifyResponse, WhitelistEntry

log = logging.getLogger(__name__)


class VerificationClient:
    """Appels vers le service de verification / Calls to the verification service.

    Echec de connexion, timeout, 429 ou 5xx -> TransientError (declenche le repli).
    Connection failure, timeout, 429 or 5xx -> TransientError (triggers the fallback).
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.SERVER_URL,
            timeout=timeout if timeout is not None else settings.VERIFY_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def verify(self, credential_id: str, route_id: str) -> VerifyResponse:
        response = await self._request(
            "POST", "/api/verify-pass",
            json={"credential_id": credential_id, "route_id": route_id},
        )
        try:
            return VerifyResponse.model_validate(response.json())
        except ValueError as exc:
            raise _unreadable(response) from exc

    async def fetch_whitelist(self, route_id: str) -> list[WhitelistEntry]:
        response = await self._request("GET", f"/api/routes/{route_id}/whitelist")
        try:
            return [WhitelistEntry.model_validate(item) for item in response.json()]
        except (ValueError, TypeError) as exc:
            raise _unreadable(response) from exc

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            log.warning("%s %s unreachable: %s", method, url, exc)
            raise TransientError("Server unreachable") from exc

        if response.status_code == 429 or response.status_code >= 500:
            log.warning("%s %s failed with HTTP %d", method, url, response.status_code)
            raise TransientError(f"Server unavailable (HTTP {response.status_code})")
        if response.status_code >= 400:
            raise ValidationError(_detail(response))
        return response


def _detail(response: httpx.Response) -> str:
    """Message d'erreur serveur / Server error message."""
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    return f"Request rejected (HTTP {response.status_code})"


def _unreadable(response: httpx.Response) -> TransientError:
    # Pas de verdict (ex. portail captif) / No verdict (e.g. captive portal)
    log.warning("%s %s returned an unreadable body", response.request.method, response.request.url)
    return TransientError("Server returned an unreadable response")
