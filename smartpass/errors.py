"""Erreurs metier / Domain errors.

Les verdicts Invalid / Duplicate ne sont PAS des erreurs : ce sont des reponses 200.
Invalid / Duplicate verdicts are NOT errors: they are successful responses.
"""


class SmartPassError(Exception):
    """Erreur de base / Base error."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SmartPassError):
    """Identifiant absent ou mal forme / Missing or malformed identifier."""

    status_code = 422


class NotFoundError(SmartPassError):
    status_code = 404


class ConflictError(SmartPassError):
    """Conflit d'integrite (id existant, route encore assignee) / Integrity conflict."""

    status_code = 409


class TransientError(SmartPassError):
    """Stockage ou reseau indisponible / Storage or network unavailable.

    Cote scanner, declenche le repli local / On the scanner, triggers the local fallback.
    """

    status_code = 503


class SyncRequiredError(SmartPassError):
    """Aucun snapshot utilisable sur l'appareil / No usable snapshot on the device."""

    status_code = 409
