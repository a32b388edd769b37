"""
Service des fenetres de trajet / Trip window service.
Deux fenetres par jour, separees a une heure fixe (13h par defaut).
Two windows per day, split at a fixed hour (13:00 by default).
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from smartpass.config import settings
from smartpass.models.scan_record import TripWindow


def local_now() -> datetime:
    """Horloge locale (fuseau configure) / Local clock (configured timezone)."""
    return datetime.now(ZoneInfo(settings.TIMEZONE))


class TripWindowService:
    """Calcul des fenetres de trajet / Trip window calculation."""

    @staticmethod
    def window_for(moment: datetime, split_hour: int | None = None) -> TripWindow:
        """Matin avant l'heure de bascule, sinon apres-midi / Morning before the split hour, else afternoon."""
        split = settings.TRIP_WINDOW_SPLIT_HOUR if split_hour is None else split_hour
        return TripWindow.MORNING if moment.hour < split else TripWindow.AFTERNOON

    @staticmethod
    def calendar_date(moment: datetime) -> str:
        """Date calendaire YYYY-MM-DD / Calendar date YYYY-MM-DD."""
        return moment.strftime("%Y-%m-%d")

    @staticmethod
    def timestamp(moment: datetime) -> str:
        return moment.isoformat(timespec="seconds")
