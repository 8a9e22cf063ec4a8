"""Upcoming-games view over the game list."""
import datetime
from typing import Callable, List, Optional

from ..models import Game, as_utc
from ..repositories.game_repository import GameRepository

Clock = Callable[[], datetime.datetime]


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class ScheduleService:
    """Computes the schedule: every game dated now or later.

    Nothing is cached; each call re-reads the repository and samples the
    clock, so two calls can disagree if time passes between them.
    """

    def __init__(self, repository: GameRepository, clock: Clock = utc_now) -> None:
        self._repo = repository
        self._clock = clock

    def upcoming_games(self, now: Optional[datetime.datetime] = None) -> List[Game]:
        """Return games with ``date >= now`` in storage order."""
        cutoff = as_utc(now if now is not None else self._clock())
        return [g for g in self._repo.items() if g.date >= cutoff]
