"""Business logic for the game list."""
import datetime
from typing import Iterable, List, Optional, Tuple

from ..models import DEFAULT_RESULT, Game
from ..repositories.game_repository import GameRepository


class GameService:
    """Turns game form submissions into records, delegating persistence
    to :class:`~roster.repositories.game_repository.GameRepository`.

    ``result`` is free text.  The form offers ``RESULT_CHOICES`` and starts
    on ``"Win"``, but any string is stored as given.
    """

    def __init__(self, repository: GameRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_games(self) -> Tuple[Game, ...]:
        """Return all games in storage order (no sorting)."""
        return self._repo.items()

    def get_game(self, game_id: str) -> Optional[Game]:
        return self._repo.find(game_id)

    def save_game(self, opponent: str, date: datetime.datetime, location: str,
                  result: str = DEFAULT_RESULT, notes: str = '',
                  game_id: Optional[str] = None) -> Game:
        """Create or edit a game from form values.

        Args:
            opponent: Opposing team.
            date:     Kick-off date/time; naive values are taken as UTC.
            location: Venue.
            result:   Outcome text, e.g. ``"Win"`` or ``"Pending"``.
            notes:    Free-text notes.
            game_id:  Identity of the game being edited, if any.

        Returns:
            The saved :class:`Game`.
        """
        fields = dict(opponent=opponent, date=date, location=location,
                      result=result, notes=notes)
        game = Game(id=game_id, **fields) if game_id else Game(**fields)
        self._repo.upsert(game)
        return game

    def upsert_game(self, game: Game) -> None:
        self._repo.upsert(game)

    def delete_game(self, position: int) -> Optional[Game]:
        """Delete the game at list *position*.  Returns it, or ``None``."""
        return self._repo.remove_at(position)

    def delete_games(self, offsets: Iterable[int]) -> List[Game]:
        return self._repo.remove_at_offsets(offsets)
