"""Repository for the game list ([Game, ...])."""
from typing import List, Optional, Sequence

from ..codec import decode_games, encode_games
from ..models import Game
from .base import CollectionRepository


class GameRepository(CollectionRepository[Game]):
    """Persists the game list under the ``games`` key.

    Schema::

        [
            {
                "id":       "<UUID>",
                "opponent": "<str>",
                "date":     "<ISO-8601>",
                "location": "<str>",
                "result":   "<str>",
                "notes":    "<str>"
            }
        ]
    """

    KEY = 'games'

    def _encode(self, records: Sequence[Game]) -> bytes:
        return encode_games(records)

    def _decode(self, raw: Optional[bytes]) -> List[Game]:
        return decode_games(raw)
