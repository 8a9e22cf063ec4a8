"""Repository for the roster ([TeamMember, ...])."""
from typing import List, Optional, Sequence

from ..codec import decode_team_members, encode_team_members
from ..models import TeamMember
from .base import CollectionRepository


class TeamMemberRepository(CollectionRepository[TeamMember]):
    """Persists the roster under the ``teamMembers`` key.

    Schema::

        [
            {
                "id":           "<UUID>",
                "name":         "<str>",
                "position":     "<str>",
                "jerseyNumber": "<str>",
                "attendance":   ["<ISO-8601>", ...]
            }
        ]
    """

    KEY = 'teamMembers'

    def _encode(self, records: Sequence[TeamMember]) -> bytes:
        return encode_team_members(records)

    def _decode(self, raw: Optional[bytes]) -> List[TeamMember]:
        return decode_team_members(raw)
