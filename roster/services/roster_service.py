"""Business logic for the team roster."""
import dataclasses
from typing import Iterable, List, Optional, Tuple

from ..models import TeamMember
from ..repositories.team_member_repository import TeamMemberRepository


class RosterService:
    """Turns member form submissions into records, delegating persistence
    to :class:`~roster.repositories.team_member_repository.TeamMemberRepository`.

    Rules
    -----
    * No field is validated; empty strings are accepted.
    * Saving without *member_id* creates a member with a fresh identity.
    * Saving with the *member_id* of an existing member replaces that
      member in place and keeps its attendance.
    """

    def __init__(self, repository: TeamMemberRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_members(self) -> Tuple[TeamMember, ...]:
        """Return all members in roster order."""
        return self._repo.items()

    def get_member(self, member_id: str) -> Optional[TeamMember]:
        return self._repo.find(member_id)

    def save_member(self, name: str, position: str, jersey_number: str,
                    member_id: Optional[str] = None) -> TeamMember:
        """Create or edit a member from form values.

        Args:
            name:          Player name.
            position:      Playing position.
            jersey_number: Jersey number as typed (not validated).
            member_id:     Identity of the member being edited, if any.

        Returns:
            The saved :class:`TeamMember`.
        """
        existing = self._repo.find(member_id) if member_id else None
        if existing is not None:
            member = dataclasses.replace(existing, name=name, position=position,
                                         jersey_number=jersey_number)
        elif member_id:
            member = TeamMember(name=name, position=position,
                                jersey_number=jersey_number, id=member_id)
        else:
            member = TeamMember(name=name, position=position,
                                jersey_number=jersey_number)
        self._repo.upsert(member)
        return member

    def upsert_member(self, member: TeamMember) -> None:
        self._repo.upsert(member)

    def delete_member(self, position: int) -> Optional[TeamMember]:
        """Delete the member at list *position*.  Returns it, or ``None``."""
        return self._repo.remove_at(position)

    def delete_members(self, offsets: Iterable[int]) -> List[TeamMember]:
        return self._repo.remove_at_offsets(offsets)
