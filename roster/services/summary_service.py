"""Aggregate counts shown on the summary screen."""
from dataclasses import asdict, dataclass
from typing import Dict

from ..repositories.game_repository import GameRepository
from ..repositories.team_member_repository import TeamMemberRepository


@dataclass(frozen=True)
class TeamSummary:
    total_members: int
    total_games: int
    wins: int
    losses: int

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def is_win(result: str) -> bool:
    return 'win' in result.lower()


def is_loss(result: str) -> bool:
    return 'loss' in result.lower()


class SummaryService:
    """Counts members, games, wins and losses.

    Wins and losses match by case-insensitive substring, not equality:
    ``"Winless"`` counts as a win and ``"Loss (OT)"`` as a loss.
    """

    def __init__(self, members: TeamMemberRepository, games: GameRepository) -> None:
        self._members = members
        self._games = games

    def summary(self) -> TeamSummary:
        games = self._games.items()
        return TeamSummary(
            total_members=len(self._members),
            total_games=len(games),
            wins=sum(1 for g in games if is_win(g.result)),
            losses=sum(1 for g in games if is_loss(g.result)),
        )
