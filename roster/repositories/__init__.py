"""Repository package — expose all concrete repositories from one import."""
from .base import CollectionRepository
from .team_member_repository import TeamMemberRepository
from .game_repository import GameRepository

__all__ = [
    'CollectionRepository',
    'TeamMemberRepository',
    'GameRepository',
]
