"""Services package — expose all concrete services from one import."""
from .roster_service import RosterService
from .game_service import GameService
from .schedule_service import ScheduleService
from .summary_service import SummaryService, TeamSummary

__all__ = [
    'RosterService',
    'GameService',
    'ScheduleService',
    'SummaryService',
    'TeamSummary',
]
