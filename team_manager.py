#!/usr/bin/env python3
"""
Team Manager - roster and game schedule tracker
Keep a list of team members and games, see what is coming up next and how
the season is going.
"""

import argparse
import dataclasses
import datetime
import logging
import sys
from typing import Dict, List, Optional, Sequence, Tuple

from colorama import init, Fore, Style

from roster.config import DEFAULT_CONFIG_PATH, LOG_LEVELS, build_store, load_config
from roster.errors import TeamManagerError
from roster.models import RESULT_CHOICES, DEFAULT_RESULT, Game, TeamMember
from roster.repositories import GameRepository, TeamMemberRepository
from roster.services import (
    GameService, RosterService, ScheduleService, SummaryService, TeamSummary,
)
from roster.services.schedule_service import Clock, utc_now
from roster.stores import KeyValueStore, MemoryStore

# Initialize colorama for cross-platform colored terminal output
init(autoreset=True)

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the root Team Manager logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to WARNING so normal use is quiet.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, str(level).upper(), logging.WARNING)
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logger = logging.getLogger('team_manager')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


logger = setup_logging()


def format_short_date(value: datetime.datetime,
                      tz: Optional[datetime.tzinfo] = None) -> str:
    """Render *value* as a short numeric date such as ``10/18/26``.

    Args:
        value: Aware datetime.
        tz:    Display timezone; defaults to the machine's local timezone.
    """
    local = value.astimezone(tz)
    return f"{local.month}/{local.day}/{local:%y}"


def parse_date(text: str) -> datetime.datetime:
    """Parse ``YYYY-MM-DD`` or an ISO-8601 date/time typed on the command line.

    Values without a UTC offset are taken in the local timezone.

    Raises:
        ValueError: If *text* is not an ISO-8601 date.
    """
    value = datetime.datetime.fromisoformat(text.strip().replace('Z', '+00:00'))
    if value.tzinfo is None:
        value = value.astimezone()
    return value


class TeamManager:
    """Main application object.

    Builds the store once, owns one repository per collection, hydrates
    them, and exposes the operations the front end calls into.
    """

    def __init__(self, config_path: Optional[str] = DEFAULT_CONFIG_PATH,
                 store: Optional[KeyValueStore] = None,
                 clock: Clock = utc_now):
        self._log = logging.getLogger('team_manager.app')
        self.config: Dict = load_config(config_path)

        # Re-apply log level from config (allows "log_level": "DEBUG" in config.json)
        setup_logging(self.config.get('log_level', 'WARNING'))

        self.store = store if store is not None else build_store(self.config)

        self.member_repo = TeamMemberRepository(self.store)
        self.game_repo = GameRepository(self.store)
        self.member_repo.hydrate()
        self.game_repo.hydrate()

        self.roster_service = RosterService(self.member_repo)
        self.game_service = GameService(self.game_repo)
        self.schedule_service = ScheduleService(self.game_repo, clock)
        self.summary_service = SummaryService(self.member_repo, self.game_repo)

        self._log.debug("Loaded %d member(s) and %d game(s) from %s",
                        len(self.member_repo), len(self.game_repo),
                        type(self.store).__name__)

    # ------------------------------------------------------------------
    # Front-end call-in surface
    # ------------------------------------------------------------------

    def list_team_members(self) -> Tuple[TeamMember, ...]:
        return self.roster_service.list_members()

    def upsert_team_member(self, member: TeamMember) -> None:
        self.roster_service.upsert_member(member)

    def delete_team_member(self, position: int) -> Optional[TeamMember]:
        return self.roster_service.delete_member(position)

    def list_games(self) -> Tuple[Game, ...]:
        return self.game_service.list_games()

    def upsert_game(self, game: Game) -> None:
        self.game_service.upsert_game(game)

    def delete_game(self, position: int) -> Optional[Game]:
        return self.game_service.delete_game(position)

    def upcoming_games(self) -> List[Game]:
        return self.schedule_service.upcoming_games()

    def summary(self) -> TeamSummary:
        return self.summary_service.summary()


# ---------------------------------------------------------------------------
# Command-line front end
# ---------------------------------------------------------------------------

class UsageError(TeamManagerError):
    """Invalid command-line input."""


def _positions(rows: Sequence[int], count: int) -> List[int]:
    """Convert 1-based row numbers from a listing into list positions."""
    positions = []
    for row in rows:
        if not 1 <= row <= count:
            raise UsageError(f"No row {row} (the list has {count} entr{'y' if count == 1 else 'ies'})")
        positions.append(row - 1)
    return positions


def _confirm(prompt: str, assume_yes: bool) -> bool:
    if assume_yes:
        return True
    try:
        answer = input(f"{Fore.YELLOW}{prompt} [y/N] {Style.RESET_ALL}")
    except EOFError:
        return False
    return answer.strip().lower() in ('y', 'yes')


def print_members(members: Sequence[TeamMember]) -> None:
    if not members:
        print(f"{Fore.WHITE}{Style.DIM}No team members available. Add some!")
        return
    for row, member in enumerate(members, 1):
        print(f"{Fore.CYAN}{row:>3}. {Style.BRIGHT}{member.name}")
        print(f"     Position: {member.position}")
        print(f"     Jersey #: {member.jersey_number}")


def print_games(games: Sequence[Game], show_result: bool = True,
                empty_message: str = "No games available. Add some!") -> None:
    if not games:
        print(f"{Fore.WHITE}{Style.DIM}{empty_message}")
        return
    for row, game in enumerate(games, 1):
        print(f"{Fore.CYAN}{row:>3}. {Style.BRIGHT}{game.opponent}")
        print(f"     Date: {format_short_date(game.date)}")
        print(f"     Location: {game.location}")
        if show_result:
            print(f"     Result: {game.result}")


def print_summary(summary: TeamSummary) -> None:
    print(f"{Fore.CYAN}{Style.BRIGHT}Summary")
    print(f"Total Team Members: {summary.total_members}")
    print(f"Total Games Played: {summary.total_games}")
    print(f"{Fore.GREEN}Total Wins: {summary.wins}")
    print(f"{Fore.RED}Total Losses: {summary.losses}")


def _members_command(manager: TeamManager, args) -> None:
    service = manager.roster_service
    if args.action == 'list':
        print_members(manager.list_team_members())
    elif args.action == 'add':
        member = service.save_member(args.name, args.position, args.jersey)
        print(f"{Fore.GREEN}Added {member.name or 'member'}.")
    elif args.action == 'edit':
        members = manager.list_team_members()
        current = members[_positions([args.row], len(members))[0]]
        member = service.save_member(
            args.name if args.name is not None else current.name,
            args.position if args.position is not None else current.position,
            args.jersey if args.jersey is not None else current.jersey_number,
            member_id=current.id,
        )
        print(f"{Fore.GREEN}Updated {member.name or 'member'}.")
    elif args.action == 'delete':
        positions = _positions(args.rows, len(manager.list_team_members()))
        noun = 'member' if len(positions) == 1 else 'members'
        if not _confirm(f"Are you sure you want to delete {'this' if len(positions) == 1 else 'these'} {noun}?",
                        args.yes):
            print(f"{Fore.YELLOW}Cancelled.")
            return
        removed = service.delete_members(positions)
        print(f"{Fore.GREEN}Deleted {len(removed)} {noun}.")


def _games_command(manager: TeamManager, args) -> None:
    service = manager.game_service
    if args.action == 'list':
        print_games(manager.list_games())
    elif args.action == 'add':
        date = parse_date(args.date) if args.date else datetime.datetime.now().astimezone()
        game = service.save_game(args.opponent, date, args.location,
                                 result=args.result, notes=args.notes)
        print(f"{Fore.GREEN}Added game vs {game.opponent or 'opponent'}.")
    elif args.action == 'edit':
        games = manager.list_games()
        current = games[_positions([args.row], len(games))[0]]
        changes = {
            name: value for name, value in (
                ('opponent', args.opponent),
                ('date', parse_date(args.date) if args.date else None),
                ('location', args.location),
                ('result', args.result),
                ('notes', args.notes),
            ) if value is not None
        }
        game = dataclasses.replace(current, **changes)
        manager.upsert_game(game)
        print(f"{Fore.GREEN}Updated game vs {game.opponent or 'opponent'}.")
    elif args.action == 'delete':
        positions = _positions(args.rows, len(manager.list_games()))
        noun = 'game' if len(positions) == 1 else 'games'
        if not _confirm(f"Are you sure you want to delete {'this' if len(positions) == 1 else 'these'} {noun}?",
                        args.yes):
            print(f"{Fore.YELLOW}Cancelled.")
            return
        removed = service.delete_games(positions)
        print(f"{Fore.GREEN}Deleted {len(removed)} {noun}.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='team-manager',
        description='Team Manager - roster and game schedule tracker',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  team-manager members add --name "Sam Lee" --position Goalie --jersey 1
  team-manager members list
  team-manager games add --opponent Rovers --date 2026-11-02 --location Home
  team-manager games edit 1 --result Loss
  team-manager schedule
  team-manager summary
        """
    )
    parser.add_argument(
        '--config', '-c',
        default=DEFAULT_CONFIG_PATH,
        help='Path to config file (default: config.json, optional)'
    )
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=LOG_LEVELS,
        help='Override the configured log level (e.g. DEBUG)'
    )
    parser.add_argument(
        '--ephemeral',
        action='store_true',
        help='Keep everything in memory for this run (nothing is saved)'
    )

    commands = parser.add_subparsers(dest='command', required=True)

    members = commands.add_parser('members', help='Manage team members')
    member_actions = members.add_subparsers(dest='action', required=True)
    member_actions.add_parser('list', help='List team members')
    add = member_actions.add_parser('add', help='Add a team member')
    add.add_argument('--name', default='', help='Player name')
    add.add_argument('--position', default='', help='Playing position')
    add.add_argument('--jersey', default='', help='Jersey number')
    edit = member_actions.add_parser('edit', help='Edit a team member')
    edit.add_argument('row', type=int, help='Row number shown by "members list"')
    edit.add_argument('--name')
    edit.add_argument('--position')
    edit.add_argument('--jersey')
    delete = member_actions.add_parser('delete', help='Delete team members')
    delete.add_argument('rows', type=int, nargs='+', metavar='ROW')
    delete.add_argument('--yes', '-y', action='store_true', help='Do not ask for confirmation')

    games = commands.add_parser('games', help='Manage games')
    game_actions = games.add_subparsers(dest='action', required=True)
    game_actions.add_parser('list', help='List games')
    add = game_actions.add_parser('add', help='Add a game')
    add.add_argument('--opponent', default='', help='Opposing team')
    add.add_argument('--date', help='YYYY-MM-DD or ISO-8601 date/time (default: now)')
    add.add_argument('--location', default='', help='Venue')
    add.add_argument('--result', default=DEFAULT_RESULT, choices=RESULT_CHOICES,
                     help=f'Game result (default: {DEFAULT_RESULT})')
    add.add_argument('--notes', default='', help='Free-text notes')
    edit = game_actions.add_parser('edit', help='Edit a game')
    edit.add_argument('row', type=int, help='Row number shown by "games list"')
    edit.add_argument('--opponent')
    edit.add_argument('--date')
    edit.add_argument('--location')
    edit.add_argument('--result', choices=RESULT_CHOICES)
    edit.add_argument('--notes')
    delete = game_actions.add_parser('delete', help='Delete games')
    delete.add_argument('rows', type=int, nargs='+', metavar='ROW')
    delete.add_argument('--yes', '-y', action='store_true', help='Do not ask for confirmation')

    commands.add_parser('schedule', help='Show upcoming games')
    commands.add_parser('summary', help='Show season totals')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        manager = TeamManager(
            config_path=args.config,
            store=MemoryStore() if args.ephemeral else None,
        )
        if args.log_level:
            setup_logging(args.log_level)

        if args.command == 'members':
            _members_command(manager, args)
        elif args.command == 'games':
            _games_command(manager, args)
        elif args.command == 'schedule':
            print(f"{Fore.CYAN}{Style.BRIGHT}Schedule")
            print_games(manager.upcoming_games(), show_result=False,
                        empty_message="No upcoming games.")
        elif args.command == 'summary':
            print_summary(manager.summary())
    except ValueError as e:
        print(f"{Fore.RED}Error: {e}")
        return 1
    except TeamManagerError as e:
        print(f"{Fore.RED}Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
