#!/usr/bin/env python3
"""
Unit tests for the TeamManager integration object and the command line.

Run with:
    python -m pytest tests/
  or
    python -m unittest discover tests/
"""
import datetime
import io
import json
import logging
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

# Make sure team_manager can be imported regardless of where tests are run from.
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import team_manager
from roster.models import Game, TeamMember
from roster.services import TeamSummary
from roster.stores import FileStore, MemoryStore

UTC = datetime.timezone.utc
NOW = datetime.datetime(2026, 10, 18, 12, 0, tzinfo=UTC)

_ENV_NAMES = ('TEAM_MANAGER_STORE', 'TEAM_MANAGER_DATA_DIR',
              'DATABASE_URL', 'TEAM_MANAGER_LOG_LEVEL')


class TmpDirMixin(unittest.TestCase):
    """Creates a fresh temp directory for each test, cd's into it and clears
    environment overrides."""

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self._orig = os.getcwd()
        os.chdir(self.tmp)
        env = patch.dict(os.environ, {}, clear=False)
        env.start()
        self.addCleanup(env.stop)
        for name in _ENV_NAMES:
            os.environ.pop(name, None)

    def tearDown(self):
        os.chdir(self._orig)
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _path(self, name: str) -> str:
        return os.path.join(self.tmp, name)


def make_manager(store=None, now=NOW) -> team_manager.TeamManager:
    """Create a TeamManager on *store* (in-memory by default) with a fixed clock."""
    return team_manager.TeamManager(config_path=None,
                                    store=store if store is not None else MemoryStore(),
                                    clock=lambda: now)


# ===========================================================================
# Helper function tests
# ===========================================================================

class TestFormatShortDate(unittest.TestCase):

    def test_month_day_year(self):
        value = datetime.datetime(2026, 11, 2, 19, 0, tzinfo=UTC)
        self.assertEqual(team_manager.format_short_date(value, tz=UTC), '11/2/26')

    def test_converts_to_display_timezone(self):
        value = datetime.datetime(2026, 11, 2, 1, 0, tzinfo=UTC)
        minus_five = datetime.timezone(datetime.timedelta(hours=-5))
        self.assertEqual(team_manager.format_short_date(value, tz=minus_five), '11/1/26')


class TestSetupLogging(unittest.TestCase):

    def tearDown(self):
        team_manager.setup_logging('WARNING')

    def test_named_level(self):
        self.assertEqual(team_manager.setup_logging('debug').level, logging.DEBUG)

    def test_non_level_attribute_falls_back_to_warning(self):
        self.assertEqual(team_manager.setup_logging('basic_format').level, logging.WARNING)


class TestParseDate(unittest.TestCase):

    def test_date_only_is_aware(self):
        value = team_manager.parse_date('2026-11-02')
        self.assertIsNotNone(value.tzinfo)
        self.assertEqual((value.year, value.month, value.day), (2026, 11, 2))

    def test_offset_kept(self):
        self.assertEqual(team_manager.parse_date('2026-11-02T19:00:00Z'),
                         datetime.datetime(2026, 11, 2, 19, tzinfo=UTC))

    def test_invalid_raises(self):
        with self.assertRaises(ValueError):
            team_manager.parse_date('next tuesday')


# ===========================================================================
# TeamManager call-in surface
# ===========================================================================

class TestTeamManager(TmpDirMixin):

    def test_starts_empty(self):
        manager = make_manager()
        self.assertEqual(manager.list_team_members(), ())
        self.assertEqual(manager.list_games(), ())
        self.assertEqual(manager.upcoming_games(), [])
        self.assertEqual(manager.summary(), TeamSummary(0, 0, 0, 0))

    def test_upsert_and_delete_members(self):
        manager = make_manager()
        a = TeamMember(name='A', position='F', jersey_number='1')
        b = TeamMember(name='B', position='F', jersey_number='2')
        manager.upsert_team_member(a)
        manager.upsert_team_member(b)
        self.assertEqual(manager.delete_team_member(0), a)
        self.assertEqual(manager.list_team_members(), (b,))

    def test_upsert_and_delete_games(self):
        manager = make_manager()
        g = Game(opponent='Rovers', date=NOW, location='Home')
        manager.upsert_game(g)
        manager.upsert_game(Game(opponent='Rovers', date=NOW, location='Away', id=g.id))
        self.assertEqual(len(manager.list_games()), 1)
        self.assertEqual(manager.list_games()[0].location, 'Away')
        manager.delete_game(0)
        self.assertEqual(manager.list_games(), ())

    def test_upcoming_and_summary(self):
        manager = make_manager()
        for days, result in ((-3, 'Win'), (-2, 'Loss'), (-1, 'Win'), (4, 'Draw')):
            manager.upsert_game(Game(opponent='X', date=NOW + datetime.timedelta(days=days),
                                     location='Y', result=result))
        upcoming = manager.upcoming_games()
        self.assertEqual([g.result for g in upcoming], ['Draw'])
        self.assertEqual(manager.summary(), TeamSummary(0, 4, 2, 1))

    def test_restart_reproduces_state(self):
        store = FileStore(self._path('data'))
        first = make_manager(store)
        first.roster_service.save_member('Sam', 'Goalie', '1')
        first.roster_service.save_member('Ana', 'Forward', '7')
        first.game_service.save_game('Rovers', NOW, 'Home', result='Pending')
        first.delete_team_member(0)

        second = make_manager(FileStore(self._path('data')))
        self.assertEqual(second.list_team_members(), first.list_team_members())
        self.assertEqual(second.list_games(), first.list_games())

    def test_hydrates_legacy_data(self):
        legacy = json.dumps([{
            'id': '3F2504E0-4F89-11D3-9A0C-0305E82C3301',
            'opponent': 'Rovers',
            'date': 814017600.0,
            'location': 'Home',
            'result': 'Win',
            'notes': 'Season opener',
        }]).encode('utf-8')
        manager = make_manager(MemoryStore({'games': legacy}))
        games = manager.list_games()
        self.assertEqual(len(games), 1)
        self.assertEqual(games[0].date, datetime.datetime(2026, 10, 18, 12, 0, tzinfo=UTC))
        self.assertEqual(manager.upcoming_games(), list(games))

    def test_corrupt_collection_does_not_affect_other(self):
        member = TeamMember(name='Sam', position='Goalie', jersey_number='1')
        store = MemoryStore({'games': b'NOT JSON'})
        make_manager(store).upsert_team_member(member)
        manager = make_manager(store)
        self.assertEqual(manager.list_team_members(), (member,))
        self.assertEqual(manager.list_games(), ())

    def test_store_from_config(self):
        path = self._path('config.json')
        with open(path, 'w') as f:
            json.dump({'store': 'file', 'data_dir': self._path('club')}, f)
        manager = team_manager.TeamManager(config_path=path)
        manager.roster_service.save_member('Sam', 'Goalie', '1')
        self.assertTrue(os.path.exists(self._path(os.path.join('club', 'teamMembers.json'))))


# ===========================================================================
# Command line
# ===========================================================================

class TestCommandLine(TmpDirMixin):

    def setUp(self):
        super().setUp()
        self.config = self._path('config.json')
        with open(self.config, 'w') as f:
            json.dump({'data_dir': self._path('data')}, f)

    def run_cli(self, *argv):
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            code = team_manager.main(['--config', self.config] + list(argv))
        return code, out.getvalue()

    def stored_members(self):
        return make_manager(FileStore(self._path('data'))).list_team_members()

    def stored_games(self):
        return make_manager(FileStore(self._path('data'))).list_games()

    def test_empty_lists(self):
        self.assertIn('No team members available. Add some!', self.run_cli('members', 'list')[1])
        self.assertIn('No games available. Add some!', self.run_cli('games', 'list')[1])

    def test_add_and_list_member(self):
        code, _ = self.run_cli('members', 'add', '--name', 'Sam Lee',
                               '--position', 'Goalie', '--jersey', '1')
        self.assertEqual(code, 0)
        code, out = self.run_cli('members', 'list')
        self.assertIn('Sam Lee', out)
        self.assertIn('Position: Goalie', out)
        self.assertIn('Jersey #: 1', out)

    def test_edit_member_keeps_identity(self):
        self.run_cli('members', 'add', '--name', 'Sam', '--position', 'Goalie', '--jersey', '1')
        before = self.stored_members()[0]
        code, _ = self.run_cli('members', 'edit', '1', '--jersey', '12')
        self.assertEqual(code, 0)
        after = self.stored_members()[0]
        self.assertEqual(after.id, before.id)
        self.assertEqual((after.name, after.jersey_number), ('Sam', '12'))

    def test_delete_members_with_yes(self):
        for name in ('A', 'B', 'C'):
            self.run_cli('members', 'add', '--name', name)
        code, out = self.run_cli('members', 'delete', '1', '3', '--yes')
        self.assertEqual(code, 0)
        self.assertIn('Deleted 2 members', out)
        self.assertEqual([m.name for m in self.stored_members()], ['B'])

    def test_delete_cancelled(self):
        self.run_cli('members', 'add', '--name', 'A')
        with patch('builtins.input', return_value='n') as prompt:
            code, out = self.run_cli('members', 'delete', '1')
        self.assertEqual(code, 0)
        self.assertIn('Are you sure you want to delete this member?', prompt.call_args[0][0])
        self.assertIn('Cancelled', out)
        self.assertEqual(len(self.stored_members()), 1)

    def test_delete_without_stdin_is_cancelled(self):
        self.run_cli('members', 'add', '--name', 'A')
        with patch('builtins.input', side_effect=EOFError):
            code, out = self.run_cli('members', 'delete', '1')
        self.assertEqual(code, 0)
        self.assertIn('Cancelled', out)
        self.assertEqual(len(self.stored_members()), 1)

    def test_bad_config_values_are_errors(self):
        for values in ({'log_level': 'basic_format'}, {'data_dir': 5}):
            with open(self.config, 'w') as f:
                json.dump(values, f)
            code, out = self.run_cli('summary')
            self.assertEqual(code, 1)
            self.assertIn('Error', out)

    def test_delete_confirmed(self):
        self.run_cli('games', 'add', '--opponent', 'Rovers')
        with patch('builtins.input', return_value='y'):
            code, _ = self.run_cli('games', 'delete', '1')
        self.assertEqual(code, 0)
        self.assertEqual(self.stored_games(), ())

    def test_bad_row_is_error(self):
        code, out = self.run_cli('members', 'delete', '1', '--yes')
        self.assertEqual(code, 1)
        self.assertIn('No row 1', out)

    def test_add_and_list_game(self):
        code, _ = self.run_cli('games', 'add', '--opponent', 'Rovers', '--date', '2026-11-02',
                               '--location', 'Home', '--notes', 'Bring bibs')
        self.assertEqual(code, 0)
        code, out = self.run_cli('games', 'list')
        self.assertIn('Rovers', out)
        self.assertIn('Date: 11/2/26', out)
        self.assertIn('Location: Home', out)
        self.assertIn('Result: Win', out)
        self.assertEqual(self.stored_games()[0].notes, 'Bring bibs')

    def test_edit_game_result(self):
        self.run_cli('games', 'add', '--opponent', 'Rovers', '--date', '2026-11-02')
        before = self.stored_games()[0]
        code, _ = self.run_cli('games', 'edit', '1', '--result', 'Loss')
        self.assertEqual(code, 0)
        after = self.stored_games()[0]
        self.assertEqual(after.id, before.id)
        self.assertEqual(after.result, 'Loss')
        self.assertEqual(after.date, before.date)

    def test_bad_date_is_error(self):
        code, out = self.run_cli('games', 'add', '--opponent', 'Rovers', '--date', 'soon')
        self.assertEqual(code, 1)
        self.assertIn('Error', out)
        self.assertEqual(self.stored_games(), ())

    def test_schedule_shows_only_upcoming(self):
        self.run_cli('games', 'add', '--opponent', 'Old Boys', '--date', '2000-01-01')
        self.run_cli('games', 'add', '--opponent', 'Future FC', '--date', '2999-01-01')
        code, out = self.run_cli('schedule')
        self.assertEqual(code, 0)
        self.assertIn('Future FC', out)
        self.assertNotIn('Old Boys', out)
        self.assertNotIn('Result:', out)

    def test_summary(self):
        self.run_cli('members', 'add', '--name', 'Sam')
        for result in ('Win', 'Loss', 'Win', 'Draw'):
            self.run_cli('games', 'add', '--opponent', 'X', '--result', result)
        code, out = self.run_cli('summary')
        self.assertEqual(code, 0)
        self.assertIn('Total Team Members: 1', out)
        self.assertIn('Total Games Played: 4', out)
        self.assertIn('Total Wins: 2', out)
        self.assertIn('Total Losses: 1', out)

    def test_ephemeral_saves_nothing(self):
        self.run_cli('--ephemeral', 'members', 'add', '--name', 'Sam')
        self.assertEqual(self.stored_members(), ())
        self.assertFalse(os.path.exists(self._path('data')))

    def test_unknown_store_is_error(self):
        with open(self.config, 'w') as f:
            json.dump({'store': 'cloud'}, f)
        code, out = self.run_cli('summary')
        self.assertEqual(code, 1)
        self.assertIn('Unknown store', out)


if __name__ == '__main__':
    unittest.main()
