"""JSON codec for the two persisted collections.

Each collection is stored as a UTF-8 JSON array of objects.  Field tags are
part of the stored format and must not change::

    team members: {"id", "name", "position", "jerseyNumber", "attendance"}
    games:        {"id", "opponent", "date", "location", "result", "notes"}

Dates are written as ISO-8601 text.  On read, numeric timestamps counted in
seconds from 2001-01-01T00:00:00Z are accepted as well, which is how data
written by the original mobile app encodes them.

Decoding never raises: absent or malformed input yields an empty list and a
warning in the log.  One bad record discards the whole collection.
"""
import datetime
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .models import Game, TeamMember

_log = logging.getLogger('team_manager.codec')

REFERENCE_DATE = datetime.datetime(2001, 1, 1, tzinfo=datetime.timezone.utc)


class DecodeError(ValueError):
    """A stored record does not match the expected shape."""


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def encode_date(value: datetime.datetime) -> str:
    return value.isoformat()


def decode_date(raw: Any) -> datetime.datetime:
    """Parse an ISO-8601 string or a reference-date offset in seconds."""
    if isinstance(raw, bool):
        raise DecodeError(f"not a date: {raw!r}")
    if isinstance(raw, (int, float)):
        try:
            return REFERENCE_DATE + datetime.timedelta(seconds=raw)
        except (OverflowError, ValueError) as exc:
            raise DecodeError(f"date out of range: {raw!r}") from exc
    if isinstance(raw, str):
        try:
            value = datetime.datetime.fromisoformat(raw.replace('Z', '+00:00'))
        except ValueError as exc:
            raise DecodeError(f"not a date: {raw!r}") from exc
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        return value
    raise DecodeError(f"not a date: {raw!r}")


def _text(record: Dict, tag: str) -> str:
    if tag not in record:
        raise DecodeError(f"missing field {tag!r}")
    value = record[tag]
    if not isinstance(value, str):
        raise DecodeError(f"field {tag!r} is not text")
    return value


# ---------------------------------------------------------------------------
# Record mapping
# ---------------------------------------------------------------------------

def team_member_to_dict(member: TeamMember) -> Dict:
    return {
        'id': member.id,
        'name': member.name,
        'position': member.position,
        'jerseyNumber': member.jersey_number,
        'attendance': [encode_date(d) for d in member.attendance],
    }


def team_member_from_dict(record: Dict) -> TeamMember:
    if not isinstance(record, dict):
        raise DecodeError("team member record is not an object")
    attendance = record.get('attendance')
    if not isinstance(attendance, list):
        raise DecodeError("field 'attendance' is not a list")
    return TeamMember(
        id=_text(record, 'id'),
        name=_text(record, 'name'),
        position=_text(record, 'position'),
        jersey_number=_text(record, 'jerseyNumber'),
        attendance=tuple(decode_date(d) for d in attendance),
    )


def game_to_dict(game: Game) -> Dict:
    return {
        'id': game.id,
        'opponent': game.opponent,
        'date': encode_date(game.date),
        'location': game.location,
        'result': game.result,
        'notes': game.notes,
    }


def game_from_dict(record: Dict) -> Game:
    if not isinstance(record, dict):
        raise DecodeError("game record is not an object")
    if 'date' not in record:
        raise DecodeError("missing field 'date'")
    return Game(
        id=_text(record, 'id'),
        opponent=_text(record, 'opponent'),
        date=decode_date(record['date']),
        location=_text(record, 'location'),
        result=_text(record, 'result'),
        notes=_text(record, 'notes'),
    )


# ---------------------------------------------------------------------------
# Collection codec
# ---------------------------------------------------------------------------

def _encode(records: Sequence, to_dict: Callable[[Any], Dict]) -> bytes:
    return json.dumps([to_dict(r) for r in records], ensure_ascii=False).encode('utf-8')


def _decode(raw: Optional[Union[bytes, str]], from_dict: Callable[[Dict], Any],
            label: str) -> List:
    if raw is None:
        return []
    try:
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8')
        payload = json.loads(raw)
        if not isinstance(payload, list):
            raise DecodeError(f"expected a JSON array, got {type(payload).__name__}")
        return [from_dict(record) for record in payload]
    except (ValueError, RecursionError) as exc:
        _log.warning("Discarding stored %s: %s", label, exc)
        return []


def encode_team_members(members: Sequence[TeamMember]) -> bytes:
    """Encode *members* as a UTF-8 JSON array."""
    return _encode(members, team_member_to_dict)


def decode_team_members(raw: Optional[Union[bytes, str]]) -> List[TeamMember]:
    """Decode stored team members; returns ``[]`` for absent or malformed input."""
    return _decode(raw, team_member_from_dict, 'team members')


def encode_games(games: Sequence[Game]) -> bytes:
    """Encode *games* as a UTF-8 JSON array."""
    return _encode(games, game_to_dict)


def decode_games(raw: Optional[Union[bytes, str]]) -> List[Game]:
    """Decode stored games; returns ``[]`` for absent or malformed input."""
    return _decode(raw, game_from_dict, 'games')
