"""
Domain models for the roster and the game list.
"""

import datetime
import uuid
from dataclasses import dataclass, field
from typing import Tuple

RESULT_CHOICES = ('Win', 'Loss', 'Draw', 'Pending')
DEFAULT_RESULT = 'Win'


def new_identity() -> str:
    """Return a fresh identity token (upper-case UUID4 string)."""
    return str(uuid.uuid4()).upper()


def as_utc(value: datetime.datetime) -> datetime.datetime:
    """Attach UTC to a naive datetime; aware datetimes are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


@dataclass(frozen=True)
class TeamMember:
    """A player on the roster.

    ``attendance`` is reserved: nothing records attendance yet, but the tuple
    is carried through edits and storage so existing data is never lost.
    """
    name: str
    position: str
    jersey_number: str  # free text, e.g. "07"
    attendance: Tuple[datetime.datetime, ...] = ()
    id: str = field(default_factory=new_identity)

    def __post_init__(self):
        # frozen dataclass => use object.__setattr__
        object.__setattr__(self, 'attendance', tuple(as_utc(d) for d in self.attendance))


@dataclass(frozen=True)
class Game:
    """A single game, past or upcoming."""
    opponent: str
    date: datetime.datetime
    location: str
    result: str = DEFAULT_RESULT  # conventionally one of RESULT_CHOICES
    notes: str = ''
    id: str = field(default_factory=new_identity)

    def __post_init__(self):
        object.__setattr__(self, 'date', as_utc(self.date))
