"""Locate the trade fields inside a raw row.

Two strategies share one interface (`resolve(row) -> ResolvedFields`):

- `PositionalColumnResolver` reads fixed spreadsheet columns E, F, G, H and K.
- `HeaderColumnResolver` matches a header row against synonym lists, so
  'Employee 1 Name' or 'Shift Date' are found without exact spelling.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from .errors import MissingRequiredColumns

logger = logging.getLogger(__name__)


class ColumnMode(str, Enum):
    POSITIONAL = 'positional'
    HEADER = 'header'

    @classmethod
    def parse(cls, value) -> 'ColumnMode':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown column mode {value!r}; expected 'positional' or 'header'")


@dataclass(frozen=True)
class ResolvedFields:
    person_a: Any = ''
    person_b: Any = ''
    date: Any = ''
    start: Any = ''
    end: Any = ''
    hours: Any = ''


def _cell(row: Sequence[Any], index: Optional[int]) -> Any:
    if index is None or index >= len(row):
        return ''
    return row[index]


# column letters E, F, G, H, K
POSITIONAL_COLUMNS = {
    'person_a': 4,
    'date': 5,
    'start': 6,
    'end': 7,
    'person_b': 10,
}


class PositionalColumnResolver:
    mode = ColumnMode.POSITIONAL

    def __init__(self, columns: Dict[str, int] = None):
        self.columns = dict(POSITIONAL_COLUMNS if columns is None else columns)

    def resolve(self, row: Sequence[Any]) -> ResolvedFields:
        return ResolvedFields(**{f: _cell(row, i) for f, i in self.columns.items()})


# ordered by priority; the first synonym found in any header wins
FIELD_SYNONYMS: List[Tuple[str, List[str]]] = [
    ('person_a', ['person 1', 'person1', 'name1', 'employee1', 'from', 'employee']),
    ('person_b', ['person 2', 'person2', 'name2', 'employee2', 'to', 'partner']),
    ('date', ['trade date', 'date', 'shift date']),
    ('start', ['trade start time', 'start time', 'start', 'time start']),
    ('end', ['trade end time', 'end time', 'end', 'time end']),
    ('hours', ['hours', 'hour', 'duration']),
]

REQUIRED_FIELDS = {
    'person_a': 'Person 1',
    'person_b': 'Person 2',
    'date': 'Date',
}


def normalize_header(header: Any) -> str:
    if header is None:
        return ''
    return str(header).strip().lower()


def match_header(headers: Sequence[str], synonyms: Sequence[str]) -> Optional[int]:
    """Index of the first header equal to or containing a synonym, trying synonyms in order."""
    for name in synonyms:
        for i, header in enumerate(headers):
            if header == name or name in header:
                return i
    return None


class HeaderColumnResolver:
    mode = ColumnMode.HEADER

    def __init__(self, headers: Sequence[Any], columns: Dict[str, Optional[int]]):
        self.headers = list(headers)
        self.columns = columns

    @classmethod
    def from_headers(cls, headers: Sequence[Any]) -> 'HeaderColumnResolver':
        normalized = [normalize_header(h) for h in headers]
        columns = {field: match_header(normalized, synonyms) for field, synonyms in FIELD_SYNONYMS}
        missing = [label for field, label in REQUIRED_FIELDS.items() if columns[field] is None]
        if missing:
            raise MissingRequiredColumns(missing)
        logger.debug(
            "header columns resolved: %s",
            {f: (None if i is None else headers[i]) for f, i in columns.items()},
        )
        return cls(headers, columns)

    def resolve(self, row: Sequence[Any]) -> ResolvedFields:
        return ResolvedFields(**{f: _cell(row, i) for f, i in self.columns.items()})


def make_resolver(mode, headers: Sequence[Any] = None):
    mode = ColumnMode.parse(mode)
    if mode is ColumnMode.POSITIONAL:
        return PositionalColumnResolver()
    return HeaderColumnResolver.from_headers(headers or [])
