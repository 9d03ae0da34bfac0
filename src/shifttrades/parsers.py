"""Row validation and trade building for the three input shapes.

- `parse_grid`: raw cell grid from a workbook/CSV (positional or header mode)
- `parse_records`: header-keyed row dicts
- `parse_pasted_text`: tab- or comma-delimited text pasted by the user

Row problems never raise; a row is either accepted or skipped. Only an empty
batch (`EmptyInput`, `NoValidRows`) or an unusable header (`MissingRequiredColumns`)
rejects the whole input.
"""
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
import csv
import logging
import math
import re
import uuid

from .columns import ColumnMode, HeaderColumnResolver, make_resolver
from .errors import EmptyInput, NoValidRows
from .schema import Trade
from .utils import (
    MAX_SHIFT_HOURS,
    is_blank,
    normalize_date,
    normalize_name,
    parse_hours_value,
    shift_hours,
)

logger = logging.getLogger(__name__)

_HEADER_DATE_RE = re.compile(r"^[A-Za-z\s]+$")


class RowStatus(str, Enum):
    ACCEPTED = 'accepted'
    SKIPPED_HEADER = 'skipped_header'
    SKIPPED_INVALID = 'skipped_invalid'


def looks_like_header(date_value: Any) -> bool:
    # a date cell made only of letters is a repeated header row ('Trade Date')
    return isinstance(date_value, str) and bool(_HEADER_DATE_RE.match(date_value.strip()))


def _row_hours(fields) -> Optional[float]:
    if not is_blank(fields.start) and not is_blank(fields.end):
        return shift_hours(fields.start, fields.end)
    return parse_hours_value(fields.hours)


def build_trade(row: Sequence[Any], resolver) -> Tuple[RowStatus, Optional[Trade]]:
    """Validate one raw row and build a Trade from it.

    Returns (status, trade); trade is None unless status is ACCEPTED.
    """
    if not row or all(is_blank(c) for c in row):
        return RowStatus.SKIPPED_INVALID, None

    fields = resolver.resolve(row)
    if looks_like_header(fields.date):
        return RowStatus.SKIPPED_HEADER, None

    person1 = normalize_name(fields.person_a)
    person2 = normalize_name(fields.person_b)
    if not person1 or not person2 or is_blank(fields.date):
        return RowStatus.SKIPPED_INVALID, None

    hours = _row_hours(fields)
    if hours is None or not math.isfinite(hours) or hours <= 0:
        return RowStatus.SKIPPED_INVALID, None

    trade = Trade(
        id=str(uuid.uuid4()),
        person1=person1,
        date=normalize_date(fields.date),
        hours=round(min(hours, MAX_SHIFT_HOURS), 2),
        person2=person2,
    )
    return RowStatus.ACCEPTED, trade


def build_trades(rows: Iterable[Sequence[Any]], resolver) -> List[Trade]:
    """Run every row through `build_trade`, keeping input order. Raises NoValidRows if none survive."""
    trades: List[Trade] = []
    counts = {status: 0 for status in RowStatus}
    for idx, row in enumerate(rows):
        status, trade = build_trade(row, resolver)
        counts[status] += 1
        if trade is not None:
            trades.append(trade)
        else:
            logger.debug("row %d %s", idx + 1, status.value)

    logger.info(
        "%s mode: %d accepted, %d header rows skipped, %d invalid rows skipped",
        resolver.mode.value,
        counts[RowStatus.ACCEPTED],
        counts[RowStatus.SKIPPED_HEADER],
        counts[RowStatus.SKIPPED_INVALID],
    )
    if not trades:
        raise NoValidRows()
    return trades


def _first_nonblank_index(grid: Sequence[Sequence[Any]]) -> Optional[int]:
    for i, row in enumerate(grid):
        if row and not all(is_blank(c) for c in row):
            return i
    return None


def parse_grid(grid: Sequence[Sequence[Any]], mode=ColumnMode.POSITIONAL) -> List[Trade]:
    """Parse a 2-D grid of cell values.

    Positional mode reads every row (header rows are dropped by the header check);
    header mode takes the first non-blank row as the header.
    """
    mode = ColumnMode.parse(mode)
    start = _first_nonblank_index(grid)
    if start is None:
        raise EmptyInput()

    if mode is ColumnMode.POSITIONAL:
        return build_trades(grid, make_resolver(mode))

    resolver = HeaderColumnResolver.from_headers(grid[start])
    # a header with no data rows is a batch with nothing accepted
    return build_trades(grid[start + 1:], resolver)


def parse_records(records: Sequence[Dict[str, Any]]) -> List[Trade]:
    """Parse header-keyed rows, e.g. `DataFrame.to_dict('records')`."""
    if not records:
        raise EmptyInput()
    headers: List[str] = []
    for rec in records:
        for key in rec.keys():
            if key not in headers:
                headers.append(key)
    resolver = HeaderColumnResolver.from_headers(headers)
    rows = [[rec.get(h, '') for h in headers] for rec in records]
    return build_trades(rows, resolver)


def split_pasted_text(text: str) -> List[List[str]]:
    """Split pasted text into trimmed cells: tab-delimited if any line has a tab, else comma.

    Each line is read on its own so an unbalanced quote cannot swallow the lines after it.
    """
    lines = text.splitlines()
    delimiter = '\t' if any('\t' in line for line in lines) else ','
    rows = [next(csv.reader([line], delimiter=delimiter), []) for line in lines]
    return [[cell.strip() for cell in row] for row in rows]


def parse_pasted_text(text: str, mode=ColumnMode.POSITIONAL) -> List[Trade]:
    if text is None or not str(text).strip():
        raise EmptyInput("No data provided")
    return parse_grid(split_pasted_text(str(text)), mode)
