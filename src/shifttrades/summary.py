"""Per-person reconciliation of trades, plus the filtering/sorting used by the dashboard."""
from datetime import date
from functools import reduce
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .schema import PersonSummary, Trade

# name -> (hours worked for others, hours others worked for them)
Balances = Dict[str, Tuple[float, float]]


def _add_trade(balances: Balances, trade: Trade) -> Balances:
    out = dict(balances)
    out.setdefault(trade.person1, (0.0, 0.0))
    out.setdefault(trade.person2, (0.0, 0.0))
    you, they = out[trade.person1]
    out[trade.person1] = (you + trade.hours, they)
    you, they = out[trade.person2]
    out[trade.person2] = (you, they + trade.hours)
    return out


def summarize(trades: Iterable[Trade]) -> List[PersonSummary]:
    """One PersonSummary per distinct name, in order of first appearance.

    person1 worked `hours` for person2, so the hours count towards person1's
    you_worked and person2's they_worked. Totals across the result sum to zero.
    """
    balances = reduce(_add_trade, trades, {})
    return [
        PersonSummary(
            name=name,
            you_worked=round(you, 2),
            they_worked=round(they, 2),
            total=round(you - they, 2),
        )
        for name, (you, they) in balances.items()
    ]


def sort_summary(summaries: Iterable[PersonSummary]) -> List[PersonSummary]:
    """Largest balance first; equal balances by name."""
    return sorted(summaries, key=lambda s: (-s.total, s.name))


def select_summary(summaries: Iterable[PersonSummary], names: Optional[Iterable[str]] = None) -> List[PersonSummary]:
    """Keep the rows for `names` without recomputing them.

    Pass the summary of the full trade set, so a balance still counts trades
    with people outside the selection.
    None, an empty list or 'all' keeps every row.
    """
    wanted = {n.strip().upper() for n in (names or []) if n and n.strip()}
    if not wanted or 'ALL' in wanted:
        return list(summaries)
    return [s for s in summaries if s.name in wanted]


def person_names(trades: Iterable[Trade]) -> List[str]:
    names = set()
    for t in trades:
        names.add(t.person1)
        names.add(t.person2)
    return sorted(names)


def _as_iso(value: Union[str, date, None]) -> Optional[str]:
    if value is None or value == '':
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def filter_trades(
    trades: Iterable[Trade],
    name: Optional[str] = None,
    start_date: Union[str, date, None] = None,
    end_date: Union[str, date, None] = None,
    query: Optional[str] = None,
) -> List[Trade]:
    """Filter trades by participant, inclusive ISO date range and free-text search."""
    out = list(trades)
    if name and name.lower() != 'all':
        wanted = name.strip().upper()
        out = [t for t in out if wanted in (t.person1, t.person2)]

    # ISO dates compare correctly as strings
    start = _as_iso(start_date)
    end = _as_iso(end_date)
    if start:
        out = [t for t in out if t.date >= start]
    if end:
        out = [t for t in out if t.date <= end]

    if query and query.strip():
        q = query.strip().lower()
        out = [
            t for t in out
            if q in t.person1.lower()
            or q in t.person2.lower()
            or q in t.date.lower()
            or q in f'{t.hours:g}'
        ]
    return out


SORT_FIELDS = ('person1', 'date', 'hours', 'person2')


def sort_trades(trades: Iterable[Trade], field: str = 'date', descending: bool = True) -> List[Trade]:
    if field not in SORT_FIELDS:
        raise ValueError(f'cannot sort trades by {field!r}; choose one of {", ".join(SORT_FIELDS)}')
    return sorted(trades, key=lambda t: getattr(t, field), reverse=descending)
